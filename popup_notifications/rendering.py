"""
Per-request output of the popup blocks and the client payload.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from django.middleware.csrf import get_token
from django.template.loader import render_to_string
from django.urls import reverse
from django.utils.safestring import mark_safe

from .conf import get_setting
from .dismissals import is_dismissed, request_sources
from .document import Settings
from .exceptions import PersistenceError
from .sanitize import sanitize_rich_text, sanitize_text

logger = logging.getLogger("popups")

PAYLOAD_ELEMENT_ID = "popup-notifications-config"


def build_payload(request, settings: Settings) -> Dict[str, Any]:
    document = settings.to_dict()
    # translated texts have not been through the save-time filters
    for item in document["notifications"].values():
        item["title"] = sanitize_text(item["title"])
        item["content"] = sanitize_rich_text(item["content"])
        item["buttonText"] = sanitize_text(item["buttonText"])
    return {
        "settingsEnabled": settings.enabled,
        "antiForgeryToken": get_token(request),
        "endpointUrl": reverse("popup_notifications:ajax"),
        "settings": document,
        "hideAnimationMs": get_setting("HIDE_ANIMATION_MS"),
        "dismissalMaxAgeDays": get_setting("DISMISSAL_MAX_AGE_DAYS"),
        "defaultShowDelayMs": get_setting("DEFAULT_SHOW_DELAY_MS"),
    }


class PopupRenderer:
    template_name = "popup_notifications/notifications.html"

    def __init__(self, service):
        self.service = service

    def get_context(self, request) -> Dict[str, Any]:
        try:
            settings = self.service.load()
        except PersistenceError:
            logger.warning("popups.render skipped: settings unavailable")
            return {"popups_enabled": False}

        if not settings.enabled:
            return {"popups_enabled": False}

        sources = request_sources(request)
        blocks = [
            {
                "id": n.id,
                "title": n.title,
                "content": mark_safe(sanitize_rich_text(n.content)),
                "button_text": n.button_text,
            }
            for n in settings.enabled_notifications()
            if not is_dismissed(n.id, sources)
        ]
        return {
            "popups_enabled": True,
            "notifications": blocks,
            "payload": build_payload(request, settings),
            "payload_element_id": PAYLOAD_ELEMENT_ID,
        }

    def render(self, request) -> str:
        return render_to_string(self.template_name, self.get_context(request), request=request)
