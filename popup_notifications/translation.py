"""
Pluggable translation capability.

A backend looks strings up by (domain, key, original text) and can be told
about new strings when an admin saves. Which backend is used, if any, is set
with POPUP_NOTIFICATIONS["TRANSLATION_BACKEND"].
"""
from __future__ import annotations

import logging
from typing import Optional

from django.utils.module_loading import import_string
from django.utils.translation import pgettext

from .conf import get_setting

logger = logging.getLogger("popups")

# Field name -> key prefix used for lookups and registration.
FIELD_KEYS = {
    "title": "title",
    "content": "content",
    "button_text": "button",
}


def field_key(field_name: str, notification_id: str) -> str:
    return f"{FIELD_KEYS[field_name]}_{notification_id}"


class TranslationBackend:
    def is_available(self) -> bool:
        return True

    def translate(self, domain: str, key: str, text: str) -> str:
        raise NotImplementedError

    def register(self, domain: str, key: str, text: str) -> None:
        raise NotImplementedError


class GettextTranslationBackend(TranslationBackend):
    """
    Looks strings up in the active gettext catalog, using the field key as the
    message context. New strings reach the catalog through `makemessages`, so
    registration only records them in the log.
    """

    def translate(self, domain: str, key: str, text: str) -> str:
        return pgettext(key, text)

    def register(self, domain: str, key: str, text: str) -> None:
        logger.debug("translation.register domain=%s key=%s", domain, key)


def load_backend(path: Optional[str] = None) -> Optional[TranslationBackend]:
    """
    Instantiate the configured backend, or None when translation is not set up
    or the backend reports itself unavailable.
    """
    path = path if path is not None else get_setting("TRANSLATION_BACKEND")
    if not path:
        return None
    backend = import_string(path)()
    if not backend.is_available():
        logger.info("translation backend %s is not available", path)
        return None
    return backend
