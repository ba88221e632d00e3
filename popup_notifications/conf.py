# popup_notifications/conf.py
from __future__ import annotations

from typing import Any

from django.conf import settings

DEFAULTS = {
    "STORE_KEY": "popup_notifications_settings",
    "DEFAULT_SHOW_DELAY_MS": 120000,  # 2 minutes
    "DISMISSAL_MAX_AGE_DAYS": 30,
    "HIDE_ANIMATION_MS": 350,
    "TRANSLATION_BACKEND": None,  # e.g. "popup_notifications.translation.GettextTranslationBackend"
    "TRANSLATION_DOMAIN": "popup-notifications",
    "CACHE_TIMEOUT": 60,
}


def get_setting(name: str) -> Any:
    """
    Read one option from settings.POPUP_NOTIFICATIONS, falling back to DEFAULTS.
    Looked up on every call so override_settings() works in tests.
    """
    overrides = getattr(settings, "POPUP_NOTIFICATIONS", None) or {}
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]
