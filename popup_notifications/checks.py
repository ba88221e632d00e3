from django.core.checks import Error
from django.utils.module_loading import import_string

from .conf import get_setting


def check_translation_backend(app_configs=None, **kwargs):
    path = get_setting("TRANSLATION_BACKEND")
    if not path:
        return []
    try:
        import_string(path)
    except ImportError as exc:
        return [
            Error(
                f"POPUP_NOTIFICATIONS['TRANSLATION_BACKEND'] cannot be imported: {exc}",
                hint="Set it to a dotted path of a TranslationBackend subclass, or to None.",
                id="popup_notifications.E001",
            )
        ]
    return []


def check_delay_setting(app_configs=None, **kwargs):
    value = get_setting("DEFAULT_SHOW_DELAY_MS")
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return [
            Error(
                "POPUP_NOTIFICATIONS['DEFAULT_SHOW_DELAY_MS'] must be a non-negative integer.",
                id="popup_notifications.E002",
            )
        ]
    return []
