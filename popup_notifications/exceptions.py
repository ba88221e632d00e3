class PopupNotificationsError(Exception):
    """Base class for errors surfaced to endpoint callers."""

    status_code = 500
    default_message = "Popup notifications error."

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class AuthorizationError(PopupNotificationsError):
    status_code = 403
    default_message = "You are not allowed to do this."


class ValidationError(PopupNotificationsError):
    status_code = 400
    default_message = "Invalid request."

    def __init__(self, message=None, errors=None):
        super().__init__(message)
        self.errors = errors or {}


class PersistenceError(PopupNotificationsError):
    status_code = 500
    default_message = "Settings storage is unavailable."


class TranslationError(PopupNotificationsError):
    """Raised by translation backends; never escapes the settings service."""

    default_message = "Translation lookup failed."
