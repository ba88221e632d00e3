from django.apps import AppConfig
from django.core import checks


class PopupNotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "popup_notifications"
    verbose_name = "Popup notifications"

    def ready(self):
        from .checks import check_delay_setting, check_translation_backend

        checks.register(check_translation_backend, checks.Tags.compatibility)
        checks.register(check_delay_setting, checks.Tags.compatibility)
