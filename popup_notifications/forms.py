from django import forms

from .document import Notification, Settings


class GeneralSettingsForm(forms.Form):
    enabled = forms.BooleanField(required=False, label="Show popup notifications")
    translation_enabled = forms.BooleanField(
        required=False, label="Translate notification texts"
    )

    @classmethod
    def for_settings(cls, settings: Settings):
        return cls(
            initial={
                "enabled": settings.enabled,
                "translation_enabled": settings.translation_enabled,
            }
        )


class NotificationSettingsForm(forms.Form):
    enabled = forms.BooleanField(required=False, label="Show this notification")
    title = forms.CharField(required=False, max_length=200, label="Title")
    content = forms.CharField(
        required=False, widget=forms.Textarea(attrs={"rows": 4}), label="Content"
    )
    button_text = forms.CharField(required=False, max_length=100, label="Button text")
    show_delay_seconds = forms.IntegerField(
        min_value=0,
        label="Show delay (seconds)",
        help_text="Time to wait after page load before the notification appears.",
    )

    @classmethod
    def for_notification(cls, notification: Notification):
        # prefix keeps field names unique per notification: "<id>-title", ...
        return cls(
            prefix=notification.id,
            initial={
                "enabled": notification.enabled,
                "title": notification.title,
                "content": notification.content,
                "button_text": notification.button_text,
                "show_delay_seconds": notification.show_delay_ms // 1000,
            },
        )
