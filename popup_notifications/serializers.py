from rest_framework import serializers

from .document import Notification, Settings


class NotificationPayloadSerializer(serializers.Serializer):
    enabled = serializers.BooleanField(required=False, default=False)
    title = serializers.CharField(required=False, allow_blank=True, default="", trim_whitespace=False)
    content = serializers.CharField(required=False, allow_blank=True, default="", trim_whitespace=False)
    buttonText = serializers.CharField(required=False, allow_blank=True, default="", trim_whitespace=False)
    showDelayMs = serializers.IntegerField(required=False, allow_null=True, default=None)


class SettingsPayloadSerializer(serializers.Serializer):
    """Shape check for the admin save payload; sanitizing happens in the service."""

    enabled = serializers.BooleanField(required=False, default=False)
    translationEnabled = serializers.BooleanField(required=False, default=False)
    # a full replace, so the mapping must be sent even when empty
    notifications = serializers.DictField(child=NotificationPayloadSerializer())

    def to_settings(self) -> Settings:
        data = self.validated_data
        # Built from the payload alone: ids not sent are dropped from the document.
        return Settings(
            enabled=data["enabled"],
            translation_enabled=data["translationEnabled"],
            notifications={
                nid: Notification(
                    id=nid,
                    enabled=item["enabled"],
                    title=item["title"],
                    content=item["content"],
                    button_text=item["buttonText"],
                    show_delay_ms=item["showDelayMs"],
                )
                for nid, item in data["notifications"].items()
            },
        )
