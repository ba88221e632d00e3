from django import template

from popup_notifications.rendering import PopupRenderer
from popup_notifications.services import get_settings_service

register = template.Library()


@register.inclusion_tag("popup_notifications/notifications.html", takes_context=True)
def popup_notifications(context):
    """
    Usage, near the end of <body>:
        {% load popup_notifications %}
        {% popup_notifications %}
    Needs the `request` context processor.
    """
    request = context.get("request")
    if request is None:
        return {"popups_enabled": False}
    return PopupRenderer(get_settings_service()).get_context(request)
