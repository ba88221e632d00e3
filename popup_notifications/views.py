import json
import logging
from functools import wraps

from django.contrib.auth.decorators import login_required, user_passes_test
from django.http import JsonResponse
from django.shortcuts import render
from django.urls import reverse
from django.views.csrf import csrf_failure as default_csrf_failure
from django.views.decorators.csrf import csrf_protect
from django.views.decorators.http import require_POST

from .conf import get_setting
from .dismissals import record_dismissal
from .document import is_valid_notification_id
from .exceptions import AuthorizationError, PopupNotificationsError, ValidationError
from .forms import GeneralSettingsForm, NotificationSettingsForm
from .permissions import can_manage_popups
from .sanitize import sanitize_text
from .serializers import SettingsPayloadSerializer
from .services import get_settings_service

logger = logging.getLogger("popups")

ACTION_TYPES = {"accept", "dismiss"}


def json_endpoint(view):
    """Turn PopupNotificationsError into the {"success": false, ...} JSON shape."""

    @wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except PopupNotificationsError as exc:
            body = {"success": False, "message": str(exc)}
            if isinstance(exc, ValidationError) and exc.errors:
                body["errors"] = exc.errors
            return JsonResponse(body, status=exc.status_code)

    return wrapper


def _request_data(request):
    """Form-encoded or JSON body, as a plain dict."""
    if request.content_type == "application/json":
        try:
            data = json.loads(request.body or b"{}")
        except ValueError as exc:
            raise ValidationError("Malformed JSON body.") from exc
        if not isinstance(data, dict):
            raise ValidationError("Expected a JSON object.")
        return data
    return request.POST.dict()


# ----- actions -----
def dismiss_notification(request, data):
    notification_id = sanitize_text(data.get("notificationId"))
    if not notification_id:
        raise ValidationError("Notification id is missing.")
    if not is_valid_notification_id(notification_id):
        raise ValidationError("Notification id is malformed.")

    action_type = sanitize_text(data.get("actionType")) or "dismiss"
    if action_type not in ACTION_TYPES:
        logger.warning("popups.dismiss unknown actionType=%s id=%s", action_type, notification_id)
        action_type = "dismiss"

    logger.info("popups.dismiss id=%s action=%s", notification_id, action_type)
    response = JsonResponse({"success": True, "message": "Notification dismissed."})
    record_dismissal(response, notification_id)
    return response


def save_settings(request, data):
    if not can_manage_popups(request.user):
        raise AuthorizationError("Insufficient privileges to save settings.")
    if request.content_type != "application/json":
        # nested notification fields have no flat form encoding
        raise ValidationError("Settings must be sent as a JSON body.")

    serializer = SettingsPayloadSerializer(data=data)
    if not serializer.is_valid():
        raise ValidationError("Invalid settings payload.", errors=serializer.errors)

    get_settings_service().save(serializer.to_settings())
    return JsonResponse({"success": True, "message": "Settings saved."})


ACTIONS = {
    "dismiss_notification": dismiss_notification,
    "save_settings": save_settings,
}


@csrf_protect
@require_POST
@json_endpoint
def ajax(request):
    """Single entry point for the client script and the admin page, keyed by `action`."""
    data = _request_data(request)
    handler = ACTIONS.get(data.get("action"))
    if handler is None:
        raise ValidationError("Unknown action.")
    return handler(request, data)


def csrf_failure(request, reason=""):
    """
    CSRF_FAILURE_VIEW: the popup endpoint answers in its own JSON shape,
    every other path keeps Django's default page.
    """
    if request.path == reverse("popup_notifications:ajax"):
        logger.warning("popups.csrf rejected reason=%s", reason)
        return JsonResponse(
            {"success": False, "message": "Invalid or missing security token."}, status=403
        )
    return default_csrf_failure(request, reason=reason)


# ----- admin page -----
@login_required
@user_passes_test(can_manage_popups)
def settings_page(request):
    service = get_settings_service()
    settings = service.load(translate=False)
    return render(
        request,
        "popup_notifications/admin_settings.html",
        {
            "title": "Popup Notifications",
            "general_form": GeneralSettingsForm.for_settings(settings),
            "notification_forms": [
                (n.id, NotificationSettingsForm.for_notification(n))
                for n in settings.notifications.values()
            ],
            "translation_available": service.translator is not None,
            "endpoint_url": reverse("popup_notifications:ajax"),
            "default_delay_seconds": get_setting("DEFAULT_SHOW_DELAY_MS") // 1000,
        },
    )
