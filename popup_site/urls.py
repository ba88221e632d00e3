from django.contrib import admin
from django.urls import path, include
from django.views.generic import TemplateView


urlpatterns = [
    path("admin/", admin.site.urls),
    path(
        "popups/",
        include(("popup_notifications.urls", "popup_notifications"), namespace="popup_notifications"),
    ),
    path("", TemplateView.as_view(template_name="home.html"), name="home"),
]
