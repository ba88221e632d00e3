from django.urls import path

from . import views

app_name = "popup_notifications"

urlpatterns = [
    path("ajax/", views.ajax, name="ajax"),
    path("settings/", views.settings_page, name="settings"),
]
