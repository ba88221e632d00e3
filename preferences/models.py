# preferences/models.py
from django.db import models


class SiteSetting(models.Model):
    """
    Simple key/value store for site-wide options.
    The value is wrapped as {"v": <payload>} so any JSON type can be stored.
    Keys in use:
      - popup_notifications_settings  (the whole popup settings document)
    """

    key = models.CharField(max_length=64, unique=True)
    value = models.JSONField(default=dict, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.key
