from django.db import migrations

from popup_notifications.conf import get_setting
from popup_notifications.document import DEFAULT_DOCUMENT, merge_with_defaults


def seed_settings(apps, schema_editor):
    SiteSetting = apps.get_model("preferences", "SiteSetting")
    SiteSetting.objects.get_or_create(
        key=get_setting("STORE_KEY"),
        defaults={"value": {"v": merge_with_defaults(DEFAULT_DOCUMENT)}},
    )


def remove_settings(apps, schema_editor):
    SiteSetting = apps.get_model("preferences", "SiteSetting")
    SiteSetting.objects.filter(key=get_setting("STORE_KEY")).delete()


class Migration(migrations.Migration):

    dependencies = [
        ("preferences", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_settings, remove_settings),
    ]
