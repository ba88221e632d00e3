"""
Tests for the seed/purge management commands and the system checks
"""

from io import StringIO
from unittest.mock import patch

from django.core.management import call_command
from django.test import TestCase, override_settings

from popup_notifications.checks import check_delay_setting, check_translation_backend
from popup_notifications.document import Settings
from popup_notifications.services import SettingsService
from preferences.models import SiteSetting

STORE_KEY = "popup_notifications_settings"


class TestSeedCommand(TestCase):
    def test_existing_document_is_kept(self):
        SettingsService().save(Settings(enabled=False))
        out = StringIO()
        call_command("seed_popup_notifications", stdout=out)
        self.assertIn("nothing changed", out.getvalue())
        self.assertFalse(SettingsService().load().enabled)

    def test_seeds_when_absent(self):
        SiteSetting.objects.filter(key=STORE_KEY).delete()
        out = StringIO()
        call_command("seed_popup_notifications", stdout=out)
        self.assertIn("seeded", out.getvalue())
        self.assertEqual(SettingsService().load(), Settings.defaults())

    def test_force_overwrites(self):
        SettingsService().save(Settings(enabled=False))
        call_command("seed_popup_notifications", "--force", stdout=StringIO())
        self.assertTrue(SettingsService().load().enabled)


class TestPurgeCommand(TestCase):
    def test_noinput_removes_document(self):
        out = StringIO()
        call_command("purge_popup_notifications", "--noinput", stdout=out)
        self.assertIn("removed", out.getvalue())
        self.assertFalse(SiteSetting.objects.filter(key=STORE_KEY).exists())

    def test_prompt_can_abort(self):
        out = StringIO()
        with patch("builtins.input", return_value="no"):
            call_command("purge_popup_notifications", stdout=out)
        self.assertIn("Aborted", out.getvalue())
        self.assertTrue(SiteSetting.objects.filter(key=STORE_KEY).exists())

    def test_nothing_to_remove(self):
        SiteSetting.objects.filter(key=STORE_KEY).delete()
        out = StringIO()
        call_command("purge_popup_notifications", "--noinput", stdout=out)
        self.assertIn("No popup notifications settings", out.getvalue())


class TestChecks(TestCase):
    def test_no_backend_is_fine(self):
        self.assertEqual(check_translation_backend(), [])

    @override_settings(POPUP_NOTIFICATIONS={"TRANSLATION_BACKEND": "tests.backends.UppercaseBackend"})
    def test_importable_backend_is_fine(self):
        self.assertEqual(check_translation_backend(), [])

    @override_settings(POPUP_NOTIFICATIONS={"TRANSLATION_BACKEND": "tests.backends.Missing"})
    def test_missing_backend_is_reported(self):
        errors = check_translation_backend()
        self.assertEqual([e.id for e in errors], ["popup_notifications.E001"])

    @override_settings(POPUP_NOTIFICATIONS={"DEFAULT_SHOW_DELAY_MS": -1})
    def test_negative_default_delay_is_reported(self):
        self.assertEqual([e.id for e in check_delay_setting()], ["popup_notifications.E002"])

    def test_default_delay_is_fine(self):
        self.assertEqual(check_delay_setting(), [])
