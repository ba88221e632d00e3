"""
Tests for the page output: popup blocks and the client payload
"""

from unittest.mock import patch

from django.template import Context, Template
from django.test import RequestFactory, TestCase, override_settings

from popup_notifications.document import Notification, Settings
from popup_notifications.exceptions import PersistenceError
from popup_notifications.rendering import PopupRenderer
from popup_notifications.services import SettingsService
from preferences.utils import put_site_setting

from .helpers import block_ids, extract_payload


class TestRenderedPage(TestCase):
    def page(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        return response.content.decode()

    def test_seeded_notifications_are_emitted_hidden(self):
        html = self.page()
        self.assertEqual(block_ids(html), ["notification_1", "notification_2"])
        self.assertIn('data-id="notification_1" hidden', html)
        self.assertIn('<h5 class="popup-notification-title">Welcome!</h5>', html)
        self.assertIn('data-action="accept">Got it</button>', html)
        self.assertIn('data-action="dismiss"', html)
        self.assertIn("popup_notifications/js/popups.js", html)

    def test_payload(self):
        payload = extract_payload(self.page())
        self.assertTrue(payload["settingsEnabled"])
        self.assertTrue(payload["antiForgeryToken"])
        self.assertEqual(payload["endpointUrl"], "/popups/ajax/")
        self.assertEqual(payload["hideAnimationMs"], 350)
        self.assertEqual(payload["dismissalMaxAgeDays"], 30)
        self.assertEqual(payload["defaultShowDelayMs"], 120000)
        self.assertEqual(
            list(payload["settings"]["notifications"]), ["notification_1", "notification_2"]
        )
        self.assertEqual(payload["settings"]["notifications"]["notification_2"]["showDelayMs"], 120000)

    def test_disabled_notification_is_not_emitted(self):
        service = SettingsService()
        settings = service.load()
        settings.notifications["notification_1"].enabled = False
        service.save(settings)

        html = self.page()
        self.assertEqual(block_ids(html), ["notification_2"])
        # the client still receives the full document
        self.assertIn("notification_1", extract_payload(html)["settings"]["notifications"])

    def test_globally_disabled_emits_nothing(self):
        service = SettingsService()
        settings = service.load()
        settings.enabled = False
        service.save(settings)

        html = self.page()
        self.assertEqual(block_ids(html), [])
        self.assertIsNone(extract_payload(html))
        self.assertNotIn("popups.js", html)

    def test_dismissal_cookie_suppresses_block(self):
        self.client.cookies["dismissed_notification_2"] = "1"
        self.assertEqual(block_ids(self.page()), ["notification_1"])

    def test_optional_parts_are_omitted(self):
        SettingsService().save(
            Settings(notifications={"bare": Notification(id="bare", content="Just text")})
        )
        html = self.page()
        self.assertEqual(block_ids(html), ["bare"])
        self.assertNotIn("popup-notification-title", html)
        self.assertNotIn('data-action="accept"', html)
        self.assertIn("Just text", html)

    def test_content_is_sanitized_on_output(self):
        # written straight to the store, bypassing the service
        put_site_setting(
            "popup_notifications_settings",
            {"notifications": {"x": {"content": "<script>alert(1)</script><em>hi</em>"}}},
        )
        html = self.page()
        self.assertIn('<div class="popup-notification-text"><em>hi</em></div>', html)
        self.assertNotIn("<script>alert", html)

    def test_store_failure_renders_nothing(self):
        with patch.object(SettingsService, "load", side_effect=PersistenceError()):
            html = self.page()
        self.assertEqual(block_ids(html), [])
        self.assertIsNone(extract_payload(html))

    @override_settings(POPUP_NOTIFICATIONS={"TRANSLATION_BACKEND": "tests.backends.UppercaseBackend"})
    def test_translated_texts_are_rendered(self):
        service = SettingsService()
        settings = service.load(translate=False)
        settings.translation_enabled = True
        service.save(settings)

        html = self.page()
        self.assertIn("WELCOME!", html)
        self.assertEqual(
            extract_payload(html)["settings"]["notifications"]["notification_1"]["buttonText"],
            "GOT IT",
        )

    @override_settings(POPUP_NOTIFICATIONS={"TRANSLATION_BACKEND": "tests.backends.MarkupBackend"})
    def test_translated_texts_are_filtered_in_the_payload(self):
        service = SettingsService()
        settings = service.load(translate=False)
        settings.translation_enabled = True
        service.save(settings)

        html = self.page()
        item = extract_payload(html)["settings"]["notifications"]["notification_1"]
        self.assertEqual(item["content"], "<em>Thank you for visiting our site. We're glad to see you here!</em>")
        self.assertEqual(item["title"], 'alert("title_notification_1")Welcome!')
        self.assertNotIn("<script>", html)

    @override_settings(POPUP_NOTIFICATIONS={"TRANSLATION_BACKEND": "tests.backends.UnavailableBackend"})
    def test_unavailable_backend_is_ignored(self):
        service = SettingsService()
        settings = service.load()
        settings.translation_enabled = True
        service.save(settings)
        self.assertIn("Welcome!", self.page())


class TestRenderer(TestCase):
    def test_render_to_string(self):
        request = RequestFactory().get("/")
        html = PopupRenderer(SettingsService()).render(request)
        self.assertEqual(block_ids(html), ["notification_1", "notification_2"])

    def test_tag_without_request_renders_nothing(self):
        template = Template("{% load popup_notifications %}{% popup_notifications %}")
        self.assertEqual(template.render(Context({})).strip(), "")
