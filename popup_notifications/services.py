from __future__ import annotations

import logging
from typing import Any, Optional

from django.db import DatabaseError

from preferences.utils import (
    add_site_setting,
    delete_site_setting,
    get_site_setting,
    put_site_setting,
)

from .conf import get_setting
from .document import (
    DEFAULT_DOCUMENT,
    Notification,
    Settings,
    coerce_delay,
    is_valid_notification_id,
    merge_with_defaults,
)
from .exceptions import PersistenceError, ValidationError
from .sanitize import sanitize_rich_text, sanitize_text
from .translation import TranslationBackend, field_key, load_backend

logger = logging.getLogger("popups")


class SiteSettingStore:
    """The popup document lives under a single SiteSetting key."""

    def __init__(self, key: Optional[str] = None, timeout: Optional[int] = None):
        self.key = key or get_setting("STORE_KEY")
        self.timeout = timeout if timeout is not None else get_setting("CACHE_TIMEOUT")

    def read(self) -> Any:
        return get_site_setting(self.key, None, timeout=self.timeout)

    def write(self, document: dict) -> None:
        put_site_setting(self.key, document)

    def add(self, document: dict) -> bool:
        return add_site_setting(self.key, document)

    def delete(self) -> int:
        return delete_site_setting(self.key)


class SettingsService:
    def __init__(self, store=None, translator: Optional[TranslationBackend] = None):
        self.store = store or SiteSettingStore()
        self.translator = translator
        self.domain = get_setting("TRANSLATION_DOMAIN")

    # ----- reads -----
    def load(self, translate: bool = True) -> Settings:
        try:
            raw = self.store.read()
        except DatabaseError as exc:
            logger.exception("popups.load store read failed")
            raise PersistenceError("Could not read popup settings.") from exc

        settings = Settings.from_dict(merge_with_defaults(raw))
        if translate and settings.translation_enabled and self.translator is not None:
            self._apply_translations(settings)
        return settings

    def _apply_translations(self, settings: Settings) -> None:
        for notification in settings.notifications.values():
            for field_name in ("title", "content", "button_text"):
                original = getattr(notification, field_name)
                if not original:
                    continue
                key = field_key(field_name, notification.id)
                try:
                    translated = self.translator.translate(self.domain, key, original)
                except Exception:
                    logger.warning("popups.translate failed key=%s", key, exc_info=True)
                    continue
                if translated:
                    setattr(notification, field_name, translated)

    # ----- writes -----
    def save(self, settings: Settings) -> bool:
        """
        Sanitize and overwrite the stored document as a whole.
        The caller is responsible for checking admin privilege.
        """
        clean = self.sanitize(settings)
        try:
            self.store.write(clean.to_dict())
        except DatabaseError as exc:
            logger.exception("popups.save store write failed")
            raise PersistenceError("Could not save popup settings.") from exc

        logger.info(
            "popups.save enabled=%s notifications=%s",
            clean.enabled,
            ",".join(clean.notifications) or "-",
        )
        if clean.translation_enabled and self.translator is not None:
            self._register_strings(clean)
        return True

    def sanitize(self, settings: Settings) -> Settings:
        notifications = {}
        for raw_id, item in settings.notifications.items():
            nid = sanitize_text(raw_id)
            # ids are keys, so cleaning must not change them (or two could collide)
            if nid != raw_id or not is_valid_notification_id(nid):
                raise ValidationError(f"Invalid notification id: {raw_id!r}")
            notifications[nid] = Notification(
                id=nid,
                enabled=bool(item.enabled),
                title=sanitize_text(item.title),
                content=sanitize_rich_text(item.content),
                button_text=sanitize_text(item.button_text),
                show_delay_ms=coerce_delay(item.show_delay_ms),
            )
        return Settings(
            enabled=bool(settings.enabled),
            translation_enabled=bool(settings.translation_enabled),
            notifications=notifications,
        )

    def _register_strings(self, settings: Settings) -> None:
        for notification in settings.notifications.values():
            for field_name in ("title", "content", "button_text"):
                text = getattr(notification, field_name)
                if not text:
                    continue
                key = field_key(field_name, notification.id)
                try:
                    self.translator.register(self.domain, key, text)
                except Exception:
                    logger.warning("popups.register_string failed key=%s", key, exc_info=True)

    # ----- lifecycle -----
    def seed(self, force: bool = False) -> bool:
        """Store the default document. Without `force`, only when nothing is stored."""
        try:
            if force:
                self.store.write(merge_with_defaults(DEFAULT_DOCUMENT))
                return True
            return self.store.add(merge_with_defaults(DEFAULT_DOCUMENT))
        except DatabaseError as exc:
            logger.exception("popups.seed store write failed")
            raise PersistenceError("Could not seed popup settings.") from exc

    def purge(self) -> bool:
        try:
            return bool(self.store.delete())
        except DatabaseError as exc:
            logger.exception("popups.purge store delete failed")
            raise PersistenceError("Could not delete popup settings.") from exc


def get_translation_backend() -> Optional[TranslationBackend]:
    try:
        return load_backend()
    except ImportError:
        logger.exception("popups translation backend could not be imported")
        return None


def get_settings_service() -> SettingsService:
    return SettingsService(store=SiteSettingStore(), translator=get_translation_backend())
