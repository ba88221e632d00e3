"""
The popup settings document: dataclasses, the seed document, and the
merge-over-defaults step every stored copy goes through on read.
"""
from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping

from .conf import get_setting

NOTIFICATION_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")

NOTIFICATION_DEFAULTS = {
    "enabled": True,
    "title": "",
    "content": "",
    "buttonText": "",
    "showDelayMs": None,  # filled from DEFAULT_SHOW_DELAY_MS at merge time
}

DEFAULT_DOCUMENT = {
    "enabled": True,
    "translationEnabled": False,
    "notifications": {
        "notification_1": {
            "id": "notification_1",
            "enabled": True,
            "title": "Welcome!",
            "content": "Thank you for visiting our site. We're glad to see you here!",
            "buttonText": "Got it",
            "showDelayMs": 120000,
        },
        "notification_2": {
            "id": "notification_2",
            "enabled": True,
            "title": "Special offer",
            "content": "We have a special offer for you. Don't miss out!",
            "buttonText": "Learn more",
            "showDelayMs": 120000,
        },
    },
}


def is_valid_notification_id(value: str) -> bool:
    return bool(value) and bool(NOTIFICATION_ID_RE.match(value))


def coerce_delay(value: Any) -> int:
    """Non-negative integer milliseconds; anything unusable becomes the default."""
    if value is None or value == "":
        return int(get_setting("DEFAULT_SHOW_DELAY_MS"))
    try:
        return abs(int(value))
    except (TypeError, ValueError):
        return int(get_setting("DEFAULT_SHOW_DELAY_MS"))


@dataclass
class Notification:
    id: str
    enabled: bool = True
    title: str = ""
    content: str = ""
    button_text: str = ""
    show_delay_ms: int = 120000

    @classmethod
    def from_dict(cls, notification_id: str, data: Mapping[str, Any]) -> "Notification":
        return cls(
            id=notification_id,
            enabled=bool(data.get("enabled")),
            title=str(data.get("title") or ""),
            content=str(data.get("content") or ""),
            button_text=str(data.get("buttonText") or ""),
            show_delay_ms=coerce_delay(data.get("showDelayMs")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "enabled": self.enabled,
            "title": self.title,
            "content": self.content,
            "buttonText": self.button_text,
            "showDelayMs": self.show_delay_ms,
        }


@dataclass
class Settings:
    enabled: bool = True
    translation_enabled: bool = False
    notifications: Dict[str, Notification] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Settings":
        notifications = {
            nid: Notification.from_dict(nid, item)
            for nid, item in (data.get("notifications") or {}).items()
        }
        return cls(
            enabled=bool(data.get("enabled")),
            translation_enabled=bool(data.get("translationEnabled")),
            notifications=notifications,
        )

    @classmethod
    def defaults(cls) -> "Settings":
        return cls.from_dict(merge_with_defaults(None))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "translationEnabled": self.translation_enabled,
            "notifications": {nid: n.to_dict() for nid, n in self.notifications.items()},
        }

    def enabled_notifications(self) -> Iterator[Notification]:
        return (n for n in self.notifications.values() if n.enabled)


def merge_with_defaults(raw: Any) -> Dict[str, Any]:
    """
    Backfill a stored document from DEFAULT_DOCUMENT.

    Top-level keys merge shallowly: a stored `notifications` mapping replaces
    the seeded one as a whole. Each stored notification is then merged over
    NOTIFICATION_DEFAULTS, and its `id` always comes from its key.
    """
    merged = copy.deepcopy(DEFAULT_DOCUMENT)
    if not isinstance(raw, Mapping):
        return merged

    for key in ("enabled", "translationEnabled"):
        if key in raw:
            merged[key] = raw[key]

    stored = raw.get("notifications")
    if isinstance(stored, Mapping):
        defaults = dict(NOTIFICATION_DEFAULTS, showDelayMs=get_setting("DEFAULT_SHOW_DELAY_MS"))
        merged["notifications"] = {
            nid: {**defaults, **item, "id": nid}
            for nid, item in stored.items()
            if isinstance(item, Mapping)
        }
    return merged
