"""
Dismissal records.

The browser keeps two copies (localStorage and a cookie, see popups.js). On the
server only the cookie is visible, so rendering consults an ordered list of
sources that currently holds the cookie source alone.
"""
from __future__ import annotations

from datetime import timedelta
from typing import Iterable, List

from .conf import get_setting

DISMISSED_VALUE = "1"


def dismissal_key(notification_id: str) -> str:
    return f"dismissed_{notification_id}"


def dismissal_max_age() -> timedelta:
    return timedelta(days=int(get_setting("DISMISSAL_MAX_AGE_DAYS")))


class DismissalSource:
    def is_dismissed(self, notification_id: str) -> bool:
        raise NotImplementedError


class CookieDismissalSource(DismissalSource):
    def __init__(self, request):
        self.cookies = getattr(request, "COOKIES", {}) or {}

    def is_dismissed(self, notification_id: str) -> bool:
        return self.cookies.get(dismissal_key(notification_id)) == DISMISSED_VALUE


def request_sources(request) -> List[DismissalSource]:
    return [CookieDismissalSource(request)]


def is_dismissed(notification_id: str, sources: Iterable[DismissalSource]) -> bool:
    """Sources are checked in order; the first affirmative answer wins."""
    return any(source.is_dismissed(notification_id) for source in sources)


def record_dismissal(response, notification_id: str) -> None:
    response.set_cookie(
        dismissal_key(notification_id),
        DISMISSED_VALUE,
        max_age=int(dismissal_max_age().total_seconds()),
        path="/",
        samesite="Lax",
    )
