# preferences/utils.py
from __future__ import annotations

from typing import Any

from django.core.cache import cache
from django.db import transaction

from .models import SiteSetting

DEFAULT_CACHE_TIMEOUT = 60


def _cache_key(key: str) -> str:
    return f"sitesetting:{key}"


def _get_cached(key: str, default: Any, timeout: int) -> Any:
    """
    Read SiteSetting.value['v'] with a tiny cache layer.
    """
    cache_key = _cache_key(key)
    hit = cache.get(cache_key)
    if hit is not None:
        return hit

    try:
        s = SiteSetting.objects.get(key=key)
        val = s.value.get("v", default)
    except SiteSetting.DoesNotExist:
        val = default

    if val is not None:
        cache.set(cache_key, val, timeout)
    return val


def get_site_setting(
    key: str, default: Any = None, *, timeout: int = DEFAULT_CACHE_TIMEOUT
) -> Any:
    """
    Public helper to fetch a single setting's 'v' value (or default).
    """
    return _get_cached(key, default, timeout)


def put_site_setting(key: str, value: Any) -> None:
    """
    Overwrite the whole value stored under `key` in a single write.
    """
    with transaction.atomic():
        SiteSetting.objects.update_or_create(key=key, defaults={"value": {"v": value}})
    cache.delete(_cache_key(key))


def add_site_setting(key: str, value: Any) -> bool:
    """
    Store `value` only if nothing is stored under `key` yet.
    Returns True when a row was created.
    """
    with transaction.atomic():
        _, created = SiteSetting.objects.get_or_create(key=key, defaults={"value": {"v": value}})
    if created:
        cache.delete(_cache_key(key))
    return created


def delete_site_setting(key: str) -> int:
    deleted, _ = SiteSetting.objects.filter(key=key).delete()
    cache.delete(_cache_key(key))
    return deleted
