"""
Test configuration for popup notifications
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "test_settings")


@pytest.fixture(autouse=True)
def _clear_cache():
    # LocMemCache outlives the per-test transaction rollback
    from django.core.cache import cache

    cache.clear()
    yield
    cache.clear()
