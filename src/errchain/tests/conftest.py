"""Shared fixtures: isolate every test from ambient ERRCHAIN_* configuration."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from errchain.foundation import clear_settings_cache, main_module


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop ERRCHAIN_* env vars and reset cached settings around each test."""
    for key in [k for k in os.environ if k.startswith("ERRCHAIN_")]:
        monkeypatch.delenv(key)
    clear_settings_cache()
    main_module.cache_clear()
    yield
    clear_settings_cache()
    main_module.cache_clear()
