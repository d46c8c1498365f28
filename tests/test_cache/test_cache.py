"""Tests for the SpecCache module."""

from __future__ import annotations

import time

import pytest

from easyswagger.cache import SpecCache
from easyswagger.models import CacheConfig

URL = "https://docs.example.com/openapi.json"


@pytest.fixture()
def cache(tmp_path):
    """Create a SpecCache with default config pointing at tmp_path."""
    config = CacheConfig(enabled=True, ttl_seconds=300)
    c = SpecCache(tmp_path, config)
    yield c
    c.close()


@pytest.fixture()
def disabled_cache(tmp_path):
    """Create a disabled SpecCache."""
    config = CacheConfig(enabled=False, ttl_seconds=300)
    c = SpecCache(tmp_path, config)
    yield c
    c.close()


def _make_entry(text: str = '{"openapi": "3.0.3"}') -> dict:
    """Build a minimal cached document entry."""
    return {"text": text, "hint": "json"}


# ------------------------------------------------------------------ #
# Basic get / set
# ------------------------------------------------------------------ #


class TestGetSet:
    def test_set_and_get(self, cache: SpecCache) -> None:
        entry = _make_entry()
        cache.set(URL, entry)
        assert cache.get(URL) == entry

    def test_cache_miss_returns_none(self, cache: SpecCache) -> None:
        assert cache.get(URL) is None

    def test_urls_are_distinct(self, cache: SpecCache) -> None:
        cache.set(URL, _make_entry("a: 1"))
        cache.set(URL + "?v=2", _make_entry("a: 2"))
        assert cache.get(URL)["text"] == "a: 1"
        assert cache.get(URL + "?v=2")["text"] == "a: 2"

    def test_set_overwrites(self, cache: SpecCache) -> None:
        cache.set(URL, _make_entry("old"))
        cache.set(URL, _make_entry("new"))
        assert cache.get(URL)["text"] == "new"

    def test_directory_layout(self, cache: SpecCache, tmp_path) -> None:
        cache.set(URL, _make_entry())
        assert (tmp_path / "documents").is_dir()


# ------------------------------------------------------------------ #
# TTL expiry
# ------------------------------------------------------------------ #


class TestTTL:
    def test_ttl_expiry(self, tmp_path) -> None:
        """Entries expire after ttl_seconds."""
        config = CacheConfig(enabled=True, ttl_seconds=1)
        c = SpecCache(tmp_path, config)
        try:
            c.set(URL, _make_entry())
            assert c.get(URL) is not None
            time.sleep(1.5)
            assert c.get(URL) is None
        finally:
            c.close()


# ------------------------------------------------------------------ #
# Disabled cache
# ------------------------------------------------------------------ #


class TestDisabled:
    def test_disabled_get_returns_none(self, disabled_cache: SpecCache) -> None:
        assert disabled_cache.get(URL) is None

    def test_disabled_set_is_noop(self, disabled_cache: SpecCache) -> None:
        disabled_cache.set(URL, _make_entry())
        assert disabled_cache.get(URL) is None

    def test_disabled_clear_returns_zero(self, disabled_cache: SpecCache) -> None:
        assert disabled_cache.clear() == 0

    def test_disabled_stats(self, disabled_cache: SpecCache) -> None:
        assert disabled_cache.stats() == {"enabled": False}

    def test_disabled_creates_no_directory(self, disabled_cache: SpecCache, tmp_path) -> None:
        assert not (tmp_path / "documents").exists()


# ------------------------------------------------------------------ #
# Invalidate / clear / stats
# ------------------------------------------------------------------ #


class TestInvalidation:
    def test_invalidate_removes_entry(self, cache: SpecCache) -> None:
        cache.set(URL, _make_entry())
        cache.set(URL + "/other", _make_entry())
        cache.invalidate(URL)
        assert cache.get(URL) is None
        assert cache.get(URL + "/other") is not None

    def test_invalidate_nonexistent_no_error(self, cache: SpecCache) -> None:
        cache.invalidate("https://nowhere.example.com/spec.json")

    def test_clear_returns_count(self, cache: SpecCache) -> None:
        cache.set(URL, _make_entry())
        cache.set(URL + "/other", _make_entry())
        assert cache.clear() == 2
        assert cache.get(URL) is None

    def test_stats(self, cache: SpecCache, tmp_path) -> None:
        cache.set(URL, _make_entry())
        stats = cache.stats()
        assert stats["enabled"] is True
        assert stats["size"] == 1
        assert stats["ttl_seconds"] == 300
        assert stats["directory"] == str(tmp_path / "documents")


class TestKeys:
    def test_key_deterministic(self, cache: SpecCache) -> None:
        assert cache._make_key(URL) == cache._make_key(URL)

    def test_key_is_sha256_hex(self, cache: SpecCache) -> None:
        key = cache._make_key(URL)
        assert len(key) == 64
        int(key, 16)


class TestClose:
    def test_close_disabled_cache(self, disabled_cache: SpecCache) -> None:
        disabled_cache.close()

    def test_double_close(self, tmp_path) -> None:
        c = SpecCache(tmp_path, CacheConfig(enabled=True, ttl_seconds=300))
        c.close()
        c.close()
