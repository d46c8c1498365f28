"""Disk-based cache for fetched OpenAPI documents.

Uses :mod:`diskcache` to persist the raw text of documents fetched by
:func:`~easyswagger.parser.loader.load_spec` with a configurable
time-to-live (TTL). Only URL sources are cached; local files and stdin are
always read fresh.

Cache keys are SHA-256 hashes of the URL. Resolved endpoint records are
never cached, only the fetched text.
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Any, Optional

import diskcache

from easyswagger.models import CacheConfig


class SpecCache:
    """Disk-backed cache of fetched document text.

    Each entry is a ``dict`` with ``text`` (the response body) and ``hint``
    (``"json"``, ``"yaml"``, or ``""``, derived from the content type).

    Args:
        cache_dir: The easyswagger cache directory; entries go in its
            ``documents/`` subdirectory.
        config: Whether to cache at all, and for how long.

    Example::

        cache = SpecCache("/tmp/easyswagger-cache", CacheConfig(ttl_seconds=60))
        cache.set("https://api.example.com/openapi.json", {"text": "{}", "hint": "json"})
        hit = cache.get("https://api.example.com/openapi.json")
    """

    def __init__(self, cache_dir: str | Path, config: CacheConfig) -> None:
        self._config = config
        self._cache: Optional[diskcache.Cache] = None
        self._cache_dir = Path(cache_dir)
        if config.enabled:
            self._cache = diskcache.Cache(str(self._cache_dir / "documents"))

    def get(self, url: str) -> Optional[dict[str, Any]]:
        """Return the cached entry for *url*, or ``None`` on a miss or when disabled."""
        if self._cache is None:
            return None
        return self._cache.get(self._make_key(url))

    def set(self, url: str, entry: dict[str, Any]) -> None:
        """Store *entry* for *url* with the configured TTL. No-op when disabled."""
        if self._cache is None:
            return
        self._cache.set(self._make_key(url), entry, expire=self._config.ttl_seconds)

    def invalidate(self, url: str) -> None:
        """Remove the entry for *url*, if any."""
        if self._cache is None:
            return
        self._cache.delete(self._make_key(url))

    def clear(self) -> int:
        """Remove all entries and return how many were removed."""
        if self._cache is None:
            return 0
        return self._cache.clear()

    def stats(self) -> dict[str, Any]:
        """Summary for ``easyswagger cache stats``; just ``enabled`` when off."""
        if self._cache is None:
            return {"enabled": False}
        return {
            "enabled": True,
            "size": len(self._cache),
            "directory": str(self._cache_dir / "documents"),
            "ttl_seconds": self._config.ttl_seconds,
        }

    def close(self) -> None:
        """Release the SQLite handle; safe to call twice."""
        if self._cache is not None:
            self._cache.close()

    def _make_key(self, url: str) -> str:
        return hashlib.sha256(url.encode()).hexdigest()
