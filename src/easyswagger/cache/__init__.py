"""Disk-based caching of fetched OpenAPI documents.

This package provides :class:`SpecCache`, which stores the raw text of
documents fetched over HTTP using :mod:`diskcache`, so that running
``paths``, ``show``, and ``copy`` one after another against the same URL
does not refetch it each time. Entries expire after a configurable TTL
(:class:`~easyswagger.models.CacheConfig`).
"""

from easyswagger.cache.cache import SpecCache

__all__ = ["SpecCache"]
