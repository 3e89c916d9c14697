"""Two-tier (memory + disk) caching for datamanager.

This package provides :class:`DataManager`, a string-keyed byte cache that
answers from a cost-bounded :class:`MemoryCache` and falls back to flat
files under the cache or document directory (see :mod:`datamanager.config`).

The manager is consumed by :class:`~datamanager.images.ImageLoader` and is
available to applications directly for their own blobs.
"""

from datamanager.cache.manager import DataManager
from datamanager.cache.memory import MemoryCache

__all__ = ["DataManager", "MemoryCache"]
