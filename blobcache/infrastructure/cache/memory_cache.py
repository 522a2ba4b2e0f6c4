"""Volatile in-memory tier consulted before the disk cache.

A thin wrapper over :class:`cachetools.LRUCache` so the fetch pipeline only
depends on the `MemoryCache` port.
"""

import logging
from typing import Optional

from cachetools import LRUCache

from blobcache.domain.interfaces.cache import MemoryCache

logger = logging.getLogger(__name__)

DEFAULT_MEMORY_ITEMS = 100


class LRUMemoryCache(MemoryCache):
    """Count-bounded LRU cache of payloads keyed by their logical key.

    Parameters
    ----------
    max_items: int
        Maximum number of payloads to retain. When full, the least recently
        used payload is discarded.
    """

    def __init__(self, max_items: int = DEFAULT_MEMORY_ITEMS) -> None:
        self._cache: LRUCache = LRUCache(maxsize=max_items)
        self.max_items = max_items

    def get(self, key: str) -> Optional[bytes]:
        """Return the payload for `key` or None if missing."""
        return self._cache.get(key)

    def set(self, key: str, value: bytes) -> None:
        """Insert or update `key` with `value`."""
        if self.max_items <= 0:
            return
        self._cache[key] = value

    def delete(self, key: str) -> None:
        self._cache.pop(key, None)

    def clear(self) -> None:
        self._cache.clear()
        logger.debug("Cleared in-memory cache.")

    def __len__(self) -> int:
        return len(self._cache)
