"""Core service for the tiered fetch pipeline.

Looks a URL up in the volatile memory tier, then the durable disk tier, and
only then goes to the network. Bytes found lower down are promoted into the
faster tiers on the way back.
"""

import asyncio
import logging
from typing import Optional

from blobcache.domain.interfaces.cache import BlobCache, MemoryCache
from blobcache.domain.interfaces.fetcher import Fetcher
from blobcache.domain.models.cache import FetchResult
from blobcache.domain.models.common import SourceURL
from blobcache.domain.models.errors import FetchError

logger = logging.getLogger(__name__)

SOURCE_MEMORY = "memory"
SOURCE_DISK = "disk"
SOURCE_NETWORK = "network"


class FetchService:
    """Orchestrates memory -> disk -> network lookups for a URL."""

    def __init__(
        self,
        disk_cache: BlobCache,
        fetcher: Fetcher,
        memory_cache: Optional[MemoryCache] = None,
    ):
        """Initializes the FetchService with its dependencies."""
        self.disk_cache = disk_cache
        self.fetcher = fetcher
        self.memory_cache = memory_cache

    async def fetch(self, url: str) -> FetchResult:
        """Returns the payload for a URL from the fastest tier that has it.

        Raises:
            FetchError: If the URL is empty or the network tier fails.
        """
        if not url:
            raise FetchError("URL must not be empty", url=url)
        source_url = SourceURL(url)

        if self.memory_cache is not None:
            cached = self.memory_cache.get(url)
            if cached is not None:
                logger.debug(f"Fetch from memory cache: {url}")
                return FetchResult(url=source_url, data=cached, source=SOURCE_MEMORY)

        # Disk I/O runs in a thread to avoid blocking the event loop
        stored = await asyncio.to_thread(self.disk_cache.read, url)
        if stored is not None:
            logger.debug(f"Fetch from disk cache: {url}")
            self._remember(url, stored)
            return FetchResult(url=source_url, data=stored, source=SOURCE_DISK)

        data = await self.fetcher.fetch(url)
        outcome = await asyncio.to_thread(self.disk_cache.write, url, data)
        if not outcome.ok:
            logger.warning(f"Fetched {url} but could not persist it: {outcome.reason}")
        self._remember(url, data)
        logger.debug(f"Fetch from network: {url} ({len(data)} bytes)")
        return FetchResult(url=source_url, data=data, source=SOURCE_NETWORK)

    async def invalidate(self, url: str) -> None:
        """Drops a URL from both cache tiers."""
        if self.memory_cache is not None:
            self.memory_cache.delete(url)
        await asyncio.to_thread(self.disk_cache.delete, url)
        logger.debug(f"Invalidated cached payload for: {url}")

    def _remember(self, url: str, data: bytes) -> None:
        if self.memory_cache is not None:
            self.memory_cache.set(url, data)
