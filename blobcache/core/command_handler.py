"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py) and delegates the
work to the disk cache and the fetch service, reporting results through the
UserInterface.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from blobcache.core.services.fetch_service import FetchService
from blobcache.domain.interfaces.user_interface import UserInterface
from blobcache.domain.models.cache import FetchResult, WriteOutcome
from blobcache.domain.models.errors import ConfigurationError, FetchError
from blobcache.infrastructure.cache.disk_cache import DiskCache

logger = logging.getLogger(__name__)


class CommandHandler:
    """Handles incoming commands and delegates to the cache and services."""

    def __init__(self, disk_cache: DiskCache, fetch_service: FetchService, ui: UserInterface):
        """Initializes the CommandHandler with required services."""
        self.disk_cache = disk_cache
        self.fetch_service = fetch_service
        self.ui = ui

    async def handle_get(self, key: str, output: Optional[Path] = None) -> Optional[bytes]:
        """Handles the 'get' command. Returns the payload, or None on a miss."""
        logger.info(f"Handling 'get' command for key: {key}")
        try:
            data = await asyncio.to_thread(self.disk_cache.read, key)
        except Exception as e:
            logger.error(f"Get command failed: {e}", exc_info=True)
            self.ui.display_error(f"Get failed: {e}")
            return None
        if data is None:
            self.ui.display_error(f"No cached entry for key: {key}")
            return None
        if output is not None:
            if not self._save(data, output):
                return None
            self.ui.display_info(f"Wrote {len(data)} bytes to {output}")
        return data

    async def handle_put(self, key: str, data: bytes) -> bool:
        """Handles the 'put' command."""
        logger.info(f"Handling 'put' command for key: {key} ({len(data)} bytes)")
        if not data:
            self.ui.display_error("Refusing to store an empty payload; use 'delete' to remove a key.")
            return False
        try:
            outcome = await asyncio.to_thread(self.disk_cache.write, key, data)
        except Exception as e:
            logger.error(f"Put command failed: {e}", exc_info=True)
            self.ui.display_error(f"Put failed: {e}")
            return False
        if outcome.ok:
            self.ui.display_info(f"Stored {len(data)} bytes as {outcome.identifier}")
        return self._report(outcome)

    async def handle_delete(self, key: str) -> bool:
        """Handles the 'delete' command. Deleting a missing key succeeds."""
        logger.info(f"Handling 'delete' command for key: {key}")
        try:
            outcome = await asyncio.to_thread(self.disk_cache.delete, key)
        except Exception as e:
            logger.error(f"Delete command failed: {e}", exc_info=True)
            self.ui.display_error(f"Delete failed: {e}")
            return False
        if outcome.ok:
            self.ui.display_info(f"Deleted {outcome.identifier}")
        return self._report(outcome)

    async def handle_stats(self) -> bool:
        """Handles the 'stats' command."""
        try:
            stats = await asyncio.to_thread(self.disk_cache.stats)
        except Exception as e:
            logger.error(f"Stats command failed: {e}", exc_info=True)
            self.ui.display_error(f"Failed to read cache stats: {e}")
            return False
        self.ui.display_stats(stats)
        return True

    async def handle_entries(self) -> bool:
        """Handles the 'entries' command."""
        try:
            entries = await asyncio.to_thread(self.disk_cache.entries)
        except Exception as e:
            logger.error(f"Entries command failed: {e}", exc_info=True)
            self.ui.display_error(f"Failed to list cache entries: {e}")
            return False
        self.ui.display_entries(entries)
        return True

    async def handle_evict(self, count_limit: Optional[int] = None, size_limit: Optional[int] = None) -> bool:
        """Handles the 'evict' command, optionally tightening limits first."""
        logger.info(f"Handling 'evict' command (count_limit={count_limit}, size_limit={size_limit})")
        try:
            if count_limit is not None:
                self.disk_cache.count_limit = count_limit
            if size_limit is not None:
                self.disk_cache.size_limit = size_limit
        except ConfigurationError as e:
            self.ui.display_error(str(e))
            return False
        try:
            report = await asyncio.to_thread(self.disk_cache.evict)
        except Exception as e:
            logger.error(f"Evict command failed: {e}", exc_info=True)
            self.ui.display_error(f"Eviction failed: {e}")
            return False
        if report.aborted:
            self.ui.display_error(f"Cache directory is not readable: {self.disk_cache.directory}")
            return False
        self.ui.display_info(
            f"Evicted {len(report.removed)} of {report.scanned} entries; "
            f"{report.count} remain ({report.total_size} bytes)."
        )
        if report.failed:
            self.ui.display_warning(f"{len(report.failed)} entries could not be deleted.")
        return True

    async def handle_clear(self) -> bool:
        """Handles the 'clear' command."""
        logger.info("Handling 'clear' command")
        try:
            removed = await asyncio.to_thread(self.disk_cache.clear)
            if self.fetch_service.memory_cache is not None:
                self.fetch_service.memory_cache.clear()
        except Exception as e:
            logger.error(f"Failed to clear cache: {e}", exc_info=True)
            self.ui.display_error(f"Failed to clear cache: {e}")
            return False
        self.ui.display_info(f"Removed {removed} entries from {self.disk_cache.directory}")
        return True

    async def handle_fetch(self, url: str, output: Optional[Path] = None) -> Optional[FetchResult]:
        """Handles the 'fetch' command through the tiered pipeline."""
        logger.info(f"Handling 'fetch' command for URL: {url}")
        try:
            result = await self.fetch_service.fetch(url)
        except FetchError as e:
            self.ui.display_error(f"Fetch failed: {e}")
            return None
        except Exception as e:
            logger.error(f"Fetch command failed: {e}", exc_info=True)
            self.ui.display_error(f"Fetch failed: {e}")
            return None
        if output is not None:
            if not self._save(result.data, output):
                return None
            self.ui.display_info(f"Fetched {len(result.data)} bytes from {result.source} into {output}")
        return result

    def _save(self, data: bytes, output: Path) -> bool:
        try:
            output.write_bytes(data)
        except OSError as e:
            logger.error(f"Failed to write output file {output}: {e}")
            self.ui.display_error(f"Could not write {output}: {e}")
            return False
        return True

    def _report(self, outcome: WriteOutcome) -> bool:
        if not outcome.ok:
            self.ui.display_error(outcome.reason or "Cache write failed")
            return False
        if outcome.eviction is not None and outcome.eviction.removed:
            self.ui.display_info(f"Evicted {len(outcome.eviction.removed)} least recently used entries.")
        return True
