"""Concrete implementation of the disk-resident Blob Store.

Each entry is one flat file in the cache directory, named by the SHA-256
identifier of its key. There is no manifest: a file's existence is the only
record of membership, and recency is read back from its access and
modification timestamps. Every write or delete is followed by an eviction
pass so the directory is within bounds when the call returns.
"""

import logging
import os
import sys
import threading
import time
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Union

from blobcache.domain.interfaces.cache import BlobCache
from blobcache.domain.models.cache import CacheLimits, CacheStats, Entry, EvictionReport, WriteOutcome
from blobcache.domain.models.common import Identifier
from blobcache.domain.models.errors import ConfigurationError
from blobcache.infrastructure.cache.evictor import Evictor, order_by_recency, scan_entries
from blobcache.infrastructure.cache.key_encoder import encode_key

logger = logging.getLogger(__name__)

# Default Configuration Constants
DEFAULT_COUNT_LIMIT = 30
DEFAULT_SIZE_LIMIT = 1_000_000_000  # bytes
CACHE_NAMESPACE = "blobcache"
TEMP_SUFFIX = ".tmp"


def default_cache_root() -> Path:
    """Per-user cache directory following the platform convention."""
    if sys.platform == "win32":
        local_app_data = os.environ.get("LOCALAPPDATA")
        if local_app_data:
            return Path(local_app_data)
        return Path.home() / "AppData" / "Local"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Caches"
    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        return Path(xdg_cache)
    return Path.home() / ".cache"


def default_cache_directory() -> Path:
    return default_cache_root() / CACHE_NAMESPACE


def _validate_limit(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigurationError(f"{name} must be a non-negative integer, got {value!r}")
    return value


class DiskCache(BlobCache):
    """Bounded, persistent byte-blob cache backed by a flat directory.

    Operations never raise for storage problems: reads report a miss, and
    writes return a `WriteOutcome` that callers may inspect or ignore. A
    single re-entrant lock serializes all operations within the process.
    """

    def __init__(
        self,
        count_limit: int = DEFAULT_COUNT_LIMIT,
        size_limit: int = DEFAULT_SIZE_LIMIT,
        directory: Optional[Union[str, Path]] = None,
    ):
        """Initializes the store and creates its directory if needed."""
        self._count_limit = _validate_limit("count_limit", count_limit)
        self._size_limit = _validate_limit("size_limit", size_limit)
        self._directory = Path(directory) if directory is not None else default_cache_directory()
        self._lock = threading.RLock()
        self._evictor = Evictor(self._directory)
        self._setup_directory()

        logger.info(
            f"DiskCache initialized. dir={self._directory}, "
            f"count_limit={self._count_limit}, size_limit={self._size_limit}"
        )

    def _setup_directory(self) -> None:
        """Creates the cache directory (and parents) if it doesn't exist."""
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            # Writes will report failures until the directory becomes usable.
            logger.error(f"Failed to create cache directory {self._directory}: {e}")

    # --- Configuration ---

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def count_limit(self) -> int:
        return self._count_limit

    @count_limit.setter
    def count_limit(self, value: int) -> None:
        with self._lock:
            self._count_limit = _validate_limit("count_limit", value)
        logger.debug(f"count_limit set to {value}; applies on next mutation")

    @property
    def size_limit(self) -> int:
        return self._size_limit

    @size_limit.setter
    def size_limit(self, value: int) -> None:
        with self._lock:
            self._size_limit = _validate_limit("size_limit", value)
        logger.debug(f"size_limit set to {value}; applies on next mutation")

    @property
    def limits(self) -> CacheLimits:
        return CacheLimits(count_limit=self._count_limit, size_limit=self._size_limit)

    def path_for(self, key: str) -> Path:
        """Path of the file that holds (or would hold) the key's payload."""
        return self._directory / encode_key(key)

    # --- BlobCache Interface Implementation ---

    def read(self, key: str) -> Optional[bytes]:
        """Returns the stored bytes for a key, or None on a miss."""
        path = self.path_for(key)
        with self._lock:
            try:
                data = path.read_bytes()
            except FileNotFoundError:
                logger.debug(f"Disk cache miss: {path.name}")
                return None
            except OSError as e:
                logger.warning(f"Failed to read cache file {path}: {e}")
                return None
            self._stamp(path, access_only=True)
        logger.debug(f"Disk cache hit: {path.name} ({len(data)} bytes)")
        return data

    def write(self, key: str, value: Optional[bytes]) -> WriteOutcome:
        """Stores a payload, or deletes the key when value is None or empty.

        Runs an eviction pass before returning in both cases.
        """
        identifier = encode_key(key)
        path = self._directory / identifier
        with self._lock:
            if value:
                outcome = self._store(identifier, path, value)
            else:
                outcome = self._remove(identifier, path)
            eviction = self.evict()
        return replace(outcome, eviction=eviction)

    def clear(self) -> int:
        """Deletes every non-hidden entry. The directory itself is kept."""
        removed = 0
        with self._lock:
            for entry in scan_entries(self._directory) or []:
                try:
                    entry.path.unlink()
                    removed += 1
                except FileNotFoundError:
                    pass
                except OSError as e:
                    logger.warning(f"Failed to delete cache file {entry.path}: {e}")
        logger.info(f"Cleared {removed} entries from disk cache at: {self._directory}")
        return removed

    def stats(self) -> CacheStats:
        entries = self.entries()
        return CacheStats(
            directory=self._directory,
            count=len(entries),
            total_size=sum(entry.size for entry in entries),
            count_limit=self._count_limit,
            size_limit=self._size_limit,
        )

    # --- Eviction & Inspection ---

    def evict(self) -> EvictionReport:
        """Runs an eviction pass against the current limits."""
        with self._lock:
            return self._evictor.run(self.limits)

    def entries(self) -> List[Entry]:
        """Current entries, most recently used first."""
        with self._lock:
            entries = scan_entries(self._directory)
        return order_by_recency(entries) if entries else []

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return self.path_for(key).is_file()

    def __len__(self) -> int:
        return len(self.entries())

    # --- Internal helpers ---

    def _store(self, identifier: Identifier, path: Path, value: bytes) -> WriteOutcome:
        # Hidden temp name keeps half-written files out of eviction scans.
        temp_path = self._directory / f".{identifier}{TEMP_SUFFIX}"
        try:
            with open(temp_path, "wb") as f:
                f.write(value)
            os.replace(temp_path, path)
        except OSError as e:
            logger.error(f"Disk Cache write error for {path}: {e}")
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass  # Ignore cleanup errors
            return WriteOutcome.failure(identifier, f"write failed: {e}")
        self._stamp(path)
        logger.debug(f"Stored {len(value)} bytes in disk cache: {identifier}")
        return WriteOutcome.success(identifier)

    def _remove(self, identifier: Identifier, path: Path) -> WriteOutcome:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Failed to delete cache file {path}: {e}")
            return WriteOutcome.failure(identifier, f"delete failed: {e}", deleted=True)
        logger.debug(f"Deleted disk cache entry: {identifier}")
        return WriteOutcome.success(identifier, deleted=True)

    def _stamp(self, path: Path, access_only: bool = False) -> None:
        """Records use of an entry in its timestamps.

        Kernel timestamps can be coarse and atime updates are often
        suppressed (noatime/relatime), so recency is written explicitly.
        """
        now = time.time_ns()
        try:
            if access_only:
                os.utime(path, ns=(now, path.stat().st_mtime_ns))
            else:
                os.utime(path, ns=(now, now))
        except OSError as e:
            logger.debug(f"Could not update timestamps for {path}: {e}")
