"""Keeps the cache directory within its count and size bounds.

There is no index: every pass lists the directory, rebuilds an `Entry` per
file from its stat metadata, and removes the least recently used files until
both bounds hold.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from blobcache.domain.models.cache import CacheLimits, Entry, EvictionReport
from blobcache.domain.models.common import Identifier

logger = logging.getLogger(__name__)

# st_blocks is always counted in 512-byte units, whatever the filesystem block size.
STAT_BLOCK_SIZE = 512


def allocated_size(stat_result: os.stat_result) -> int:
    """Bytes the file occupies on disk; falls back to the logical size
    where the platform does not report blocks (Windows)."""
    blocks = getattr(stat_result, "st_blocks", None)
    if blocks is None:
        return stat_result.st_size
    return blocks * STAT_BLOCK_SIZE


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def scan_entries(directory: Path) -> Optional[List[Entry]]:
    """Lists the non-hidden regular files in a directory with their metadata.

    Returns None if the directory itself cannot be listed. A file whose
    metadata cannot be read is still returned, with every field unset, so
    that it ranks as least recent.
    """
    try:
        with os.scandir(directory) as it:
            dir_entries = [d for d in it if not is_hidden(d.name)]
    except OSError as e:
        logger.debug(f"Cannot list cache directory {directory}: {e}")
        return None

    entries: List[Entry] = []
    for dir_entry in dir_entries:
        path = Path(dir_entry.path)
        identifier = Identifier(dir_entry.name)
        try:
            if not dir_entry.is_file(follow_symlinks=False):
                continue
            st = dir_entry.stat(follow_symlinks=False)
        except OSError as e:
            logger.debug(f"Cannot read metadata for {path}: {e}")
            entries.append(Entry(path=path, identifier=identifier))
            continue
        entries.append(Entry(
            path=path,
            identifier=identifier,
            last_access_ns=st.st_atime_ns,
            last_modification_ns=st.st_mtime_ns,
            allocated_size=allocated_size(st),
        ))
    return entries


def order_by_recency(entries: List[Entry]) -> List[Entry]:
    """Most recently used first. Equal recency keeps identifier order."""
    by_name = sorted(entries, key=lambda e: e.identifier)
    return sorted(by_name, key=lambda e: e.recency, reverse=True)


class Evictor:
    """Removes least-recent entries from a directory until limits hold."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def run(self, limits: CacheLimits) -> EvictionReport:
        """Performs one eviction pass.

        Deletes are best-effort: a failed delete is logged and recorded in
        the report, and the entry still leaves the running tally so the loop
        always terminates. The tally can therefore under-count what is left
        on disk when deletes keep failing.
        """
        entries = scan_entries(self.directory)
        if entries is None:
            logger.debug(f"Eviction aborted, directory not readable: {self.directory}")
            return EvictionReport(aborted=True)

        ordered = order_by_recency(entries)
        count = len(ordered)
        total_size = sum(entry.size for entry in ordered)
        report = EvictionReport(scanned=count, count=count, total_size=total_size)

        if limits.is_satisfied(count, total_size):
            return report

        logger.debug(
            f"Cache over bounds (count={count}/{limits.count_limit}, "
            f"size={total_size}/{limits.size_limit}). Evicting."
        )
        while not limits.is_satisfied(count, total_size) and ordered:
            entry = ordered.pop()
            count -= 1
            total_size -= entry.size
            try:
                entry.path.unlink()
                report.removed.append(entry.identifier)
                logger.debug(f"Evicted {entry.identifier} ({entry.size} bytes)")
            except FileNotFoundError:
                report.removed.append(entry.identifier)
            except OSError as e:
                report.failed.append(entry.identifier)
                logger.warning(f"Failed to evict cache file {entry.path}: {e}")

        report.count = count
        report.total_size = total_size
        logger.info(
            f"Eviction removed {len(report.removed)} entries "
            f"({len(report.failed)} failed); now count={count}, size={total_size}"
        )
        return report
