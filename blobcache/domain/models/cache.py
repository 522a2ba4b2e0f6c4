"""Records describing cache entries, limits and the outcome of operations.

An `Entry` is never persisted: it is a view rebuilt from filesystem metadata
every time the directory is scanned.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from blobcache.domain.models.common import EARLIEST_NS, Identifier, SourceURL


@dataclass(frozen=True)
class Entry:
    """Metadata view of one file in the cache directory."""
    path: Path
    identifier: Identifier
    last_access_ns: Optional[int] = None
    last_modification_ns: Optional[int] = None
    allocated_size: Optional[int] = None

    @property
    def recency(self) -> int:
        """Later of access and modification time; missing values sort first."""
        access = self.last_access_ns if self.last_access_ns is not None else EARLIEST_NS
        modified = self.last_modification_ns if self.last_modification_ns is not None else EARLIEST_NS
        return max(access, modified)

    @property
    def size(self) -> int:
        return self.allocated_size or 0

    @property
    def last_used(self) -> Optional[datetime]:
        if self.last_access_ns is None and self.last_modification_ns is None:
            return None
        return datetime.fromtimestamp(self.recency / 1_000_000_000, tz=timezone.utc)


@dataclass
class CacheLimits:
    """Bounds the directory must respect after every mutation."""
    count_limit: int
    size_limit: int

    def is_satisfied(self, count: int, total_size: int) -> bool:
        return count <= self.count_limit and total_size <= self.size_limit


@dataclass
class EvictionReport:
    """Summary of a single eviction pass."""
    scanned: int = 0
    removed: List[Identifier] = field(default_factory=list)
    failed: List[Identifier] = field(default_factory=list)
    count: int = 0
    total_size: int = 0
    aborted: bool = False

    @property
    def evicted(self) -> bool:
        return bool(self.removed or self.failed)


@dataclass(frozen=True)
class WriteOutcome:
    """Result of a mutating call. Returned, never raised.

    Attributes:
        identifier: Encoded key the write targeted.
        ok: False when the bytes could not be written or the file removed.
        reason: Human-readable failure description (None on success).
        deleted: True when the call was a delete (absent or empty payload).
        eviction: Report of the eviction pass that followed the mutation.
    """
    identifier: Identifier
    ok: bool = True
    reason: Optional[str] = None
    deleted: bool = False
    eviction: Optional[EvictionReport] = None

    @classmethod
    def success(cls, identifier: Identifier, deleted: bool = False,
                eviction: Optional[EvictionReport] = None) -> "WriteOutcome":
        return cls(identifier=identifier, ok=True, deleted=deleted, eviction=eviction)

    @classmethod
    def failure(cls, identifier: Identifier, reason: str, deleted: bool = False,
                eviction: Optional[EvictionReport] = None) -> "WriteOutcome":
        return cls(identifier=identifier, ok=False, reason=reason, deleted=deleted, eviction=eviction)


@dataclass
class CacheStats:
    """Point-in-time snapshot of the cache directory."""
    directory: Path
    count: int
    total_size: int
    count_limit: int
    size_limit: int

    @property
    def within_bounds(self) -> bool:
        return self.count <= self.count_limit and self.total_size <= self.size_limit


@dataclass
class FetchResult:
    """Bytes produced by the fetch pipeline and the tier that supplied them."""
    url: SourceURL
    data: bytes
    source: str  # 'memory', 'disk' or 'network'
