"""Interfaces for the cache tiers.

`BlobCache` is the durable, bounded store; `MemoryCache` is the volatile
tier the fetch pipeline consults before it.
"""

import abc
from typing import Optional

from ..models.cache import CacheStats, WriteOutcome


class BlobCache(abc.ABC):
    """Abstract Base Class for a persistent byte-blob store."""

    @abc.abstractmethod
    def read(self, key: str) -> Optional[bytes]:
        """Reads the bytes stored under a key.

        Args:
            key: The logical cache key.

        Returns:
            The stored bytes, or None on a miss. A miss is not an error.
        """
        pass

    @abc.abstractmethod
    def write(self, key: str, value: Optional[bytes]) -> WriteOutcome:
        """Stores bytes under a key, or deletes the key when value is absent.

        Never raises for storage failures; inspect the returned outcome.

        Args:
            key: The logical cache key.
            value: The payload, or None (or b"") to delete.

        Returns:
            A WriteOutcome describing what happened.
        """
        pass

    def get(self, key: str) -> Optional[bytes]:
        return self.read(key)

    def set(self, key: str, value: Optional[bytes]) -> WriteOutcome:
        return self.write(key, value)

    def delete(self, key: str) -> WriteOutcome:
        """Removes a key. Equivalent to write(key, None)."""
        return self.write(key, None)

    @abc.abstractmethod
    def clear(self) -> int:
        """Removes every entry, returning how many were removed."""
        pass

    @abc.abstractmethod
    def stats(self) -> CacheStats:
        """Returns a snapshot of the current count and size usage."""
        pass


class MemoryCache(abc.ABC):
    """Abstract Base Class for the volatile in-memory tier."""

    @abc.abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        pass

    @abc.abstractmethod
    def set(self, key: str, value: bytes) -> None:
        pass

    @abc.abstractmethod
    def delete(self, key: str) -> None:
        pass

    @abc.abstractmethod
    def clear(self) -> None:
        pass

    @abc.abstractmethod
    def __len__(self) -> int:
        pass
