"""Cache tier implementations.

Provides the disk-resident blob store (key encoder, store, evictor) and the
volatile in-memory tier used in front of it by the fetch pipeline.
Bounded Context: Cache Management
"""

from blobcache.infrastructure.cache.disk_cache import DiskCache
from blobcache.infrastructure.cache.key_encoder import encode_key
from blobcache.infrastructure.cache.memory_cache import LRUMemoryCache

__all__ = ["DiskCache", "LRUMemoryCache", "encode_key"]
