"""Defines common Value Objects used across the cache and fetch contexts.

These are plain strings/bytes at runtime; NewType only adds semantic
clarity at the seams between layers.
"""

from typing import NewType

# === Caching Context ===
CacheKey = NewType("CacheKey", str)          # Logical key supplied by the caller (often a URL)
Identifier = NewType("Identifier", str)      # SHA-256 hex digest of a CacheKey, also the filename
BlobPayload = NewType("BlobPayload", bytes)  # Opaque payload stored on disk

# === Fetch Context ===
SourceURL = NewType("SourceURL", str)

# Earliest instant representable as signed 64-bit nanoseconds since the epoch.
EARLIEST_NS = -(2 ** 63)
