"""blobcache: a persistent, size- and count-bounded byte-blob cache.

Entries live as flat files named by the SHA-256 of their key inside one
cache directory. Every mutation is followed by an eviction pass that keeps
the directory within its configured count and size bounds.
"""

__version__ = "1.0.0"
