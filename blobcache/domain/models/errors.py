"""Exception types raised across layer boundaries.

The disk store itself never raises into its callers; these are reserved for
input rejected before reaching the store and for the fetch pipeline.
"""


class BlobCacheError(Exception):
    """Base class for all blobcache errors."""


class ConfigurationError(BlobCacheError):
    """Raised when a cache limit or setting has an invalid value."""


class FetchError(BlobCacheError):
    """Raised when the fetch pipeline cannot produce bytes for a URL."""

    def __init__(self, message: str, url: str = "", status_code: int = 0):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
