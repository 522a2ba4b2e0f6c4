"""Maps arbitrary cache keys to fixed-length, filesystem-safe identifiers."""

import hashlib
import logging

from blobcache.domain.models.common import Identifier

logger = logging.getLogger(__name__)

KEY_ENCODING = "utf-8"


def encode_key(key: str) -> Identifier:
    """Returns the lowercase hex SHA-256 digest of the key.

    The result is always 64 characters from [0-9a-f], so it can be used as a
    single path segment on any filesystem regardless of what the key held
    (slashes, '..', control characters).

    A key that cannot be encoded (e.g. lone surrogates) is hashed as if it
    were empty rather than failing the caller.
    """
    try:
        raw = key.encode(KEY_ENCODING)
    except UnicodeEncodeError as e:
        logger.debug(f"Key could not be encoded as {KEY_ENCODING}, hashing empty key instead: {e}")
        raw = b""
    return Identifier(hashlib.sha256(raw).hexdigest())
