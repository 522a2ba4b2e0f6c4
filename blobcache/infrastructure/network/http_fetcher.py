"""Concrete implementation of the Fetcher interface over HTTP using httpx."""

import logging
from typing import Optional

import httpx

from blobcache.domain.interfaces.fetcher import Fetcher
from blobcache.domain.models.errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class HttpFetcher(Fetcher):
    """Retrieves payloads with a GET request, following redirects.

    Timeouts belong here rather than in the cache: the store performs no
    network I/O and never blocks on anything but the local filesystem.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self._transport = transport

    async def fetch(self, url: str) -> bytes:
        logger.debug(f"Fetching from network: {url}")
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            logger.warning(f"Network fetch failed for {url}: {e}")
            raise FetchError(f"Request failed: {e}", url=url) from e

        if response.status_code != 200:
            logger.warning(f"Network fetch for {url} returned HTTP {response.status_code}")
            raise FetchError(
                f"Unexpected status {response.status_code}", url=url, status_code=response.status_code
            )
        if not response.content:
            raise FetchError("Empty response body", url=url, status_code=response.status_code)

        logger.debug(f"Fetched {len(response.content)} bytes from {url}")
        return response.content
