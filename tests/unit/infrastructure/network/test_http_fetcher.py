import asyncio

import httpx
import pytest

from blobcache.domain.models.errors import FetchError
from blobcache.infrastructure.network.http_fetcher import HttpFetcher


def fetcher_for(handler) -> HttpFetcher:
    return HttpFetcher(timeout=1.0, transport=httpx.MockTransport(handler))


def test_fetch_returns_body():
    fetcher = fetcher_for(lambda request: httpx.Response(200, content=b"image-bytes"))
    assert asyncio.run(fetcher.fetch("https://example.com/cat.png")) == b"image-bytes"


def test_fetch_follows_redirects():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/old":
            return httpx.Response(301, headers={"Location": "https://example.com/new"})
        return httpx.Response(200, content=b"moved")

    assert asyncio.run(fetcher_for(handler).fetch("https://example.com/old")) == b"moved"


def test_non_200_raises_fetch_error():
    fetcher = fetcher_for(lambda request: httpx.Response(404, content=b"nope"))

    with pytest.raises(FetchError) as exc_info:
        asyncio.run(fetcher.fetch("https://example.com/missing"))

    assert exc_info.value.status_code == 404
    assert exc_info.value.url == "https://example.com/missing"


def test_empty_body_raises_fetch_error():
    fetcher = fetcher_for(lambda request: httpx.Response(200, content=b""))
    with pytest.raises(FetchError):
        asyncio.run(fetcher.fetch("https://example.com/empty"))


def test_transport_error_raises_fetch_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchError):
        asyncio.run(fetcher_for(handler).fetch("https://example.com/down"))
