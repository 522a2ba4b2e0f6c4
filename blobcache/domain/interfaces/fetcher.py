"""Interface for the network tier that supplies bytes on a cache miss."""

import abc


class Fetcher(abc.ABC):
    """Abstract Base Class for retrieving a payload from its origin."""

    @abc.abstractmethod
    async def fetch(self, url: str) -> bytes:
        """Retrieves the payload for a URL asynchronously.

        Args:
            url: Absolute URL of the resource.

        Returns:
            The response body.

        Raises:
            FetchError: If the request fails, times out, or does not return
                a successful, non-empty response.
        """
        pass
