"""
Upstream document fetching over httpx.

A fresh AsyncClient is opened for every fetch so that a proxy connection pool
never outlives the request that needed it.
"""

import logging
from typing import Any

import httpx

from caption_extractor.config import Settings
from caption_extractor.errors import DocumentFetchError

logger = logging.getLogger(__name__)


class DocumentFetcher:
    """
    Fetches upstream documents as text, optionally through a proxy.

    Args:
        config: Settings instance. Uses global defaults if None.
        transport: Optional httpx transport, mainly for tests
    """

    def __init__(
        self,
        config: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or Settings()
        self.transport = transport

    def _client_options(self, proxy_url: str | None) -> dict[str, Any]:
        options: dict[str, Any] = {"follow_redirects": True}
        if proxy_url:
            options["proxy"] = proxy_url
        if self.transport is not None:
            options["transport"] = self.transport
        if self.config.request_timeout is not None:
            options["timeout"] = self.config.request_timeout
        if self.config.user_agent:
            options["headers"] = {"User-Agent": self.config.user_agent}
        return options

    async def fetch(self, url: str, proxy_url: str | None = None) -> str:
        """
        Fetch a document and return its body as text.

        Args:
            url: Address to fetch
            proxy_url: Proxy to route the request through, if any

        Returns:
            Decoded response body

        Raises:
            DocumentFetchError: On connection failure, invalid URL or proxy, or a
                non-success status code
        """
        try:
            async with httpx.AsyncClient(**self._client_options(proxy_url)) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.text
        except httpx.HTTPStatusError as e:
            logger.error(f"Upstream returned {e.response.status_code} for {url}")
            raise DocumentFetchError(url, proxy_url, e.response.status_code) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Request to {url} failed: {e!r}")
            raise DocumentFetchError(url, proxy_url) from e
        except (ValueError, ImportError) as e:
            # Unknown proxy scheme, or a SOCKS proxy without socksio installed
            logger.error(f"Could not set up proxy {proxy_url} for {url}: {e!r}")
            raise DocumentFetchError(url, proxy_url) from e
