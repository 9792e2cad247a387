# ABOUTME: Async HTTP client for the character wiki built on httpx
# ABOUTME: Fetches pages as parsed documents and raw bytes with retry and rate limiting

from collections.abc import Callable

import httpx
from bs4 import BeautifulSoup

from nikkedex.config import get_config
from nikkedex.html import parse_html
from nikkedex.utils.logging import get_logger, log_api_call
from nikkedex.utils.retry import fetch_retry


class WikiClient:
    """Wiki client wrapping an httpx client for page and image requests.

    The httpx client can be injected, which is how tests swap in a mocked transport.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        max_attempts: int | None = None,
        retry: Callable | None = None,
    ):
        config = get_config()
        self.max_attempts = max_attempts or config.fetch_retry_attempts
        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(  # Allow for dependency injection
            headers={"User-Agent": config.user_agent},
            timeout=config.request_timeout,
            follow_redirects=True,
        )
        self.logger = get_logger(__name__)

        # Bind the retry policy per instance so the attempt count follows config
        retry = retry or fetch_retry(max_attempts=self.max_attempts)
        self._get = retry(self._raw_get)

    async def _raw_get(self, url: str) -> httpx.Response:
        response = await self.http_client.get(url)
        response.raise_for_status()
        return response

    @log_api_call("wiki_page")
    async def fetch_html(self, url: str) -> BeautifulSoup:
        """Fetch a wiki page and parse it into a document."""
        response = await self._get(url)
        self.logger.debug("Fetched wiki page", url=url, size=len(response.content))
        return parse_html(response.text)

    @log_api_call("wiki_image")
    async def download(self, url: str) -> bytes:
        """Fetch raw bytes, used for character portraits."""
        response = await self._get(url)
        return response.content

    async def close(self) -> None:
        # Injected clients belong to the caller
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "WikiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
