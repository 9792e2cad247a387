# ABOUTME: Tests for the httpx-based wiki client
# ABOUTME: Uses pytest-httpx to mock responses for page parsing, downloads and retry behaviour

import httpx
import pytest

from nikkedex.fetch.wiki import WikiClient
from nikkedex.utils.retry import FetchError, RateLimitError, ServerError

PAGE_URL = "https://nikke.example.fandom.com/wiki/Rapi"


class TestWikiClient:
    """Test page and byte fetching."""

    @pytest.mark.asyncio
    async def test_fetch_html_parses_document(self, httpx_mock, fast_retry):
        httpx_mock.add_response(url=PAGE_URL, html='<h2 data-source="title">Rapi</h2>')

        async with httpx.AsyncClient() as http_client:
            client = WikiClient(client=http_client, retry=fast_retry)
            document = await client.fetch_html(PAGE_URL)

        assert document.select_one("[data-source=title]").get_text() == "Rapi"

    @pytest.mark.asyncio
    async def test_download_returns_bytes(self, httpx_mock, fast_retry):
        httpx_mock.add_response(url="https://cdn.example.net/Rapi_Icon.png", content=b"\x89PNG")

        async with httpx.AsyncClient() as http_client:
            client = WikiClient(client=http_client, retry=fast_retry)
            data = await client.download("https://cdn.example.net/Rapi_Icon.png")

        assert data == b"\x89PNG"

    @pytest.mark.asyncio
    async def test_default_client_sends_user_agent(self, httpx_mock, fast_retry):
        httpx_mock.add_response(url=PAGE_URL, html="<p></p>")

        async with WikiClient(retry=fast_retry) as client:
            await client.fetch_html(PAGE_URL)

        request = httpx_mock.get_request()
        assert request.headers["User-Agent"].startswith("nikkedex/")

    @pytest.mark.asyncio
    async def test_injected_client_not_closed(self, fast_retry):
        http_client = httpx.AsyncClient()
        client = WikiClient(client=http_client, retry=fast_retry)
        await client.close()

        assert not http_client.is_closed
        await http_client.aclose()


class TestWikiClientErrors:
    """Test conversion and retry of failed requests."""

    @pytest.mark.asyncio
    async def test_server_error_retried_then_succeeds(self, httpx_mock, fast_retry):
        httpx_mock.add_response(url=PAGE_URL, status_code=503)
        httpx_mock.add_response(url=PAGE_URL, html="<p>ok</p>")

        async with httpx.AsyncClient() as http_client:
            client = WikiClient(client=http_client, retry=fast_retry)
            document = await client.fetch_html(PAGE_URL)

        assert document.get_text() == "ok"
        assert len(httpx_mock.get_requests()) == 2

    @pytest.mark.asyncio
    async def test_server_error_exhausts_attempts(self, httpx_mock, fast_retry):
        for _ in range(3):
            httpx_mock.add_response(url=PAGE_URL, status_code=500)

        async with httpx.AsyncClient() as http_client:
            client = WikiClient(client=http_client, retry=fast_retry)
            with pytest.raises(ServerError):
                await client.fetch_html(PAGE_URL)

        assert len(httpx_mock.get_requests()) == 3

    @pytest.mark.asyncio
    async def test_not_found_is_not_retried(self, httpx_mock, fast_retry):
        httpx_mock.add_response(url=PAGE_URL, status_code=404)

        async with httpx.AsyncClient() as http_client:
            client = WikiClient(client=http_client, retry=fast_retry)
            with pytest.raises(FetchError) as exc_info:
                await client.fetch_html(PAGE_URL)

        assert type(exc_info.value) is FetchError
        assert "404" in str(exc_info.value)
        assert len(httpx_mock.get_requests()) == 1

    @pytest.mark.asyncio
    async def test_rate_limit_is_retried(self, httpx_mock, fast_retry):
        httpx_mock.add_response(url=PAGE_URL, status_code=429)
        httpx_mock.add_response(url=PAGE_URL, status_code=429)
        httpx_mock.add_response(url=PAGE_URL, status_code=429)

        async with httpx.AsyncClient() as http_client:
            client = WikiClient(client=http_client, retry=fast_retry)
            with pytest.raises(RateLimitError):
                await client.fetch_html(PAGE_URL)
