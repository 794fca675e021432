"""Tests for WebContentFetcher."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from ddg_web_search.fetcher.web_content import WebContentFetcher
from ddg_web_search.utils.http_client import HttpClient


@pytest.fixture
def http_client():
    """An HttpClient stand-in."""
    client = MagicMock(spec=HttpClient)
    client.get = AsyncMock(return_value="<html><body><p>Hello</p></body></html>")
    client.aclose = AsyncMock()
    return client


@pytest.fixture
def fetcher(http_client):
    """A fetcher with a fast rate limiter and the stand-in client."""
    return WebContentFetcher(rate_limit=100, rate_limit_interval_ms=10, http_client=http_client)


class TestWebContentFetcherInit:
    """Test construction."""

    def test_defaults(self):
        """Test the default rate limit and scraper options."""
        fetcher = WebContentFetcher()

        status = fetcher.rate_limiter.get_status()
        assert status.limit == 1
        assert status.interval == 1000
        assert isinstance(fetcher.http_client, HttpClient)
        assert fetcher.scraper_options.include_metadata is True
        assert fetcher.scraper_options.include_links is True
        assert fetcher.scraper_options.clean_whitespace is True

    def test_custom_rate_limit(self):
        """Test that the rate limit is configurable."""
        fetcher = WebContentFetcher(rate_limit=5, rate_limit_interval_ms=2000)

        status = fetcher.rate_limiter.get_status()
        assert status.limit == 5
        assert status.interval == 2000


class TestWebContentFetcherValidation:
    """Test URL validation."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", ["", "   "])
    async def test_empty_url(self, fetcher, http_client, url):
        """Test that blank URLs fail without touching the client."""
        result = await fetcher.fetch(url)

        assert result.success is False
        assert result.error == "URL cannot be empty"
        assert result.data is None
        http_client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_url(self, fetcher, http_client):
        """Test that unparseable URLs fail without touching the client."""
        result = await fetcher.fetch("not-a-url")

        assert result.success is False
        assert result.error == "Invalid URL format"
        http_client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_validation_does_not_consume_rate_limit(self, fetcher):
        """Test that rejected URLs never reach the rate limiter."""
        fetcher.rate_limiter.acquire = AsyncMock()

        await fetcher.fetch("")
        await fetcher.fetch("not-a-url")

        fetcher.rate_limiter.acquire.assert_not_called()


class TestWebContentFetcherFetch:
    """Test fetching and parsing."""

    @pytest.mark.asyncio
    async def test_success(self, fetcher, http_client):
        """Test a successful fetch."""
        fetcher.rate_limiter.acquire = AsyncMock()

        result = await fetcher.fetch("https://example.com")

        assert result.success is True
        assert result.error is None
        assert result.data.content == "Hello"
        assert result.data.metadata is not None
        http_client.get.assert_awaited_once_with("https://example.com")
        fetcher.rate_limiter.acquire.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_scrapes_without_source_url(self, fetcher, http_client):
        """Test that the metadata url only comes from the page itself."""
        http_client.get.return_value = "<html><head><title>T</title></head><body>x</body></html>"

        result = await fetcher.fetch("https://example.com/page")

        assert result.data.metadata.url is None
        assert "Source:" not in result.data.content

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [None, "", 42, b"<html></html>", {"a": 1}])
    async def test_no_content(self, fetcher, http_client, body):
        """Test that falsy or non-text bodies are reported as no content."""
        http_client.get.return_value = body

        result = await fetcher.fetch("https://example.com")

        assert result.success is False
        assert result.error == "Failed to fetch content: No content received"

    @pytest.mark.asyncio
    async def test_whitespace_body_is_content(self, fetcher, http_client):
        """Test that a whitespace-only body counts as (empty) content."""
        http_client.get.return_value = "   "

        result = await fetcher.fetch("https://example.com")

        assert result.success is True
        assert result.data.content == ""

    @pytest.mark.asyncio
    async def test_client_error(self, fetcher, http_client):
        """Test that client exceptions become error values."""
        http_client.get.side_effect = httpx.ConnectError("Network error")

        result = await fetcher.fetch("https://example.com")

        assert result.success is False
        assert result.error == "Failed to fetch content: Network error"

    @pytest.mark.asyncio
    async def test_error_without_message(self, fetcher, http_client):
        """Test that a message-less exception is reported by its type."""
        http_client.get.side_effect = TimeoutError()

        result = await fetcher.fetch("https://example.com")

        assert result.error == "Failed to fetch content: TimeoutError"

    @pytest.mark.asyncio
    async def test_aclose(self, fetcher, http_client):
        """Test that closing the fetcher closes its client."""
        await fetcher.aclose()
        http_client.aclose.assert_awaited_once()
