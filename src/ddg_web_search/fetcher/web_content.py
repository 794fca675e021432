"""Rate-limited web content fetcher."""

from typing import Any

from ddg_web_search.fetcher.scraper import FetchError, scrape_web_page
from ddg_web_search.logging import AsyncTimer, get_logger
from ddg_web_search.models import FetchResult, ScraperOptions, WebContent
from ddg_web_search.utils.http_client import HttpClient
from ddg_web_search.utils.rate_limiter import RateLimiter
from ddg_web_search.utils.urls import is_valid_url

logger = get_logger("ddg_web_search.fetcher.web_content")

DEFAULT_RATE_LIMIT = 1
DEFAULT_RATE_LIMIT_INTERVAL_MS = 1000


class WebContentFetcher:
    """Fetch a URL and convert it to Markdown.

    Failures never raise: validation, network and parsing errors are all
    reported through ``FetchResult.error``.
    """

    def __init__(
        self,
        rate_limit: int = DEFAULT_RATE_LIMIT,
        rate_limit_interval_ms: int = DEFAULT_RATE_LIMIT_INTERVAL_MS,
        http_client: HttpClient | None = None,
    ):
        """Initialize the fetcher.

        Args:
            rate_limit: Requests allowed per interval
            rate_limit_interval_ms: Interval length in milliseconds
            http_client: HTTP client to use; a default one is created if None
        """
        self.rate_limiter = RateLimiter(rate_limit, rate_limit_interval_ms)
        self.http_client = http_client or HttpClient()
        self.scraper_options = ScraperOptions(
            clean_whitespace=True,
            include_metadata=True,
            include_links=True,
        )

    async def fetch(self, url: str) -> FetchResult:
        """Fetch content from a URL with rate limiting.

        Args:
            url: The URL to fetch

        Returns:
            FetchResult: Extracted content or an error message
        """
        if not url or not url.strip():
            return FetchResult.fail("URL cannot be empty")

        if not is_valid_url(url):
            return FetchResult.fail("Invalid URL format")

        await self.rate_limiter.acquire()

        try:
            async with AsyncTimer("fetch", logger, url=url):
                response = await self.http_client.get(url.strip())
            content = self._parse_content(response)
        except Exception as e:
            message = str(e) or type(e).__name__
            logger.warning("Fetch failed", url=url, error=message)
            return FetchResult.fail(f"Failed to fetch content: {message}")

        logger.info("Fetched content", url=url, chars=len(content.content))
        return FetchResult.ok(content)

    def _parse_content(self, data: Any) -> WebContent:
        # A whitespace-only body is still handed to the scraper
        if not data or not isinstance(data, str):
            raise FetchError("No content received")

        return scrape_web_page(data, None, self.scraper_options)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.http_client.aclose()
