"""ddg-web-search - DuckDuckGo web search and web content fetching.

Provides a browser-automated searcher, an HTTP content fetcher with
HTML-to-Markdown extraction, a CLI and an MCP server.
"""

__version__ = "1.0.2"

from ddg_web_search.config import Settings, get_settings, reload_settings
from ddg_web_search.fetcher import WebContentFetcher, fetch_and_scrape, scrape_web_page
from ddg_web_search.models import (
    FetchResult,
    PageMetadata,
    RateLimiterStatus,
    ScraperOptions,
    ScraperSelectors,
    SearchResult,
    WebContent,
)
from ddg_web_search.searcher import WebSearcher
from ddg_web_search.utils import HttpClient, RateLimiter

__all__ = [
    "FetchResult",
    "HttpClient",
    "PageMetadata",
    "RateLimiter",
    "RateLimiterStatus",
    "ScraperOptions",
    "ScraperSelectors",
    "SearchResult",
    "Settings",
    "WebContent",
    "WebContentFetcher",
    "WebSearcher",
    "fetch_and_scrape",
    "get_settings",
    "reload_settings",
    "scrape_web_page",
    "__version__",
]
