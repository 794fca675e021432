"""Web content fetching and Markdown extraction."""

from ddg_web_search.fetcher.scraper import (
    DEFAULT_REMOVE_SELECTORS,
    MAIN_CONTENT_SELECTORS,
    FetchError,
    fetch_and_scrape,
    scrape_web_page,
)
from ddg_web_search.fetcher.web_content import WebContentFetcher

__all__ = [
    "DEFAULT_REMOVE_SELECTORS",
    "MAIN_CONTENT_SELECTORS",
    "FetchError",
    "WebContentFetcher",
    "fetch_and_scrape",
    "scrape_web_page",
]
