"""Factories shared by the CLI and the MCP server."""

from ddg_web_search.config import Settings
from ddg_web_search.fetcher.web_content import WebContentFetcher
from ddg_web_search.searcher.web_searcher import WebSearcher
from ddg_web_search.tools.registry import ToolRegistry
from ddg_web_search.tools.web import DEFAULT_MAX_CONTENT_LENGTH, FetchWebContentTool, SearchTool
from ddg_web_search.utils.http_client import HttpClient


def create_searcher(settings: Settings, headless: bool | None = None) -> WebSearcher:
    """Build a searcher from settings; ``headless`` overrides the setting."""
    return WebSearcher(
        headless=settings.headless if headless is None else headless,
        rate_limit=settings.search_rate_limit,
        rate_limit_interval_ms=settings.search_rate_interval_ms,
    )


def create_fetcher(settings: Settings) -> WebContentFetcher:
    """Build a fetcher with its own HTTP client from settings."""
    return WebContentFetcher(
        rate_limit=settings.fetch_rate_limit,
        rate_limit_interval_ms=settings.fetch_rate_interval_ms,
        http_client=HttpClient(timeout=settings.http_timeout),
    )


def build_tool_registry(
    *,
    searcher: WebSearcher,
    fetcher: WebContentFetcher,
    max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH,
) -> ToolRegistry:
    """Register the search and fetch tools around shared service objects."""
    registry = ToolRegistry()
    registry.register(SearchTool(searcher))
    registry.register(FetchWebContentTool(fetcher, max_content_length=max_content_length))
    return registry
