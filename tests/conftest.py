"""Pytest configuration and fixtures for ddg-web-search tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

import ddg_web_search.config as config_module
import ddg_web_search.ui.console as console_module
from ddg_web_search.config import Settings
from ddg_web_search.fetcher import WebContentFetcher
from ddg_web_search.models import FetchResult, SearchResult, WebContent
from ddg_web_search.searcher import WebSearcher


@pytest.fixture(autouse=True)
def reset_globals():
    """Drop cached settings and console between tests."""
    config_module._settings = None
    console_module._console = None
    yield
    config_module._settings = None
    console_module._console = None


@pytest.fixture
def test_settings():
    """Settings that ignore the environment's .env file."""
    return Settings(
        _env_file=None,
        log_level="DEBUG",
        search_rate_limit=100,
        search_rate_interval_ms=10,
        fetch_rate_limit=100,
        fetch_rate_interval_ms=10,
    )


@pytest.fixture
def sample_results():
    """Two search results as the searcher returns them."""
    return [
        SearchResult(
            title="Python Tutorial",
            url="https://docs.python.org/3/tutorial/",
            snippet="The official Python tutorial.",
        ),
        SearchResult(
            title="Real Python",
            url="https://realpython.com/",
            snippet="Python tutorials for developers.",
        ),
    ]


@pytest.fixture
def mock_searcher(sample_results):
    """A WebSearcher stand-in whose search returns sample results."""
    searcher = MagicMock(spec=WebSearcher)
    searcher.search = AsyncMock(return_value=sample_results)
    searcher.close = AsyncMock()
    return searcher


@pytest.fixture
def mock_fetcher():
    """A WebContentFetcher stand-in returning a small page."""
    fetcher = MagicMock(spec=WebContentFetcher)
    fetcher.fetch = AsyncMock(
        return_value=FetchResult.ok(WebContent(content="# Example\n\nHello world"))
    )
    fetcher.aclose = AsyncMock()
    return fetcher


@pytest.fixture
def article_html():
    """A page with metadata, boilerplate and an article body."""
    return """
    <html>
      <head>
        <title>  Test Article  </title>
        <meta name="description" content="A page about testing">
        <meta name="author" content="Jane Doe">
        <meta property="article:published_time" content="2024-01-15">
        <meta property="og:title" content="OG Title">
        <meta property="og:description" content="OG description">
        <meta property="og:url" content="https://example.com/og">
        <meta property="article:author" content="OG Author">
      </head>
      <body>
        <nav>Navigation links</nav>
        <script>var tracking = true;</script>
        <div class="sidebar">Sidebar widget</div>
        <main>
          <h2>Main Heading</h2>
          <p>Real content paragraph with a <a href="https://example.com/link">useful link</a>.</p>
        </main>
        <footer>Footer text</footer>
      </body>
    </html>
    """
