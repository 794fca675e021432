"""Browser-automated web search."""

from ddg_web_search.searcher.selectors import (
    is_valid_result_url,
    normalize_result_url,
    parse_result_groups,
)
from ddg_web_search.searcher.web_searcher import BrowserInitError, WebSearcher

__all__ = [
    "BrowserInitError",
    "WebSearcher",
    "is_valid_result_url",
    "normalize_result_url",
    "parse_result_groups",
]
