"""Terminal output for the CLI."""

from ddg_web_search.ui.console import DDG_THEME, SearchConsole, get_console
from ddg_web_search.ui.formatters import format_search_results, preview_text, truncate_content

__all__ = [
    "DDG_THEME",
    "SearchConsole",
    "get_console",
    "format_search_results",
    "preview_text",
    "truncate_content",
]
