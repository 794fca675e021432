"""Rich console wrapper with consistent styling for the CLI.

This module provides the SearchConsole class which wraps Rich Console with
a project theme and methods for rendering search and fetch results.
"""

from contextlib import contextmanager
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from ddg_web_search.models import FetchResult, SearchResult
from ddg_web_search.ui.formatters import preview_text

PREVIEW_LENGTH = 500

DDG_THEME = Theme({
    # Primary colors
    "ddg.primary": "cyan",
    "ddg.accent": "magenta",

    # Status colors
    "ddg.success": "green",
    "ddg.error": "red bold",
    "ddg.warning": "yellow",
    "ddg.info": "cyan",

    # Result elements
    "ddg.title": "bold",
    "ddg.url": "blue",
    "ddg.text": "white",
    "ddg.example": "yellow",
    "ddg.footer": "dim",
})

COMMANDS: list[tuple[str, str]] = [
    ("search <query>", "Search the web for the given query"),
    ("fetch <url>", "Fetch content from a specific URL"),
    ("interactive", "Start interactive mode"),
    ("config", "Show current configuration"),
    ("help", "Show this help message"),
    ("version", "Show version information"),
]

EXAMPLES: list[str] = [
    'ddg-web-search search "Python tutorials"',
    "ddg-web-search fetch https://example.com",
    "ddg-web-search interactive",
]


class SearchConsole:
    """Rich console with ddg-web-search styling.

    Attributes:
        console: The underlying Rich Console instance
    """

    def __init__(self, no_color: bool = False, verbose: bool = False):
        """Initialize the console.

        Args:
            no_color: Disable colored output
            verbose: Enable verbose output
        """
        self.console = Console(
            theme=DDG_THEME,
            highlight=False,
            no_color=no_color,
        )
        self.verbose = verbose
        self.no_color = no_color

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Print to console (passthrough to Rich Console)."""
        self.console.print(*args, **kwargs)

    def banner(self) -> None:
        """Display the CLI banner."""
        self.console.print()
        self.console.print("🦆 DDG Web Search CLI", style="ddg.primary")
        self.console.print("=" * 50, style="ddg.primary")
        self.console.print("Interactive search and web content fetching tool\n", style="ddg.text")

    def help(self) -> None:
        """Display the command list and examples."""
        self.console.print("\n📖 Available Commands:\n", style="ddg.title")
        for command, text in COMMANDS:
            self.console.print(f"  {command:<19} - {text}", style="ddg.text")
        self.console.print("\n📝 Examples:", style="ddg.title")
        for example in EXAMPLES:
            self.console.print(f"  {example}", style="ddg.example")
        self.console.print()

    def version_info(self, name: str, version: str, description: str) -> None:
        """Display package name, version and description."""
        self.console.print(f"\n📦 Package: {name}", style="ddg.primary")
        self.console.print(f"🔢 Version: {version}", style="ddg.primary")
        self.console.print(f"📝 Description: {description}\n", style="ddg.text")

    def show_config(self, config_dict: dict[str, Any]) -> None:
        """Display configuration settings.

        Args:
            config_dict: Dictionary of configuration settings
        """
        table = Table(title="ddg-web-search Configuration", show_header=True)
        table.add_column("Setting", style="ddg.primary")
        table.add_column("Value", style="ddg.info")

        for key, value in config_dict.items():
            table.add_row(key, str(value))

        self.console.print(table)

    def search_results(self, results: list[SearchResult]) -> None:
        """Display numbered search results.

        Args:
            results: Results to display
        """
        if not results:
            self.warning("No search results found.")
            return

        self.success(f"Found {len(results)} search results:\n")
        for index, result in enumerate(results, start=1):
            self.console.print(f"{index}. {result.title}", style="ddg.title", markup=False)
            self.console.print(f"   🔗 {result.url}", style="ddg.url", markup=False)
            if result.snippet:
                self.console.print(f"   📄 {result.snippet}", style="ddg.text", markup=False)
            if result.icon:
                self.console.print(f"   🎯 {result.icon}", style="ddg.text", markup=False)
            self.console.print()

    def fetch_result(self, result: FetchResult, url: str) -> None:
        """Display a fetch outcome with a content preview.

        Args:
            result: Fetch result
            url: The fetched URL
        """
        if not result.success:
            self.error(f"Failed to fetch content: {result.error or 'Unknown error'}")
            return

        content = result.data.content if result.data else ""
        self.success("Content fetched successfully!")
        self.console.print(f"📄 URL: {url}", style="ddg.url", markup=False)
        self.console.print(f"📊 Content Length: {len(content)} characters", style="ddg.info")

        if content:
            self.console.print(
                f"\n📝 Content Preview (first {PREVIEW_LENGTH} characters):",
                style="ddg.title",
            )
            self.console.print("─" * 50, style="ddg.footer")
            self.console.print(preview_text(content, PREVIEW_LENGTH), style="ddg.text", markup=False)
            self.console.print("─" * 50, style="ddg.footer")

    def error(self, message: str, exception: Exception | None = None) -> None:
        """Display an error message.

        Args:
            message: Error message
            exception: Optional exception object
        """
        self.console.print(f"❌ Error: {message}", style="ddg.error", markup=False)

        if exception and self.verbose:
            self.console.print_exception(show_locals=False)

    def warning(self, message: str) -> None:
        """Display a warning message."""
        self.console.print(f"⚠️  {message}", style="ddg.warning", markup=False)

    def success(self, message: str) -> None:
        """Display a success message."""
        self.console.print(f"✅ {message}", style="ddg.success", markup=False)

    def info(self, message: str) -> None:
        """Display an informational message."""
        self.console.print(f"ℹ️  {message}", style="ddg.info", markup=False)

    def debug(self, message: str) -> None:
        """Display a debug message (only in verbose mode)."""
        if self.verbose:
            self.console.print(f"[DEBUG] {message}", style="dim", markup=False)

    @contextmanager
    def working(self, message: str):
        """Context manager for showing a spinner while waiting.

        Args:
            message: Message to show while waiting

        Yields:
            The status object
        """
        with self.console.status(f"[ddg.warning]{message}[/ddg.warning]", spinner="dots") as status:
            yield status

    def clear(self) -> None:
        """Clear the console screen."""
        self.console.clear()


# Global console instance
_console: SearchConsole | None = None


def get_console(no_color: bool = False, verbose: bool = False) -> SearchConsole:
    """Get the global console instance.

    Args:
        no_color: Disable colored output
        verbose: Enable verbose output

    Returns:
        SearchConsole: The global console instance
    """
    global _console
    if _console is None:
        _console = SearchConsole(no_color=no_color, verbose=verbose)
    return _console
