"""Main entry point for the ddg-web-search CLI.

This module provides the command-line interface using Click, including
one-shot search and fetch commands and an interactive prompt loop.
"""

import asyncio
from typing import Awaitable, Callable

import click

from ddg_web_search import __version__
from ddg_web_search.config import get_settings
from ddg_web_search.fetcher import WebContentFetcher
from ddg_web_search.logging import get_logger, setup_logging
from ddg_web_search.searcher import WebSearcher
from ddg_web_search.tools.factory import create_fetcher, create_searcher
from ddg_web_search.ui.console import SearchConsole, get_console
from ddg_web_search.utils.urls import is_valid_url

PACKAGE_NAME = "ddg-web-search"
PACKAGE_DESCRIPTION = (
    "Web search via DuckDuckGo browser automation and web content fetching "
    "with an MCP server"
)

logger = get_logger(__name__)


class SearchCLI:
    """Terminal front end over a searcher and a fetcher.

    The CLI owns both services and closes them in :meth:`close`.
    """

    def __init__(self, console: SearchConsole, searcher: WebSearcher, fetcher: WebContentFetcher):
        self.console = console
        self.searcher = searcher
        self.fetcher = fetcher

    async def search(self, query: str) -> None:
        """Run a search and print the results."""
        if not query.strip():
            self.console.error("Search query cannot be empty")
            return

        self.console.info(f'Searching for: "{query}"')
        try:
            with self.console.working("🔍 Searching..."):
                results = await self.searcher.search(query)
        except Exception as e:
            self.console.error(f"Search failed: {e}", exception=e)
            return

        self.console.search_results(results)

    async def fetch(self, url: str) -> None:
        """Fetch a page and print a preview of its content."""
        if not url.strip():
            self.console.error("URL cannot be empty")
            return

        if not is_valid_url(url):
            self.console.error("Invalid URL format")
            return

        self.console.info(f"Fetching content from: {url}")
        try:
            with self.console.working("📥 Fetching..."):
                result = await self.fetcher.fetch(url)
        except Exception as e:
            self.console.error(f"Fetch failed: {e}", exception=e)
            return

        self.console.fetch_result(result, url)

    def help(self) -> None:
        self.console.help()

    def version(self) -> None:
        self.console.version_info(PACKAGE_NAME, __version__, PACKAGE_DESCRIPTION)

    async def dispatch(self, line: str) -> bool:
        """Execute one interactive command line.

        Args:
            line: Raw input line

        Returns:
            bool: False when the loop should stop, True otherwise
        """
        command, _, argument = line.strip().partition(" ")
        command = command.lower()
        argument = argument.strip()

        if command in ("search", "s"):
            if argument:
                await self.search(argument)
            else:
                self.console.error("Usage: search <query>")
        elif command in ("fetch", "f"):
            if argument:
                await self.fetch(argument)
            else:
                self.console.error("Usage: fetch <url>")
        elif command in ("help", "h"):
            self.help()
        elif command in ("version", "v"):
            self.version()
        elif command in ("clear", "cls"):
            self.console.clear()
            self.console.banner()
        elif command in ("exit", "quit", "q"):
            self.console.print("👋 Goodbye!", style="ddg.primary")
            return False
        else:
            self.console.error(f"Unknown command: {command}")
            self.console.print('Type "help" for available commands', style="ddg.text")

        self.console.print()
        return True

    async def interactive(self) -> None:
        """Read commands from the terminal until exit or end of input."""
        self.console.print("\n🎯 Interactive Mode Started", style="ddg.success")
        self.console.print('Type "help" for commands, "exit" to quit\n', style="ddg.text")

        while True:
            try:
                line = self.console.console.input("🦆 ddg> ")
            except (EOFError, KeyboardInterrupt):
                self.console.print("\n👋 Goodbye!", style="ddg.primary")
                return

            if not line.strip():
                continue

            if not await self.dispatch(line):
                return

    async def close(self) -> None:
        """Release the browser and the HTTP client."""
        await self.searcher.close()
        await self.fetcher.aclose()


def build_cli(options: dict) -> SearchCLI:
    """Create a SearchCLI from the group options stored in the click context."""
    settings = get_settings()
    console = get_console(no_color=options["no_color"], verbose=options["verbose"] or options["debug"])
    return SearchCLI(
        console=console,
        searcher=create_searcher(settings, headless=False if options["headed"] else None),
        fetcher=create_fetcher(settings),
    )


async def run_command(options: dict, action: Callable[[SearchCLI], Awaitable[None]]) -> None:
    """Run one CLI action and always close the services afterwards."""
    app = build_cli(options)
    try:
        await action(app)
    finally:
        await app.close()
        logger.debug("CLI services closed")


@click.group(invoke_without_command=True)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", "-d", is_flag=True, help="Enable debug mode (very detailed logging)")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--headed", is_flag=True, help="Show the browser window (allows solving captchas)")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool, no_color: bool, headed: bool):
    """DDG Web Search - search the web and fetch page content from the terminal."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["no_color"] = no_color
    ctx.obj["headed"] = headed

    settings = get_settings()
    if debug:
        setup_logging(level="DEBUG", log_file=settings.log_file)
    elif verbose:
        setup_logging(level="INFO", log_file=settings.log_file)
    else:
        setup_logging(level=settings.log_level, log_file=settings.log_file)

    console = get_console(no_color=no_color, verbose=verbose or debug)
    console.banner()

    # No subcommand shows the command list
    if ctx.invoked_subcommand is None:
        console.help()


@cli.command()
@click.argument("query", nargs=-1)
@click.pass_obj
def search(obj: dict, query: tuple[str, ...]):
    """Search the web for the given query."""
    text = " ".join(query)
    if not text:
        console = get_console()
        console.error("Usage: ddg-web-search search <query>")
        console.print('Example: ddg-web-search search "Python tutorials"', style="ddg.example")
        return
    asyncio.run(run_command(obj, lambda app: app.search(text)))


@cli.command()
@click.argument("url", required=False, default="")
@click.pass_obj
def fetch(obj: dict, url: str):
    """Fetch content from a specific URL."""
    if not url:
        console = get_console()
        console.error("Usage: ddg-web-search fetch <url>")
        console.print("Example: ddg-web-search fetch https://example.com", style="ddg.example")
        return
    asyncio.run(run_command(obj, lambda app: app.fetch(url)))


@cli.command()
@click.pass_obj
def interactive(obj: dict):
    """Start interactive mode."""
    asyncio.run(run_command(obj, lambda app: app.interactive()))


@cli.command()
def config():
    """Show current configuration."""
    get_console().show_config(get_settings().model_dump_safe())


@cli.command(name="help")
def help_command():
    """Show the available commands."""
    get_console().help()


@cli.command()
def version():
    """Show version information."""
    get_console().version_info(PACKAGE_NAME, __version__, PACKAGE_DESCRIPTION)


def main() -> None:
    """Entry point for the ddg-web-search script."""
    cli(obj={})


if __name__ == "__main__":
    main()
