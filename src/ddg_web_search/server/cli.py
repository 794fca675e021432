"""Command-line entry point for the MCP server."""

import asyncio

import click

from ddg_web_search.config import get_settings
from ddg_web_search.logging import setup_logging
from ddg_web_search.server.app import MCPServer, ServerOptions
from ddg_web_search.tools.factory import create_fetcher, create_searcher


@click.command(context_settings={"help_option_names": ["--help"]})
@click.option(
    "--transport",
    "-t",
    type=click.Choice(["stdio", "http"]),
    default=None,
    help="Transport type (default: stdio)",
)
@click.option(
    "--port",
    "-p",
    type=click.IntRange(1, 65535),
    default=None,
    help="Port for HTTP transport (default: 3001)",
)
@click.option("--host", "-h", default=None, help="Host for HTTP transport (default: localhost)")
@click.option("--headed", is_flag=True, help="Show the browser window (allows solving captchas)")
@click.option("--debug", "-d", is_flag=True, help="Enable debug logging")
def main(
    transport: str | None,
    port: int | None,
    host: str | None,
    headed: bool,
    debug: bool,
) -> None:
    """DDG Web Search MCP Server

    \b
    Examples:
      ddg-web-search-mcp                              # stdio transport
      ddg-web-search-mcp --transport http             # HTTP on the default port
      ddg-web-search-mcp -t http -p 8080              # HTTP on port 8080
      ddg-web-search-mcp -t http -h 0.0.0.0 -p 3000   # HTTP on all interfaces
    """
    settings = get_settings()
    setup_logging(level="DEBUG" if debug else settings.log_level, log_file=settings.log_file)

    options = ServerOptions(
        transport=transport or settings.mcp_transport,
        host=host or settings.mcp_host,
        port=port or settings.mcp_port,
        max_content_length=settings.max_content_length,
    )
    server = MCPServer(
        options=options,
        searcher=create_searcher(settings, headless=False if headed else None),
        fetcher=create_fetcher(settings),
    )

    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
