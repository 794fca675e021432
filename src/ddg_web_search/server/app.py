"""MCP server exposing web search and web content fetching.

Tools:
1. search - Search the web for results
2. fetch_web_content - Fetch and parse content from a web URL

Supports the stdio transport and an HTTP transport with SSE sessions.
"""

from typing import Any, Literal

import uvicorn
from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from pydantic import BaseModel, Field

from ddg_web_search import __version__
from ddg_web_search.fetcher.web_content import WebContentFetcher
from ddg_web_search.logging import get_logger
from ddg_web_search.searcher.web_searcher import WebSearcher
from ddg_web_search.tools.base import ToolError
from ddg_web_search.tools.factory import build_tool_registry
from ddg_web_search.tools.web import DEFAULT_MAX_CONTENT_LENGTH

logger = get_logger("ddg_web_search.server")

SERVER_NAME = "ddg-web-search"
SERVER_TITLE = "DDG Web Search MCP Server"


class ServerOptions(BaseModel):
    """Transport settings for the MCP server."""

    transport: Literal["stdio", "http"] = "stdio"
    host: str = "localhost"
    port: int = Field(default=3001, ge=1, le=65535)
    max_content_length: int = Field(default=DEFAULT_MAX_CONTENT_LENGTH, ge=1)


class MCPServer:
    """MCP server wrapping one searcher and one fetcher.

    Tool failures are raised as exceptions inside the handlers; the MCP SDK
    turns them into ``CallToolResult`` objects with ``isError`` set.
    SDK-side schema validation is disabled so that argument errors carry the
    tools' own messages.
    """

    def __init__(
        self,
        options: ServerOptions | None = None,
        searcher: WebSearcher | None = None,
        fetcher: WebContentFetcher | None = None,
    ):
        """Initialize the server.

        Args:
            options: Transport options
            searcher: Searcher to use (a default one is created if None)
            fetcher: Fetcher to use (a default one is created if None)
        """
        self.options = options or ServerOptions()
        self.searcher = searcher or WebSearcher()
        self.fetcher = fetcher or WebContentFetcher()
        self.registry = build_tool_registry(
            searcher=self.searcher,
            fetcher=self.fetcher,
            max_content_length=self.options.max_content_length,
        )
        self.server: Server = Server(SERVER_NAME, version=__version__)
        self._setup_tool_handlers()

    def _setup_tool_handlers(self) -> None:
        @self.server.list_tools()
        async def handle_list_tools() -> list[types.Tool]:
            return self.list_tools()

        @self.server.call_tool(validate_input=False)
        async def handle_call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
            return await self.call_tool(name, arguments)

    def list_tools(self) -> list[types.Tool]:
        """Describe the available tools."""
        return self.registry.get_mcp_tools()

    async def call_tool(
        self,
        name: str,
        arguments: dict[str, Any] | None,
    ) -> list[types.TextContent]:
        """Run a tool by name.

        Args:
            name: Tool name
            arguments: Raw tool arguments

        Returns:
            list[TextContent]: The tool output

        Raises:
            ToolError: For unknown tools, invalid arguments or failed execution
        """
        tool = self.registry.get(name)
        if tool is None:
            raise ToolError(f"Unknown tool: {name}")

        result = await tool.run(arguments)
        if not result.success:
            logger.warning("Tool call failed", tool=name, error=result.error)
            raise ToolError(result.error)

        logger.info(
            "Tool call finished",
            tool=name,
            chars=len(result.text),
            elapsed_s=f"{result.execution_time:.3f}",
        )
        return result.to_content()

    def server_info(self) -> dict[str, Any]:
        """Describe the server for the HTTP transport's root route."""
        return {
            "name": SERVER_TITLE,
            "version": __version__,
            "transport": "http",
            "endpoints": {
                "sse": "/sse",
                "message": "/message/{sessionId}",
            },
        }

    async def run(self) -> None:
        """Serve on the configured transport until stopped, then clean up."""
        try:
            if self.options.transport == "stdio":
                await self.run_stdio()
            else:
                await self.run_http()
        finally:
            await self.close()

    async def run_stdio(self) -> None:
        """Serve over stdin/stdout."""
        logger.info(f"{SERVER_TITLE} running on stdio")
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )

    async def run_http(self) -> None:
        """Serve the HTTP transport with uvicorn."""
        from ddg_web_search.server.http import create_http_app

        host, port = self.options.host, self.options.port
        config = uvicorn.Config(
            create_http_app(self),
            host=host,
            port=port,
            log_level="warning",
        )
        logger.info(f"{SERVER_TITLE} running on http://{host}:{port}")
        logger.info(f"SSE endpoint: http://{host}:{port}/sse")
        await uvicorn.Server(config).serve()

    async def close(self) -> None:
        """Release the browser and HTTP connections."""
        await self.searcher.close()
        await self.fetcher.aclose()
