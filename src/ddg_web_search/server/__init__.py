"""MCP server with stdio and HTTP transports."""

from ddg_web_search.server.app import SERVER_NAME, MCPServer, ServerOptions
from ddg_web_search.server.http import create_http_app

__all__ = ["SERVER_NAME", "MCPServer", "ServerOptions", "create_http_app"]
