"""HTTP transport: server info, SSE sessions and message delivery."""

from typing import TYPE_CHECKING
from urllib.parse import urlencode

from mcp.server.sse import SseServerTransport
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route
from starlette.types import Receive, Scope, Send

from ddg_web_search.logging import get_logger

if TYPE_CHECKING:
    from ddg_web_search.server.app import MCPServer

logger = get_logger("ddg_web_search.server.http")

MESSAGE_PATH = "/message/"


class SseEndpoint:
    """ASGI endpoint that opens an SSE session and runs the MCP server on it."""

    def __init__(self, mcp_server: "MCPServer", transport: SseServerTransport):
        self.mcp_server = mcp_server
        self.transport = transport

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        server = self.mcp_server.server
        async with self.transport.connect_sse(scope, receive, send) as (read_stream, write_stream):
            logger.info("SSE connection established")
            await server.run(read_stream, write_stream, server.create_initialization_options())
        logger.info("SSE connection closed")


class SessionMessageEndpoint:
    """ASGI endpoint for ``POST /message/{session_id}``.

    The SDK transport reads the session from the query string, so the path
    parameter is moved there before delegating.
    """

    def __init__(self, transport: SseServerTransport):
        self.transport = transport

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        session_id = scope["path_params"]["session_id"]
        scope = {**scope, "query_string": urlencode({"session_id": session_id}).encode()}
        await self.transport.handle_post_message(scope, receive, send)


def create_http_app(mcp_server: "MCPServer") -> Starlette:
    """Build the Starlette application for the HTTP transport.

    Routes:
        GET  /                      server info JSON
        GET  /sse                   event stream for a new session
        POST /message/{sessionId}   message for an established session
        POST /message/?session_id=  same, in the form the SDK advertises
    """
    transport = SseServerTransport(MESSAGE_PATH)

    async def server_info(request: Request) -> JSONResponse:
        return JSONResponse(mcp_server.server_info())

    routes = [
        Route("/", endpoint=server_info, methods=["GET"]),
        Route("/sse", endpoint=SseEndpoint(mcp_server, transport), methods=["GET"]),
        Route(
            "/message/{session_id}",
            endpoint=SessionMessageEndpoint(transport),
            methods=["POST"],
        ),
        Mount(MESSAGE_PATH, app=transport.handle_post_message),
    ]
    middleware = [
        Middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type"],
        )
    ]
    return Starlette(routes=routes, middleware=middleware)
