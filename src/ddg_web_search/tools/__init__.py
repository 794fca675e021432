"""MCP tool definitions and registry."""

from ddg_web_search.tools.base import BaseTool, ToolError, ToolResult, pydantic_to_json_schema
from ddg_web_search.tools.factory import build_tool_registry, create_fetcher, create_searcher
from ddg_web_search.tools.registry import ToolRegistry
from ddg_web_search.tools.web import (
    FetchWebContentParams,
    FetchWebContentTool,
    SearchParams,
    SearchTool,
)

__all__ = [
    "BaseTool",
    "ToolError",
    "ToolResult",
    "pydantic_to_json_schema",
    "ToolRegistry",
    "build_tool_registry",
    "create_fetcher",
    "create_searcher",
    "FetchWebContentParams",
    "FetchWebContentTool",
    "SearchParams",
    "SearchTool",
]
