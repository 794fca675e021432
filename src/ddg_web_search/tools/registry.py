"""Tool registry used by the MCP server for listing and dispatch."""

from collections.abc import Iterator

from mcp import types

from ddg_web_search.logging import get_logger
from ddg_web_search.tools.base import BaseTool

logger = get_logger("ddg_web_search.tools.registry")


class ToolRegistry:
    """Tools keyed by the name clients call them with, in registration order.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.register(SearchTool(searcher))
        >>> registry.get("search")
    """

    def __init__(self):
        self._by_name: dict[str, BaseTool] = {}

    def register(self, tool: BaseTool) -> None:
        """Add a tool under its ``name``.

        Raises:
            ValueError: If another tool already uses that name
        """
        existing = self._by_name.get(tool.name)
        if existing is not None:
            raise ValueError(f"Tool name '{tool.name}' already registered by {existing!r}")

        self._by_name[tool.name] = tool
        logger.debug("Registered tool", tool=tool.name)

    def get(self, name: str) -> BaseTool | None:
        """Look up the tool for a ``tools/call`` request."""
        return self._by_name.get(name)

    def names(self) -> list[str]:
        return list(self._by_name)

    def get_mcp_tools(self) -> list[types.Tool]:
        """Describe every tool for a ``tools/list`` response."""
        return [tool.to_mcp_tool() for tool in self]

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[BaseTool]:
        return iter(self._by_name.values())

    def __repr__(self) -> str:
        return f"<ToolRegistry [{', '.join(self._by_name)}]>"
