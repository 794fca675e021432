"""Base infrastructure for MCP tools.

A tool declares a name, a description and a Pydantic model describing its
arguments. The model is the source of the advertised JSON input schema;
argument checking itself is done by ``parse_arguments`` so that tools can
report the exact error messages their callers rely on.
"""

import time
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from mcp import types
from pydantic import BaseModel, Field

TParams = TypeVar("TParams", bound=BaseModel)

REQUIRED_TOOL_ATTRS = ("name", "description", "parameters_schema")


class ToolError(Exception):
    """Raised by tools for invalid arguments or failed execution."""

    pass


class ToolResult(BaseModel):
    """Outcome of one tool call: response text, or an error message."""

    success: bool
    text: str = Field(default="", description="Text returned to the client")
    error: str | None = Field(default=None, description="Error message if the call failed")
    execution_time: float = Field(default=0.0, description="Seconds spent in the tool")

    @classmethod
    def ok(cls, text: str, execution_time: float = 0.0) -> "ToolResult":
        return cls(success=True, text=text, execution_time=execution_time)

    @classmethod
    def fail(cls, error: str, execution_time: float = 0.0) -> "ToolResult":
        return cls(success=False, error=error, execution_time=execution_time)

    def to_content(self) -> list[types.TextContent]:
        """Render as MCP content blocks (the error text for failures)."""
        return [types.TextContent(type="text", text=self.text if self.success else self.error or "")]

    def __str__(self) -> str:
        return self.text if self.success else f"Error: {self.error}"


def pydantic_to_json_schema(model: type[BaseModel]) -> dict[str, Any]:
    """Convert a Pydantic model to a JSON Schema object for MCP.

    Args:
        model: Pydantic model class

    Returns:
        dict: JSON Schema without the model title
    """
    schema = model.model_json_schema()
    schema.pop("title", None)
    for prop in schema.get("properties", {}).values():
        prop.pop("title", None)
    return schema


class BaseTool(ABC, Generic[TParams]):
    """Abstract base class for MCP tools.

    Subclasses set ``name``, ``description`` and ``parameters_schema`` and
    implement:
    - parse_arguments() - Turn raw MCP arguments into parameters, raising ToolError
    - execute() - The tool logic, returning the text sent to the client

    Type Parameters:
        TParams: Pydantic model defining the tool's parameters
    """

    name: str
    description: str
    parameters_schema: type[BaseModel]

    def __init__(self):
        tool_class = type(self).__name__
        missing = [attr for attr in REQUIRED_TOOL_ATTRS if not hasattr(self, attr)]
        if missing:
            raise ValueError(f"{tool_class} must define class attribute(s): {', '.join(missing)}")

        schema = self.parameters_schema
        if not (isinstance(schema, type) and issubclass(schema, BaseModel)):
            raise ValueError(f"{tool_class}.parameters_schema must be a Pydantic model, got {schema!r}")

    @abstractmethod
    def parse_arguments(self, arguments: dict[str, Any] | None) -> TParams:
        """Validate raw arguments.

        Raises:
            ToolError: If the arguments are missing or invalid
        """

    @abstractmethod
    async def execute(self, params: TParams) -> str:
        """Run the tool.

        Raises:
            ToolError: If execution fails
        """

    def to_mcp_tool(self) -> types.Tool:
        """Describe this tool for ``tools/list``."""
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=pydantic_to_json_schema(self.parameters_schema),
        )

    async def run(self, arguments: dict[str, Any] | None) -> ToolResult:
        """Parse the arguments, execute, and capture any failure as a result.

        Args:
            arguments: Raw arguments from the client

        Returns:
            ToolResult: Text on success, the error message otherwise
        """
        started = time.perf_counter()
        try:
            text = await self.execute(self.parse_arguments(arguments))
        except Exception as e:
            return ToolResult.fail(
                str(e) or "Unknown error occurred",
                execution_time=time.perf_counter() - started,
            )
        return ToolResult.ok(text, execution_time=time.perf_counter() - started)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name='{self.name}'>"
