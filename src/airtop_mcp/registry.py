"""
Tool registry: declaration, validation and dispatch of MCP tools.

Tools are registered once at startup. ``invoke`` is the single entry point the
transports use; apart from an unknown tool name it never raises: validation
failures, backend-reported errors and handler exceptions all come back as an
error-flagged ToolResult.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from mcp import types
from pydantic import BaseModel, ValidationError

from .decorators import tool_envelope
from .envelope import ToolResult, error_result
from .exceptions import DuplicateToolError, UnknownToolError

import logging
logger = logging.getLogger(__name__)

EMPTY_INPUT_SCHEMA: Dict[str, Any] = {"type": "object", "properties": {}}

Handler = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class Tool:
    """
    A named, schema-described operation.

    Attributes:
        name: Unique tool name
        description: Text shown to the agent
        handler: Enveloped coroutine function; receives the validated input model
            when ``input_model`` is set, nothing otherwise
        input_model: Optional pydantic model used to validate raw arguments
    """

    name: str
    description: str
    handler: Handler
    input_model: Optional[Type[BaseModel]] = None

    def input_schema(self) -> Dict[str, Any]:
        if self.input_model is None:
            return dict(EMPTY_INPUT_SCHEMA)
        return self.input_model.model_json_schema(by_alias=True)

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(name=self.name, description=self.description, inputSchema=self.input_schema())


def format_validation_error(tool_name: str, err: ValidationError) -> str:
    lines = [f"Invalid arguments for tool {tool_name}:"]
    for issue in err.errors():
        location = ".".join(str(part) for part in issue.get("loc", ())) or "(input)"
        lines.append(f"- {location}: {issue.get('msg', 'invalid value')}")
    return "\n".join(lines)


class ToolRegistry:
    """
    Args:
        include_traceback: Append the traceback to internal-error results of
            every tool registered here
    """

    def __init__(self, include_traceback: bool = False) -> None:
        self._tools: Dict[str, Tool] = {}
        self.include_traceback = include_traceback

    def register(
        self,
        name: str,
        description: str,
        handler: Handler,
        input_model: Optional[Type[BaseModel]] = None,
    ) -> Tool:
        """
        Register a tool.

        Raises:
            DuplicateToolError: If ``name`` is already registered.
        """
        if name in self._tools:
            raise DuplicateToolError(name)
        tool = Tool(
            name=name,
            description=description,
            handler=tool_envelope(handler, name=name, include_traceback=self.include_traceback),
            input_model=input_model,
        )
        self._tools[name] = tool
        return tool

    def tool(self, name: str, description: str, input_model: Optional[Type[BaseModel]] = None):
        """Decorator form of ``register``; returns the undecorated function."""

        def decorator(func: Handler) -> Handler:
            self.register(name, description, func, input_model)
            return func

        return decorator

    def get(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def names(self) -> List[str]:
        return list(self._tools)

    def list_tools(self) -> List[types.Tool]:
        return [tool.to_mcp_tool() for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    async def invoke(self, name: str, raw_input: Optional[Any] = None) -> ToolResult:
        """
        Validate ``raw_input`` against the tool's schema and run its handler.

        Raises:
            UnknownToolError: If ``name`` is not registered.
        """
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name)

        if tool.input_model is None:
            return await tool.handler()

        try:
            arguments = tool.input_model.model_validate(raw_input if raw_input is not None else {})
        except ValidationError as e:
            logger.info(f"Rejected {name} call: {e.error_count()} validation error(s)")
            return error_result(format_validation_error(name, e))
        return await tool.handler(arguments)


__all__ = [
    "Tool",
    "ToolRegistry",
    "EMPTY_INPUT_SCHEMA",
    "format_validation_error",
]
