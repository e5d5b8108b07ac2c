"""
The uniform result envelope every tool invocation resolves to.

A ToolResult is an ordered tuple of text blocks plus an error flag. It is built
once per invocation and never mutated; the MCP adapter converts it to
``mcp.types.CallToolResult`` right before it goes on the wire.
"""

import json
import datetime
import dataclasses
from dataclasses import dataclass
from typing import Any, Tuple

from mcp import types
from pydantic import BaseModel


@dataclass(frozen=True)
class TextContent:
    text: str
    type: str = "text"


@dataclass(frozen=True)
class ToolResult:
    content: Tuple[TextContent, ...]
    is_error: bool = False

    @property
    def text(self) -> str:
        """All text blocks joined by newlines."""
        return "\n".join(block.text for block in self.content)

    def to_call_tool_result(self) -> types.CallToolResult:
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=block.text) for block in self.content],
            isError=self.is_error,
        )


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    return getattr(value, "__dict__", repr(value))


def to_text(value: Any) -> str:
    """
    Serialize an arbitrary payload into the text of a content block.

    Strings pass through, bytes are decoded, everything else is JSON encoded
    (pydantic models and dataclasses included). Never raises.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except Exception:
            return value.decode("utf-8", "replace")
    try:
        return json.dumps(value, ensure_ascii=False, default=_json_default)
    except Exception:
        # Fallback to a best-effort string
        try:
            return repr(value)
        except Exception:
            return f"<unserializable {type(value).__name__}>"


def text_result(payload: Any) -> ToolResult:
    """Wrap a successful payload into a single-block result."""
    return ToolResult(content=(TextContent(text=to_text(payload)),))


def error_result(message: str) -> ToolResult:
    """Wrap an error message into a single-block, error-flagged result."""
    return ToolResult(content=(TextContent(text=message),), is_error=True)


__all__ = [
    "TextContent",
    "ToolResult",
    "to_text",
    "text_result",
    "error_result",
]
