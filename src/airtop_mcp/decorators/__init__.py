# airtop_mcp/decorators/__init__.py
#
# Re-exports decorators from their respective modules.

from .envelope import tool_envelope, to_tool_result

__all__ = [
    "tool_envelope",
    "to_tool_result",
]
