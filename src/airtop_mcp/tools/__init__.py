# airtop_mcp/tools/__init__.py
"""
MCP tool implementations - thin handlers delegating to the Airtop backend.

Each module exposes ``register(registry, context)``, which declares its tools
on the registry and closes over the backend client and the registries it
needs from the context. Handlers return the backend ApiResponse (or a plain
payload); the registry turns that into the result envelope.
"""

from typing import TYPE_CHECKING

from . import extraction, interaction, monitoring, sessions, windows

if TYPE_CHECKING:
    from ..context import GatewayContext
    from ..registry import ToolRegistry

TOOL_MODULES = (sessions, windows, extraction, interaction, monitoring)


def register_all(registry: "ToolRegistry", context: "GatewayContext") -> None:
    for module in TOOL_MODULES:
        module.register(registry, context)


__all__ = [
    "TOOL_MODULES",
    "register_all",
]
