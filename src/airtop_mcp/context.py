"""
Gateway state.

The GatewayContext is the top-level lifecycle object: it owns the tool
registry, the session registry, the connection registry and the backend
client. Nothing here is module-global; the context is built once by the CLI
(or a test) and passed by reference to the tool handlers and transports.

Usage:
    from airtop_mcp.context import build_context

    ctx = build_context(get_env_config())
    result = await ctx.tools.invoke("createSession", {})
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from .backend import create_backend
from .constants import DEFAULT_API_BASE_URL, DEFAULT_API_TIMEOUT_SECS
from .registry import ToolRegistry
from .sessions import SessionRegistry
from .tools import register_all
from .transports.connections import ConnectionRegistry


@dataclass
class GatewayContext:
    """
    Encapsulates all gateway state.

    Attributes:
        backend: Airtop client (anything exposing ``sessions`` and ``windows``)
        config: Environment configuration dictionary
        tools: Registry of callable tools
        sessions: Profile-bearing backend sessions
        connections: Open SSE connections (empty in stdio mode)
    """

    backend: Any
    config: dict = field(default_factory=dict)
    tools: ToolRegistry = field(default_factory=ToolRegistry)
    sessions: SessionRegistry = field(default_factory=SessionRegistry)
    connections: ConnectionRegistry = field(default_factory=ConnectionRegistry)

    async def aclose(self) -> None:
        """Release the backend client's resources."""
        aclose = getattr(self.backend, "aclose", None)
        if aclose is not None:
            await aclose()


def build_context(config: dict, backend: Optional[Any] = None) -> GatewayContext:
    """
    Create a context and register the full tool catalog on it.

    Args:
        config: Output of ``get_env_config()``
        backend: Backend client to use instead of one built from ``config["api_key"]``
    """
    if backend is None:
        backend = create_backend(
            config["api_key"],
            base_url=config.get("api_base_url", DEFAULT_API_BASE_URL),
            timeout=config.get("api_timeout", DEFAULT_API_TIMEOUT_SECS),
        )
    context = GatewayContext(
        backend=backend,
        config=config,
        tools=ToolRegistry(include_traceback=config.get("include_traceback", False)),
    )
    register_all(context.tools, context)
    return context


__all__ = [
    "GatewayContext",
    "build_context",
]
