"""Binds the tool registry to an MCP low-level server."""

from typing import Any, Dict, List, Optional

from mcp import types
from mcp.server.lowlevel import Server

from .constants import SERVER_INSTRUCTIONS, SERVER_NAME, SERVER_VERSION
from .context import GatewayContext
from .envelope import error_result
from .exceptions import UnknownToolError

import logging
logger = logging.getLogger(__name__)


def create_mcp_server(context: GatewayContext) -> Server:
    """
    Build the MCP server for a context.

    One server instance serves every connection: stdio runs it once, the SSE
    binding runs it once per open event stream. JSON-RPC request ids travel
    with each request, so overlapping calls on one connection are answered by
    id rather than by arrival order.
    """
    server: Server = Server(SERVER_NAME, version=SERVER_VERSION, instructions=SERVER_INSTRUCTIONS)
    tools = context.tools

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return tools.list_tools()

    # The registry validates against its own models; skip the SDK's jsonschema pass
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> types.CallToolResult:
        logger.info(f"tool_call tool={name}")
        try:
            result = await tools.invoke(name, arguments)
        except UnknownToolError as e:
            logger.warning(str(e))
            result = error_result(str(e))
        return result.to_call_tool_result()

    return server


__all__ = ["create_mcp_server"]
