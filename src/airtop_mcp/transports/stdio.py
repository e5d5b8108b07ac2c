"""Single-client pipe binding: one JSON-RPC message per line on stdin/stdout."""

from typing import Optional

import anyio
from mcp.server.stdio import stdio_server

from ..context import GatewayContext
from ..server import create_mcp_server

import logging
logger = logging.getLogger(__name__)


async def run_stdio(
    context: GatewayContext,
    stdin: Optional[anyio.AsyncFile] = None,
    stdout: Optional[anyio.AsyncFile] = None,
) -> None:
    """
    Serve the tool registry over a line-delimited pipe until its input closes.

    Args:
        context: Gateway state
        stdin: Async text stream to read from (process stdin when omitted)
        stdout: Async text stream to write to (process stdout when omitted)
    """
    server = create_mcp_server(context)
    logger.warning("MCP server starting in stdio mode")
    async with stdio_server(stdin, stdout) as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
    logger.info("stdin closed; stdio server stopped")


__all__ = ["run_stdio"]
