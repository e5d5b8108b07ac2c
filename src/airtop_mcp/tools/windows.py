"""Window tool implementations."""

from typing import TYPE_CHECKING

from ..registry import ToolRegistry
from .schemas import CreateWindowInput, WindowInput

if TYPE_CHECKING:
    from ..context import GatewayContext

import logging
logger = logging.getLogger(__name__)


def register(registry: ToolRegistry, context: "GatewayContext") -> None:
    backend = context.backend

    @registry.tool("createWindow", "Create a new browser window in the session", CreateWindowInput)
    async def create_window(args: CreateWindowInput):
        logger.info(f"createWindow request {args.session_id} {args.url}")
        return await backend.windows.create(args.session_id, args.url)

    @registry.tool(
        "getWindowInfo",
        "Get information about a browser window, including a live view URL, "
        "which lets the user use and interact with the window. Use this to get a URL "
        "to share with the user, so they can log into a web site.",
        WindowInput,
    )
    async def get_window_info(args: WindowInput):
        logger.info(f"getWindowInfo request {args.session_id} {args.window_id}")
        return await backend.windows.get_window_info(args.session_id, args.window_id)


__all__ = ["register"]
