"""Condition monitoring tool implementation."""

from typing import TYPE_CHECKING

from ..registry import ToolRegistry
from .schemas import MonitorInput

if TYPE_CHECKING:
    from ..context import GatewayContext

import logging
logger = logging.getLogger(__name__)


def register(registry: ToolRegistry, context: "GatewayContext") -> None:
    backend = context.backend

    @registry.tool(
        "monitorForCondition",
        "Monitor the browser window for specific conditions or changes",
        MonitorInput,
    )
    async def monitor_for_condition(args: MonitorInput):
        # The timeout is enforced by the backend, not here
        logger.info(f"monitorForCondition request {args.condition!r} timeout={args.timeout_seconds}s")
        return await backend.windows.monitor(
            args.session_id,
            args.window_id,
            args.condition,
            time_threshold_seconds=args.timeout_seconds,
        )


__all__ = ["register"]
