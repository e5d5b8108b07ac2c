# airtop_mcp/decorators/envelope.py

import asyncio
import inspect
import functools
import traceback
from typing import Any, Callable, Optional

from ..backend.client import ApiResponse
from ..constants import DEFAULT_INCLUDE_TRACEBACK
from ..envelope import ToolResult, error_result, text_result
from ..normalizer import normalize

import logging
logger = logging.getLogger(__name__)


__all__ = [
    "tool_envelope",
    "to_tool_result",
]


def to_tool_result(value: Any) -> ToolResult:
    """
    Turn whatever a tool handler returned into a ToolResult.

      - ToolResult: returned unchanged.
      - ApiResponse with errors: normalized into an error report.
      - ApiResponse without errors: its ``data`` is serialized.
      - Anything else: serialized as-is.
    """
    if isinstance(value, ToolResult):
        return value
    if isinstance(value, ApiResponse):
        if value.errors:
            return normalize(value.errors)
        return text_result(value.data)
    return text_result(value)


def tool_envelope(
    _func: Optional[Callable] = None,
    *,
    name: Optional[str] = None,
    include_traceback: bool = DEFAULT_INCLUDE_TRACEBACK,
):
    """
    Decorator for tool handlers:
      - Works with both async and sync callables.
      - On success: converts the return value with ``to_tool_result``.
      - On error: returns an error-flagged result "Internal error during <name>: <err>",
        with the traceback appended when ``include_traceback`` is set.
      - asyncio.CancelledError is re-raised.
    """

    def decorator(func: Callable):
        label = name or func.__name__

        def _error_payload(err: Exception) -> ToolResult:
            logger.error(f"{label} failed: {err!r}")
            text = f"Internal error during {label}: {err}"
            if include_traceback:
                text = f"{text}\n{traceback.format_exc()}"
            return error_result(text)

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def wrapper(*args, **kwargs):
                try:
                    result = await func(*args, **kwargs)
                except asyncio.CancelledError:
                    # Preserve cooperative cancellation semantics
                    raise
                except Exception as e:
                    return _error_payload(e)
                return to_tool_result(result)
            return wrapper
        else:
            @functools.wraps(func)
            async def wrapper(*args, **kwargs):
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    return _error_payload(e)
                return to_tool_result(result)
            return wrapper

    return decorator if _func is None else decorator(_func)
