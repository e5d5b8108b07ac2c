"""
Backend error normalization.

The Airtop API reports failures as a collection whose entries come in several
shapes: plain strings, issue objects carrying a ``message``, exceptions, or
something else entirely. Each entry is classified exactly once into one of the
variants below, then rendered. Nothing in this module raises.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, List, Union

from .constants import API_ERRORS_BANNER, EMPTY_ERROR_TEXT
from .envelope import ToolResult, error_result, to_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmptyError:
    pass


@dataclass(frozen=True)
class PlainTextError:
    text: str


@dataclass(frozen=True)
class MessageError:
    message: str


@dataclass(frozen=True)
class OpaqueError:
    payload: Any


ApiError = Union[EmptyError, PlainTextError, MessageError, OpaqueError]


def _is_empty(item: Any) -> bool:
    if item is None or item is False:
        return True
    if isinstance(item, (str, bytes)):
        return len(item) == 0
    if isinstance(item, (int, float)) and not isinstance(item, bool):
        # NaN is the only value not equal to itself
        return item == 0 or item != item
    return False


def _message_of(item: Any) -> Any:
    if isinstance(item, BaseException):
        return str(item) or type(item).__name__
    if isinstance(item, Mapping):
        return item.get("message")
    return getattr(item, "message", None)


def classify(item: Any) -> ApiError:
    """Decide which variant an error entry is. Never raises."""
    try:
        if _is_empty(item):
            return EmptyError()
        if isinstance(item, str):
            return PlainTextError(item)
        message = _message_of(item)
        if isinstance(message, str) and message:
            return MessageError(message)
        if message is not None and not isinstance(message, str) and not _is_empty(message):
            return MessageError(to_text(message))
    except Exception:
        pass
    return OpaqueError(item)


def render(error: ApiError) -> str:
    if isinstance(error, EmptyError):
        return EMPTY_ERROR_TEXT
    if isinstance(error, PlainTextError):
        return error.text
    if isinstance(error, MessageError):
        return error.message
    return to_text(error.payload)


def _as_entries(errors: Any) -> List[Any]:
    if isinstance(errors, (list, tuple)):
        return list(errors)
    if errors is None or isinstance(errors, (str, bytes, Mapping)):
        return [errors]
    try:
        return list(errors)
    except Exception:
        return [errors]


def normalize(errors: Any) -> ToolResult:
    """
    Convert a backend error collection into an error-flagged ToolResult.

    Each entry renders to one line: empty entries become "Unknown error
    (empty)", strings are used verbatim, entries with a message use the
    message, and anything else is serialized. The lines are joined under the
    "Errors from the API:" banner. An empty collection renders as a single
    empty entry.
    """
    try:
        logger.error("Airtop API returned errors: %r", errors)
    except Exception:
        # ignore logging issues
        pass

    try:
        entries = _as_entries(errors) or [None]
        lines = [render(classify(entry)) for entry in entries]
        formatted = "\n".join(lines)
    except Exception:
        formatted = to_text(errors)
    return error_result(f"{API_ERRORS_BANNER}\n{formatted}")


__all__ = [
    "EmptyError",
    "PlainTextError",
    "MessageError",
    "OpaqueError",
    "ApiError",
    "classify",
    "render",
    "normalize",
]
