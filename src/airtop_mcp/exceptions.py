"""Exception types raised inside the gateway."""

from typing import Any, Optional


class AirtopMcpError(Exception):
    """Base class for gateway errors."""


class UnknownToolError(AirtopMcpError):
    """Raised when an invocation names a tool that was never registered."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class DuplicateToolError(AirtopMcpError):
    """Raised at startup when two tools are registered under one name."""

    def __init__(self, name: str):
        super().__init__(f"Tool already registered: {name}")
        self.name = name


class ConnectionClosedError(AirtopMcpError):
    """Raised when a message is delivered to a connection that has closed."""

    def __init__(self, connection_id: str):
        super().__init__(f"Connection is closed: {connection_id}")
        self.connection_id = connection_id


class BackendError(AirtopMcpError):
    """
    Raised when the Airtop API answers with a non-success status and no
    structured error collection to report.
    """

    def __init__(self, status_code: int, message: str, body: Optional[Any] = None):
        super().__init__(f"Airtop API returned {status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.body = body


__all__ = [
    "AirtopMcpError",
    "UnknownToolError",
    "DuplicateToolError",
    "ConnectionClosedError",
    "BackendError",
]
