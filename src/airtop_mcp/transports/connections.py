"""
Connection registry for the multi-client SSE binding.

A connection is one client attachment: an open event stream plus the inbound
channel that ``POST /messages`` feeds. Its lifecycle is

    OPENING -> ACTIVE -> CLOSED

OPENING only lasts while the id is allocated, ACTIVE connections are in the
registry and accept messages, CLOSED is terminal and never in the registry.
Registration hands back a Subscription; cancelling it is the only way an entry
leaves the registry, and it does so exactly once.

Thread Safety:
    None of the registry methods await, so on a single event loop every
    insert, removal and lookup is atomic with respect to the others.
"""

import datetime
import enum
import uuid
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Union

import anyio
from anyio.streams.memory import MemoryObjectSendStream
from mcp.shared.message import SessionMessage

from ..exceptions import ConnectionClosedError

import logging
logger = logging.getLogger(__name__)


class ConnectionState(enum.Enum):
    OPENING = "opening"
    ACTIVE = "active"
    CLOSED = "closed"


class Subscription:
    """Cancellation handle returned when a connection is registered."""

    def __init__(self, on_cancel: Callable[[], None]):
        self._on_cancel: Optional[Callable[[], None]] = on_cancel

    @property
    def cancelled(self) -> bool:
        return self._on_cancel is None

    def cancel(self) -> bool:
        """Run the cleanup. Returns False when it already ran."""
        on_cancel, self._on_cancel = self._on_cancel, None
        if on_cancel is None:
            return False
        on_cancel()
        return True


@dataclass
class Connection:
    """
    One client attachment.

    Attributes:
        connection_id: Opaque id the client echoes as ``?sessionId=``
        inbound: Send side of the stream the MCP server session reads from
        state: Lifecycle state
        opened_at: When the event stream was opened
    """

    connection_id: str
    inbound: MemoryObjectSendStream[Union[SessionMessage, Exception]]
    state: ConnectionState = ConnectionState.OPENING
    opened_at: datetime.datetime = field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc)
    )

    @property
    def is_active(self) -> bool:
        return self.state is ConnectionState.ACTIVE

    async def deliver(self, message: Union[SessionMessage, Exception]) -> None:
        """
        Hand an inbound message to the server session of this connection.

        Raises:
            ConnectionClosedError: If the connection closed before or during delivery.
        """
        if not self.is_active:
            raise ConnectionClosedError(self.connection_id)
        try:
            await self.inbound.send(message)
        except (anyio.ClosedResourceError, anyio.BrokenResourceError):
            raise ConnectionClosedError(self.connection_id)


class ConnectionRegistry:
    def __init__(self) -> None:
        self._connections: Dict[str, Connection] = {}

    def _allocate_id(self) -> str:
        while True:
            connection_id = uuid.uuid4().hex
            if connection_id not in self._connections:
                return connection_id

    def open(
        self,
        inbound: MemoryObjectSendStream[Union[SessionMessage, Exception]],
    ) -> "tuple[Connection, Subscription]":
        """Allocate an id, register the connection as ACTIVE and return its Subscription."""
        connection = Connection(connection_id=self._allocate_id(), inbound=inbound)
        self._connections[connection.connection_id] = connection
        connection.state = ConnectionState.ACTIVE
        logger.info(f"Connection opened: {connection.connection_id} ({len(self._connections)} open)")
        return connection, Subscription(lambda: self._close(connection))

    def _close(self, connection: Connection) -> None:
        self._connections.pop(connection.connection_id, None)
        connection.state = ConnectionState.CLOSED
        logger.info(f"Connection closed: {connection.connection_id} ({len(self._connections)} open)")

    def lookup(self, connection_id: str) -> Optional[Connection]:
        return self._connections.get(connection_id)

    def ids(self) -> List[str]:
        return list(self._connections)

    def __contains__(self, connection_id: object) -> bool:
        return connection_id in self._connections

    def __len__(self) -> int:
        return len(self._connections)


__all__ = [
    "ConnectionState",
    "Subscription",
    "Connection",
    "ConnectionRegistry",
]
