"""
Multi-client HTTP binding.

    GET  /sse                    open an event stream; the first event names the
                                 message endpoint for this connection
    POST /messages?sessionId=ID  deliver one JSON-RPC message to connection ID
    GET  /health                 liveness check

Every event stream gets its own MCP server session; all of them share the one
tool registry and backend held by the GatewayContext. A connection is
registered before its endpoint event is sent and removed as soon as the client
disconnects, so a POST naming a closed connection is rejected with 400.
"""

from typing import Optional, Union
from urllib.parse import quote

import anyio
import uvicorn
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream
from mcp import types
from mcp.server.lowlevel import Server
from mcp.shared.message import SessionMessage
from pydantic import ValidationError
from sse_starlette.sse import EventSourceResponse
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

from ..constants import CONNECTION_QUERY_PARAM, MESSAGES_PATH, SSE_PATH
from ..context import GatewayContext
from ..exceptions import ConnectionClosedError
from ..server import create_mcp_server

import logging
logger = logging.getLogger(__name__)


class SseGateway:
    """
    ASGI handlers for the event stream and message endpoints.

    Args:
        context: Gateway state; its ``connections`` registry tracks open streams
        server: MCP server to run per connection (built from ``context`` when omitted)
        message_path: Path advertised in the endpoint event
    """

    def __init__(self, context: GatewayContext, server: Optional[Server] = None, message_path: str = MESSAGES_PATH):
        self.context = context
        self.connections = context.connections
        self.server = server if server is not None else create_mcp_server(context)
        self.message_path = message_path

    def endpoint_for(self, scope: Scope, connection_id: str) -> str:
        root_path = scope.get("root_path", "").rstrip("/")
        return f"{quote(root_path + self.message_path)}?{CONNECTION_QUERY_PARAM}={connection_id}"

    async def handle_sse(self, scope: Scope, receive: Receive, send: Send) -> None:
        inbound_writer: MemoryObjectSendStream[Union[SessionMessage, Exception]]
        inbound_reader: MemoryObjectReceiveStream[Union[SessionMessage, Exception]]
        outbound_writer: MemoryObjectSendStream[SessionMessage]
        outbound_reader: MemoryObjectReceiveStream[SessionMessage]
        inbound_writer, inbound_reader = anyio.create_memory_object_stream(0)
        outbound_writer, outbound_reader = anyio.create_memory_object_stream(0)
        event_writer, event_reader = anyio.create_memory_object_stream(0)

        connection, subscription = self.connections.open(inbound_writer)
        endpoint = self.endpoint_for(scope, connection.connection_id)

        async def send_events() -> None:
            async with event_writer, outbound_reader:
                await event_writer.send({"event": "endpoint", "data": endpoint})
                async for session_message in outbound_reader:
                    await event_writer.send({
                        "event": "message",
                        "data": session_message.message.model_dump_json(by_alias=True, exclude_none=True),
                    })

        async def on_client_close(_message) -> None:
            subscription.cancel()

        async def stream_events() -> None:
            response = EventSourceResponse(
                content=event_reader,
                data_sender_callable=send_events,
                client_close_handler_callable=on_client_close,
            )
            try:
                await response(scope, receive, send)
            finally:
                subscription.cancel()
                # Ends server.run() for this connection
                inbound_writer.close()
                outbound_reader.close()
                event_reader.close()

        try:
            async with anyio.create_task_group() as tg:
                tg.start_soon(stream_events)
                await self.server.run(
                    inbound_reader,
                    outbound_writer,
                    self.server.create_initialization_options(),
                )
        finally:
            subscription.cancel()
            logger.debug(f"Event stream finished for connection {connection.connection_id}")

    async def handle_post_message(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        connection_id = request.query_params.get(CONNECTION_QUERY_PARAM)
        if not connection_id:
            response = Response(f"{CONNECTION_QUERY_PARAM} is required", status_code=400)
            return await response(scope, receive, send)

        connection = self.connections.lookup(connection_id)
        if connection is None:
            logger.warning(f"Message for unknown connection {connection_id}")
            response = Response(f"No transport found for {CONNECTION_QUERY_PARAM}", status_code=400)
            return await response(scope, receive, send)

        body = await request.body()
        try:
            message = types.JSONRPCMessage.model_validate_json(body)
        except ValidationError as err:
            logger.warning(f"Could not parse message for connection {connection_id}: {err}")
            response = Response("Could not parse message", status_code=400)
            return await response(scope, receive, send)

        try:
            await connection.deliver(SessionMessage(message))
        except ConnectionClosedError as e:
            logger.warning(str(e))
            response = Response(f"No transport found for {CONNECTION_QUERY_PARAM}", status_code=400)
            return await response(scope, receive, send)

        response = Response("Accepted", status_code=202)
        await response(scope, receive, send)


class _ASGIEndpoint:
    """Lets Starlette route to a raw ASGI handler instead of a request/response function."""

    def __init__(self, handler):
        self._handler = handler

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self._handler(scope, receive, send)


def create_app(context: GatewayContext) -> Starlette:
    gateway = SseGateway(context)

    async def health(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok", "connections": len(context.connections)})

    routes = [
        Route(SSE_PATH, endpoint=_ASGIEndpoint(gateway.handle_sse), methods=["GET"]),
        Route(MESSAGES_PATH, endpoint=_ASGIEndpoint(gateway.handle_post_message), methods=["POST"]),
        Route("/health", endpoint=health, methods=["GET"]),
    ]
    return Starlette(routes=routes)


async def run_sse(context: GatewayContext, host: str, port: int, log_level: str = "INFO") -> None:
    """Serve the SSE binding until uvicorn is told to stop."""
    app = create_app(context)
    config = uvicorn.Config(app, host=host, port=port, log_level=log_level.lower())
    server = uvicorn.Server(config)
    logger.warning(f"MCP server listening on http://{host}:{port}{SSE_PATH}")
    await server.serve()


__all__ = [
    "SseGateway",
    "create_app",
    "run_sse",
]
