"""
MCP server for Airtop cloud browsers.

Agents reach the server over stdin/stdout (one client) or HTTP with
Server-Sent Events (many clients). Every tool call is validated, forwarded to
the Airtop API and answered with a text result; failures come back as error
results instead of exceptions.

Layout:
    registry     tool catalog, input validation, dispatch
    normalizer   turns backend error payloads into one readable error result
    sessions     backend sessions that carry a profile to save on termination
    tools/       handlers for the Airtop operations
    transports/  stdio and SSE bindings plus the connection registry
    context      GatewayContext owning all of the above
"""

from .constants import SERVER_VERSION as __version__

__all__ = ["__version__"]
