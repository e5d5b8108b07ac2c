"""
Global constants and configuration defaults.
No dependencies - safe to import from anywhere.
"""

# ============================================================================
# Server Identity
# ============================================================================

SERVER_NAME = "airtop-mcp"
"""Name announced to MCP clients during initialization."""

SERVER_VERSION = "1.0.0"
"""Version announced to MCP clients during initialization."""

SERVER_INSTRUCTIONS = """
    This server is used to create and manage browser sessions and windows using the Airtop API,
    which is a browser automation tool that lets you control a browser from a remote server.

    You can create a session using the "createSession" tool, which gives you access to a single browser,
    returning JSON with a session ID.

    Once you have a session, you can create windows using the "createWindow" tool.
    This returns JSON with a window ID.

    You can query the content of a window using the "pageQuery" tool, passing in the session ID and window ID.
    This returns JSON with a content summary.

    You can also let the user interact with the window using the "getWindowInfo" tool,
    which returns a live view URL that you can share with the user, for them to interact with the window.

    Try to reuse the same session and windows for multiple queries to save on costs."""
"""Usage hints sent to the agent in the initialize response."""


# ============================================================================
# Transport Configuration
# ============================================================================

DEFAULT_HOST = "0.0.0.0"
"""Interface the HTTP/SSE binding listens on."""

DEFAULT_PORT = 3456
"""Port the HTTP/SSE binding listens on."""

SSE_PATH = "/sse"
"""Path that opens the event stream."""

MESSAGES_PATH = "/messages"
"""Path that receives correlated inbound messages."""

CONNECTION_QUERY_PARAM = "sessionId"
"""Query parameter carrying the connection id on inbound messages."""


# ============================================================================
# Backend Configuration
# ============================================================================

DEFAULT_API_BASE_URL = "https://api.airtop.ai/api/v1"
"""Base URL of the Airtop REST API (override: AIRTOP_API_BASE_URL)."""

DEFAULT_API_TIMEOUT_SECS = 300.0
"""HTTP timeout for backend calls. Page queries and monitors can run for minutes (override: AIRTOP_API_TIMEOUT_SECS)."""


# ============================================================================
# Result Envelope
# ============================================================================

API_ERRORS_BANNER = "Errors from the API:"
"""First line of every normalized backend error report."""

EMPTY_ERROR_TEXT = "Unknown error (empty)"
"""Substituted for error entries that carry no information."""

DEFAULT_MONITOR_TIMEOUT_SECS = 30
"""Default timeout passed to the backend by monitorForCondition."""

DEFAULT_INCLUDE_TRACEBACK = False
"""Append the traceback to internal-error results (override: AIRTOP_MCP_ERRORS_TRACEBACK)."""


__all__ = [
    "SERVER_NAME",
    "SERVER_VERSION",
    "SERVER_INSTRUCTIONS",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "SSE_PATH",
    "MESSAGES_PATH",
    "CONNECTION_QUERY_PARAM",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_API_TIMEOUT_SECS",
    "API_ERRORS_BANNER",
    "EMPTY_ERROR_TEXT",
    "DEFAULT_MONITOR_TIMEOUT_SECS",
    "DEFAULT_INCLUDE_TRACEBACK",
]
