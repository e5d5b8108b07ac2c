"""Environment configuration and validation."""

import os
from typing import Optional

from ..constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_API_TIMEOUT_SECS,
    DEFAULT_HOST,
    DEFAULT_INCLUDE_TRACEBACK,
    DEFAULT_PORT,
)

import logging
logger = logging.getLogger(__name__)

_FALSE_VALUES = ("0", "false", "no", "off")


def _timeout_from_env(raw: str) -> float:
    if not raw:
        return DEFAULT_API_TIMEOUT_SECS
    try:
        timeout = float(raw)
    except ValueError:
        timeout = -1.0
    if timeout <= 0 or timeout != timeout:
        logger.warning(f"Ignoring invalid AIRTOP_API_TIMEOUT_SECS={raw!r}; using {DEFAULT_API_TIMEOUT_SECS}")
        return DEFAULT_API_TIMEOUT_SECS
    return timeout


def get_env_config(environ: Optional[dict] = None) -> dict:
    """
    Read environment variables and validate required ones.

    Values are read when this is called, so a ``.env`` file loaded beforehand
    is honored.

    Required:   AIRTOP_API_KEY
    Optional:   PORT (default 3456, digits only)
                AIRTOP_MCP_HOST (default '0.0.0.0')
                AIRTOP_MCP_LOG_LEVEL (default 'INFO')
                AIRTOP_API_BASE_URL (default 'https://api.airtop.ai/api/v1')
                AIRTOP_API_TIMEOUT_SECS (default 300, positive number)
                AIRTOP_MCP_ERRORS_TRACEBACK (default off)

    Args:
        environ: Mapping to read from instead of os.environ (mainly for tests).

    Raises:
        EnvironmentError: If AIRTOP_API_KEY is missing or blank.
    """
    env = os.environ if environ is None else environ

    api_key = (env.get("AIRTOP_API_KEY") or "").strip()
    if not api_key:
        raise EnvironmentError("AIRTOP_API_KEY environment variable is required")

    port_env = (env.get("PORT") or "").strip()
    if port_env and not port_env.isdigit():
        logger.warning(f"Ignoring non-numeric PORT={port_env!r}; using {DEFAULT_PORT}")
    port = int(port_env) if port_env.isdigit() else DEFAULT_PORT

    host = (env.get("AIRTOP_MCP_HOST") or "").strip() or DEFAULT_HOST
    log_level = (env.get("AIRTOP_MCP_LOG_LEVEL") or "").strip().upper() or "INFO"

    api_base_url = (env.get("AIRTOP_API_BASE_URL") or "").strip() or DEFAULT_API_BASE_URL
    api_timeout = _timeout_from_env((env.get("AIRTOP_API_TIMEOUT_SECS") or "").strip())

    traceback_env = (env.get("AIRTOP_MCP_ERRORS_TRACEBACK") or "").strip().lower()
    include_traceback = traceback_env not in _FALSE_VALUES if traceback_env else DEFAULT_INCLUDE_TRACEBACK

    return {
        "api_key": api_key,
        "host": host,
        "port": port,
        "log_level": log_level,
        "api_base_url": api_base_url,
        "api_timeout": api_timeout,
        "include_traceback": include_traceback,
    }


def redacted(config: dict) -> dict:
    """Return a copy of the config that is safe to log."""
    safe = dict(config)
    if safe.get("api_key"):
        safe["api_key"] = "***"
    return safe
