"""
Command-line entry point.

    airtop-mcp                      serve one client over stdin/stdout
    airtop-mcp --listen             serve many clients over HTTP + SSE
    python -m airtop_mcp --listen --port 8080

AIRTOP_API_KEY must be set (a ``.env`` file in the working directory is read
first). Logs always go to stderr; in stdio mode stdout carries the protocol.
"""

import argparse
import logging
import sys
from typing import List, Optional

import anyio
from dotenv import find_dotenv, load_dotenv

from .config import get_env_config, redacted
from .constants import SERVER_NAME, SERVER_VERSION
from .context import build_context

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=SERVER_NAME,
        description="MCP server exposing Airtop browser automation tools.",
    )
    parser.add_argument(
        "--listen",
        action="store_true",
        help="Serve over HTTP with Server-Sent Events instead of stdin/stdout",
    )
    parser.add_argument("--host", default=None, help="Interface to bind in --listen mode (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Port to bind in --listen mode (default: $PORT or 3456)")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Log level (default: $AIRTOP_MCP_LOG_LEVEL or INFO)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {SERVER_VERSION}")
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


async def serve(config: dict, listen: bool) -> None:
    context = build_context(config)
    try:
        if listen:
            from .transports.sse import run_sse
            await run_sse(context, config["host"], config["port"], config["log_level"])
        else:
            from .transports.stdio import run_stdio
            await run_stdio(context)
    finally:
        await context.aclose()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    load_dotenv(find_dotenv(usecwd=True))

    try:
        config = get_env_config()
    except EnvironmentError as e:
        configure_logging(args.log_level or "INFO")
        logger.error(f"Configuration error: {e}")
        return 1

    if args.host:
        config["host"] = args.host
    if args.port is not None:
        config["port"] = args.port
    if args.log_level:
        config["log_level"] = args.log_level

    configure_logging(config["log_level"])
    logger.info(f"Starting {SERVER_NAME} {SERVER_VERSION} with {redacted(config)}")

    try:
        anyio.run(serve, config, args.listen)
    except KeyboardInterrupt:
        logger.info("Interrupted; shutting down")
    except Exception:
        logger.exception("Server terminated with an unhandled error")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
