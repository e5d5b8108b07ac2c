"""Configuration management for the gateway."""

from .environment import (
    get_env_config,
    redacted,
)

__all__ = [
    "get_env_config",
    "redacted",
]
