"""Client for the Airtop browser automation backend."""

from .client import AirtopClient, ApiResponse


def create_backend(api_key: str, **kwargs) -> AirtopClient:
    """Build the backend client the tool handlers delegate to."""
    return AirtopClient(api_key, **kwargs)


__all__ = [
    "AirtopClient",
    "ApiResponse",
    "create_backend",
]
