"""Shared HTTP client."""

import httpx

from hymod import __version__

DEFAULT_TIMEOUT = 30.0

# Process-wide client, created on first use
_client: httpx.AsyncClient | None = None


def create_http_client(transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """Create an async client with hymod's defaults."""
    return httpx.AsyncClient(
        headers={"User-Agent": f"hymod/{__version__}"},
        follow_redirects=True,
        timeout=DEFAULT_TIMEOUT,
        transport=transport,
    )


def get_http_client() -> httpx.AsyncClient:
    """Get the shared HTTP client."""
    global _client
    if _client is None or _client.is_closed:
        _client = create_http_client()
    return _client


def set_http_client(client: httpx.AsyncClient | None) -> None:
    """Replace the shared HTTP client (useful for testing)."""
    global _client
    _client = client


async def close_http_client() -> None:
    """Close the shared HTTP client if one was created."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
