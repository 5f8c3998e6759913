"""
Pooled HTTP client shared by every HttpAnalysisClient in the process.
"""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

USER_AGENT = "protocol-risk"

_async_client: Optional[httpx.AsyncClient] = None


def get_async_client(
    timeout: float = 30.0,
    max_keepalive_connections: int = 2,
    max_connections: int = 4,
) -> httpx.AsyncClient:
    """Return the shared AsyncClient, creating it on first use or after close.

    At most one assessment is in flight per view, so the pool stays small.
    The timeout only applies when the client is created.
    """
    global _async_client

    if _async_client is None or _async_client.is_closed:
        _async_client = httpx.AsyncClient(
            timeout=timeout,
            limits=httpx.Limits(
                max_keepalive_connections=max_keepalive_connections,
                max_connections=max_connections,
            ),
            headers={"User-Agent": USER_AGENT},
        )
        logger.debug(f"Created shared HTTP client (timeout {timeout}s)")

    return _async_client


async def close_async_client() -> None:
    """Close the shared client. The next get_async_client() builds a new one."""
    global _async_client
    if _async_client is not None:
        await _async_client.aclose()
        _async_client = None
        logger.debug("Closed shared HTTP client")
