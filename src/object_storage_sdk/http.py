"""HTTP client utilities for the Object Storage SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from .config import ObjectStorageConfig


def create_async_http_client(
    config: ObjectStorageConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create configured async HTTP client.

    Args:
        config: SDK configuration.
        transport: Optional transport, e.g. ``httpx.MockTransport`` in tests.

    Returns:
        Configured httpx.AsyncClient.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(
            connect=config.connect_timeout,
            read=config.timeout,
            write=config.timeout,
            pool=config.timeout,
        ),
        headers={"User-Agent": config.user_agent},
        follow_redirects=False,
        transport=transport,
    )
