"""httpx wrapper.

- Standardizes timeout and default headers for the Timeular API.
- Tests substitute the transport (`httpx.MockTransport`) without touching
  the request logic.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the configured timeout and User-Agent.

    `http_timeout_seconds=None` yields `httpx.Timeout(None)`: a hung call waits
    indefinitely.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=headers,
        transport=transport,
    )
