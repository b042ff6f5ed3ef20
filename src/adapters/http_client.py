"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts, headers and auth for every request to the graph manager.
- Eases testing: a `transport` can be injected (e.g. `httpx.MockTransport`).
"""

from __future__ import annotations

import httpx

from core.config import AppSettings

CLIENT_NAME = "graphctl"


def build_headers(settings: AppSettings) -> dict[str, str]:
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
        "Content-Type": "application/json",
        "apollographql-client-name": CLIENT_NAME,
    }
    if settings.api_key:
        headers["x-api-key"] = settings.api_key
    return headers


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with safe defaults.

    Why a builder:
    - Centralizes timeouts/headers so every command behaves the same.
    - Makes it easy to plug a mock transport in tests.
    """

    settings = settings or AppSettings()
    headers = build_headers(settings)
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
