"""httpx client builders.

One place for base URL, timeouts and headers so every call behaves the same.
Pooling, retries and node failover are left to httpx defaults.
"""

from __future__ import annotations

import httpx

from core.config import ConnectionSettings, get_settings


def _default_headers(
    settings: ConnectionSettings,
    extra_headers: dict[str, str] | None,
) -> dict[str, str]:
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return headers


def build_client(
    settings: ConnectionSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an `httpx.Client` bound to the configured node.

    `transport` lets tests plug in `httpx.MockTransport`.
    """

    settings = settings or get_settings()
    return httpx.Client(
        base_url=settings.url,
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        headers=_default_headers(settings, extra_headers),
        transport=transport,
    )


def build_async_client(
    settings: ConnectionSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Async twin of `build_client`."""

    settings = settings or get_settings()
    return httpx.AsyncClient(
        base_url=settings.url,
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        headers=_default_headers(settings, extra_headers),
        transport=transport,
    )
