"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y redirects para Graph y el endpoint OAuth2.
- Los tests inyectan su propio `httpx.Client` en `GraphDirectoryClient`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_client(settings: AppSettings | None = None) -> httpx.Client:
    """Crea un `httpx.Client` con defaults seguros para Graph."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
    )
