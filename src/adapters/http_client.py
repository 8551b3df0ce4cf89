"""Wrapper de httpx.

Estandariza timeouts, headers y redirects para todas las peticiones a
repositorios Maven. Los tests inyectan un `transport` (p.ej.
`httpx.MockTransport`) en lugar de tocar la red.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    - timeout configurable (`http_timeout_seconds`)
    - sigue redirects
    - sin reintentos: un fallo de transporte se propaga al llamador
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/xml,application/java-archive,*/*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def join_url(base_url: str, path: str) -> str:
    """Une base y path de repositorio con una sola barra."""

    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def force_https(url: str) -> str:
    if url.startswith("http://"):
        return "https://" + url[len("http://"):]
    return url
