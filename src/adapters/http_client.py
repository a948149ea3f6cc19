"""Wrapper de httpx.

Estandariza timeouts y headers de todas las llamadas a servicios, y deja
inyectar un transporte (p.ej. `httpx.MockTransport`) en tests.
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
    """Crea un `httpx.AsyncClient` con los defaults de la aplicación.

    Las cabeceras por petición (Accept, Content-Type...) las añade
    `RestRequest`; aquí solo van las comunes a todo el cliente.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
