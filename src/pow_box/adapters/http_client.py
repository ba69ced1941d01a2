"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y el manejo de errores del transporte.
- Facilita testeo: se puede sustituir por un stub/mocked client
  (`httpx.MockTransport` o cualquier `NetworkClient`).
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from pow_box.core.config import AppSettings
from pow_box.core.errors import NetworkError

logger = logging.getLogger(__name__)

_MAX_ERROR_BODY_CHARS = 500


def build_async_client(
    settings: AppSettings | None = None,
    *,
    base_url: str | None = None,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las llamadas se comporten igual.
    - Permite inyectar un `transport` (tests) sin tocar el resto del código.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)

    kwargs: dict[str, Any] = {
        "timeout": httpx.Timeout(settings.http_timeout_seconds),
        "follow_redirects": True,
        "headers": headers,
    }
    if base_url:
        kwargs["base_url"] = base_url
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.AsyncClient(**kwargs)


class HttpNetworkClient:
    """`NetworkClient` sobre httpx.

    Si no se inyecta `client`, crea uno apuntando a `settings.base_url` y es
    responsable de cerrarlo (`aclose` / `async with`).
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._owns_client = client is None
        self._client = client or build_async_client(self._settings, base_url=self._settings.base_url)

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    async def post_json(
        self,
        body: dict[str, Any],
        path: str,
        headers: dict[str, str] | None = None,
    ) -> Any:
        return await self._request("POST", path, body=body, headers=headers)

    async def get_json(self, path: str, headers: dict[str, str] | None = None) -> Any:
        return await self._request("GET", path, headers=headers)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpNetworkClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        logger.debug("%s %s", method, path)
        try:
            if body is None:
                response = await self._client.request(method, path, headers=headers)
            else:
                response = await self._client.request(method, path, json=body, headers=headers)
        except httpx.HTTPError as exc:
            raise NetworkError(
                f"Failed {method} request to {path}",
                {"error": str(exc) or type(exc).__name__},
                inner_error=exc,
            ) from exc

        if not response.is_success:
            raise NetworkError(
                f"Failed {method} request to {path}",
                {
                    "status_code": response.status_code,
                    "body": response.text[:_MAX_ERROR_BODY_CHARS],
                },
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise NetworkError(
                f"The response from {path} was not valid JSON",
                {
                    "status_code": response.status_code,
                    "body": response.text[:_MAX_ERROR_BODY_CHARS],
                },
                inner_error=exc,
            ) from exc
