"""Contrato del transporte JSON.

Por qué Protocol:
- El adaptador PoW solo necesita `post_json`/`get_json`; cualquier cliente
  (httpx, un mock en tests) que cumpla la forma es intercambiable.
- El Core no depende de httpx.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class NetworkClient(Protocol):
    """Cliente JSON mínimo sobre HTTP.

    Reglas de diseño:
    - `path` es relativo al endpoint configurado en el cliente.
    - Los errores del transporte se propagan tal cual; quien llama no los envuelve.
    """

    async def post_json(
        self,
        body: dict[str, Any],
        path: str,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Envía `body` como JSON por POST y devuelve el JSON decodificado."""

        ...

    async def get_json(self, path: str, headers: dict[str, str] | None = None) -> Any:
        """Hace GET y devuelve el JSON decodificado."""

        ...
