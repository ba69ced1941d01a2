"""Errores del Core.

Por qué una jerarquía plana:
- Todos los errores comparten una base (`PowBoxError`) con un `domain` que
  permite filtrarlos y formatearlos igual en CLI y logs.
- Cada tipo concreto hereda directamente de la base; no hay cadenas de
  herencia por capas.
"""

from __future__ import annotations

import json
from typing import Any


class PowBoxError(Exception):
    """Base de todos los errores de la aplicación."""

    domain = "PowBox"

    def __init__(
        self,
        message: str,
        additional: dict[str, Any] | None = None,
        inner_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.additional: dict[str, Any] = dict(additional or {})
        self.inner_error = inner_error

    def format(self) -> str:
        """Versión legible: `<domain>: <message>` + detalles adicionales."""

        out = ""
        if self.domain:
            out += f"{self.domain}: "
        if self.message:
            out += self.message
        if self.additional:
            if out:
                out += "\n"
            for key, value in self.additional.items():
                out += f"\t{key}: {json.dumps(value, default=str)}\n"
        return out

    @staticmethod
    def is_error(obj: object) -> bool:
        return isinstance(obj, PowBoxError)


class ConfigurationError(PowBoxError):
    """Argumentos de construcción o settings inválidos."""

    domain = "Configuration"


class ValidationError(PowBoxError):
    """Argumentos de llamada o valores de dominio inválidos."""

    domain = "Data"


class ProtocolError(PowBoxError):
    """El servicio respondió, pero sin respetar el contrato esperado."""

    domain = "Protocol"


class RemoteJobError(PowBoxError):
    """El servicio reportó explícitamente que el job falló."""

    domain = "RemoteJob"


class NetworkError(PowBoxError):
    """Fallo del transporte HTTP (conexión, timeout, status no-2xx)."""

    domain = "Network"
