"""Modelos y entidades del dominio.

Por qué:
- Aquí viven los tipos de valor del ledger y los modelos del protocolo (Pydantic v2).
- El dominio no conoce HTTP ni CLI: solo conceptos del problema.
"""

from pow_box.core.domain.models import (
    AttachToTangleRequest,
    AttachToTangleResponse,
    JobResponse,
    JobResult,
)
from pow_box.core.domain.trytes import Hash, Trytes

__all__ = [
    "AttachToTangleRequest",
    "AttachToTangleResponse",
    "Hash",
    "JobResponse",
    "JobResult",
    "Trytes",
]
