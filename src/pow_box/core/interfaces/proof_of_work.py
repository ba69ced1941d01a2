"""Contrato de un proveedor de proof-of-work intercambiable.

Por qué Protocol:
- El pipeline de envío de transacciones puede usar PoW local o remota sin
  conocer la implementación concreta.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from pow_box.core.domain.trytes import Hash, Trytes


@runtime_checkable
class ProofOfWork(Protocol):
    async def initialize(self) -> None:
        """Permite al proveedor inicializarse; falla si no está soportado."""

        ...

    def performs_single(self) -> bool:
        """True si el proveedor solo resuelve un chunk por llamada."""

        ...

    async def pow(
        self,
        trunk_transaction: Hash,
        branch_transaction: Hash,
        trytes: Sequence[Trytes],
        min_weight_magnitude: int,
    ) -> list[Trytes]:
        """Devuelve los trytes con la PoW aplicada (mismo orden y cardinalidad)."""

        ...
