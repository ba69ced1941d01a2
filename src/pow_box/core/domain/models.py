"""Modelos del protocolo PoW box (Pydantic v2).

Por qué Pydantic aquí:
- El servicio habla camelCase; nosotros snake_case. Los alias resuelven el
  mapeo en un único lugar.
- `extra="ignore"`: el servicio puede añadir campos sin romper el cliente.

Nota:
- Estos modelos describen *qué* viaja por la red, no *cómo* se envía.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

# El servicio reporta el progreso como porcentaje en string.
JOB_COMPLETE_PROGRESS = "100"


class AttachToTangleRequest(BaseModel):
    """Body del comando `attachToTangle` enviado a `commands`."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    command: Literal["attachToTangle"] = "attachToTangle"
    trunk_transaction: str = Field(
        ...,
        alias="trunkTransaction",
        description="Hash de la transacción trunk (81 trytes).",
    )
    branch_transaction: str = Field(
        ...,
        alias="branchTransaction",
        description="Hash de la transacción branch (81 trytes).",
    )
    min_weight_magnitude: int = Field(
        ...,
        gt=0,
        alias="minWeightMagnitude",
        description="Dificultad mínima exigida a la PoW.",
    )
    trytes: list[str] = Field(
        ...,
        min_length=1,
        description="Chunks de trytes sobre los que hacer la PoW (orden relevante).",
    )

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


class AttachToTangleResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    job_id: str | None = Field(
        default=None,
        alias="jobId",
        description="Identificador del job para consultar su progreso.",
    )


class JobResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    trytes: list[str] | None = Field(
        default=None,
        description="Trytes con la PoW aplicada, en el mismo orden que el envío.",
    )


class JobResponse(BaseModel):
    """Snapshot del estado de un job (`jobs/<jobId>`).

    Todos los campos son opcionales: ante un error el servicio puede devolver
    solo `error` y `errorMessage`.

    Por qué `Any` en los campos informativos:
    - Solo `error`, `progress` y `response.trytes` deciden el estado del job.
      Un `updatedAt` en epoch millis o un `jobId` numérico no debe romper
      un job que ya terminó.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    job_id: Any = Field(default=None, alias="jobId")
    updated_at: Any = Field(default=None, alias="updatedAt")
    created_at: Any = Field(default=None, alias="createdAt")
    error: Any = Field(
        default=None,
        description="Indica si el job falló en el servicio (se evalúa por veracidad).",
    )
    error_message: Any = Field(
        default=None,
        alias="errorMessage",
        description="Mensaje del servicio cuando `error` es verdadero.",
    )
    progress: str | int | float | None = Field(
        default=None,
        description="Porcentaje de progreso; solo el string '100' marca el final.",
    )
    response: JobResult | None = None

    @property
    def has_failed(self) -> bool:
        return bool(self.error)

    @property
    def failure_message(self) -> str:
        return "" if self.error_message is None else str(self.error_message)

    @property
    def is_complete(self) -> bool:
        return self.progress == JOB_COMPLETE_PROGRESS

    @property
    def result_trytes(self) -> list[str] | None:
        if self.response is None:
            return None
        return self.response.trytes
