"""Proof-of-work remota: PoW box.

Responsabilidad:
- Validar la llamada y enviar un job `attachToTangle` al servicio.
- Consultar `jobs/<jobId>` con cadencia fija hasta que el job termina.
- Devolver los trytes resultantes (mismo orden y cardinalidad) o fallar con
  un error tipado. Sin reintentos: la política de reintento es de quien llama.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Sequence

from pydantic import ValidationError as PydanticValidationError

from pow_box.core.config import AppSettings
from pow_box.core.domain.models import (
    AttachToTangleRequest,
    AttachToTangleResponse,
    JobResponse,
)
from pow_box.core.domain.trytes import Hash, Trytes
from pow_box.core.errors import (
    ConfigurationError,
    ProtocolError,
    RemoteJobError,
    ValidationError,
)
from pow_box.core.interfaces.network_client import NetworkClient
from pow_box.core.interfaces.proof_of_work import ProofOfWork
from pow_box.core.services.interval_timer import IntervalTimer

logger = logging.getLogger(__name__)

TimerFactory = Callable[[float, Callable[[], Awaitable[None]]], IntervalTimer]

_COMMANDS_PATH = "commands"


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class ProofOfWorkBox(ProofOfWork):
    """ProofOfWork implementada delegando en un PoW box remoto."""

    def __init__(
        self,
        network_client: NetworkClient,
        api_key: str,
        poll_interval_ms: int = 1000,
        *,
        performs_single: bool = False,
        timer_factory: TimerFactory = IntervalTimer,
    ) -> None:
        if network_client is None:
            raise ConfigurationError("The networkClient must be defined")
        if not isinstance(api_key, str) or not api_key:
            raise ConfigurationError("The apiKey must not be empty")
        if not _is_positive_int(poll_interval_ms):
            raise ConfigurationError("The pollIntervalMs must be > 0")

        self._network_client = network_client
        self._api_key = api_key
        self._poll_interval_ms = poll_interval_ms
        self._performs_single = bool(performs_single)
        self._timer_factory = timer_factory

    @classmethod
    def from_settings(cls, network_client: NetworkClient, settings: AppSettings | None = None) -> "ProofOfWorkBox":
        settings = settings or AppSettings()
        return cls(
            network_client,
            settings.api_key or "",
            settings.poll_interval_ms,
            performs_single=settings.performs_single,
        )

    @property
    def poll_interval_ms(self) -> int:
        return self._poll_interval_ms

    async def initialize(self) -> None:
        # El PoW box no necesita preparación local.
        return None

    def performs_single(self) -> bool:
        return self._performs_single

    async def pow(
        self,
        trunk_transaction: Hash,
        branch_transaction: Hash,
        trytes: Sequence[Trytes],
        min_weight_magnitude: int,
    ) -> list[Trytes]:
        """Hace la PoW en el servicio remoto.

        Raises:
            ValidationError: argumentos inválidos (antes de cualquier request).
            ProtocolError: el servicio no devolvió jobId o el resultado no cuadra.
            RemoteJobError: el servicio reportó el job como fallido.
            Exception: cualquier error del transporte, sin envolver.
        """

        if not isinstance(trunk_transaction, Hash):
            raise ValidationError("The trunkTransaction must be an object of type Hash")
        if not isinstance(branch_transaction, Hash):
            raise ValidationError("The branchTransaction must be an object of type Hash")
        if (
            not isinstance(trytes, (list, tuple))
            or not trytes
            or not all(isinstance(t, Trytes) for t in trytes)
        ):
            raise ValidationError("The trytes must be an array of type Trytes")
        if not _is_positive_int(min_weight_magnitude):
            raise ValidationError("The minWeightMagnitude must be > 0")

        request = AttachToTangleRequest(
            trunk_transaction=str(trunk_transaction.to_trytes()),
            branch_transaction=str(branch_transaction.to_trytes()),
            min_weight_magnitude=min_weight_magnitude,
            trytes=[str(t) for t in trytes],
        )
        headers = {"Authorization": self._api_key}

        payload = await self._network_client.post_json(request.to_wire(), _COMMANDS_PATH, headers)

        job_id = _parse_job_id(payload)
        if not job_id:
            raise ProtocolError("The attachToTangleRequest did not return a jobId")

        logger.info("PoW job %s submitted (%d trytes, mwm=%d)", job_id, len(trytes), min_weight_magnitude)
        return await self._wait_for_job_completion(job_id, trytes)

    async def _wait_for_job_completion(self, job_id: str, source_trytes: Sequence[Trytes]) -> list[Trytes]:
        outcome: asyncio.Future[list[Trytes]] = asyncio.get_running_loop().create_future()
        path = f"jobs/{job_id}"

        async def poll() -> None:
            if outcome.done():
                return
            try:
                payload = await self._network_client.get_json(path)
                result = _evaluate_job(job_id, payload, len(source_trytes))
            except Exception as exc:
                if not outcome.done():
                    outcome.set_exception(exc)
                return
            if result is not None and not outcome.done():
                outcome.set_result(result)

        timer = self._timer_factory(self._poll_interval_ms / 1000, poll)
        timer.start()
        try:
            result = await outcome
        except Exception as exc:
            logger.warning("PoW job %s failed: %s", job_id, exc)
            raise
        finally:
            await timer.stop()

        logger.info("PoW job %s completed", job_id)
        return result


def _parse_job_id(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None
    try:
        response = AttachToTangleResponse.model_validate(payload)
    except PydanticValidationError:
        return None
    return response.job_id or None


def _evaluate_job(job_id: str, payload: Any, expected_count: int) -> list[Trytes] | None:
    """Transición del estado `Polling`.

    Devuelve los trytes si el job terminó bien, `None` si sigue en curso, o
    lanza el error del estado `Failed`.
    """

    if not isinstance(payload, dict):
        raise ProtocolError("The job response was not valid", {"jobId": job_id})
    try:
        job = JobResponse.model_validate(payload)
    except PydanticValidationError as exc:
        raise ProtocolError("The job response was not valid", {"jobId": job_id}, inner_error=exc) from exc

    if job.has_failed:
        raise RemoteJobError(job.failure_message, {"jobId": job_id})

    if not job.is_complete:
        logger.debug("PoW job %s in progress (%s%%)", job_id, job.progress)
        return None

    result_trytes = job.result_trytes
    if result_trytes is None or len(result_trytes) != expected_count:
        raise ProtocolError("The response did not contain enough trytes", {"jobId": job_id})
    return [Trytes.from_string(t) for t in result_trytes]
