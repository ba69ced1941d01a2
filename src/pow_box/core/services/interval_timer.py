"""Tarea repetitiva con cadencia fija (asyncio).

Por qué una clase y no un `while True` suelto:
- Quien la crea es dueño de un único handle de cancelación (`stop`).
- El callback nunca se solapa consigo mismo: la siguiente espera empieza
  cuando el callback anterior terminó.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from pow_box.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

TimerCallback = Callable[[], Awaitable[None]]


class IntervalTimer:
    """Ejecuta `callback` cada `interval_seconds` hasta que se detiene.

    La primera ejecución ocurre tras el primer intervalo, no al arrancar.
    Si el callback lanza una excepción, el bucle termina y la excepción queda
    en la tarea interna (se registra en el log).
    """

    def __init__(self, interval_seconds: float, callback: TimerCallback) -> None:
        if isinstance(interval_seconds, bool) or not isinstance(interval_seconds, (int, float)) or interval_seconds <= 0:
            raise ConfigurationError("The interval must be > 0")
        self._interval_seconds = float(interval_seconds)
        self._callback = callback
        self._task: asyncio.Task[None] | None = None
        self._stopped = False

    @property
    def interval_seconds(self) -> float:
        return self._interval_seconds

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done() and not self._stopped

    def start(self) -> None:
        if self._stopped:
            raise ConfigurationError("The timer has already been stopped")
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._run())

    def cancel(self) -> None:
        """Cancela la tarea sin esperar a que termine (idempotente)."""

        self._stopped = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def stop(self) -> None:
        """Cancela y espera a que la tarea interna termine."""

        self.cancel()
        task = self._task
        if task is None or task is asyncio.current_task():
            return
        try:
            await task
        except asyncio.CancelledError:
            # Si quien espera también fue cancelado, respetarlo.
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
        except Exception:
            # Ya registrado en `_run`.
            pass

    async def _run(self) -> None:
        while not self._stopped:
            await asyncio.sleep(self._interval_seconds)
            if self._stopped:
                break
            try:
                await self._callback()
            except Exception:
                logger.exception("Interval timer callback failed, stopping timer")
                self._stopped = True
                raise
