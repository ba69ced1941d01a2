"""CLI de pow-box (Typer + Rich).

Por qué una CLI en una librería:
- Permite probar un PoW box real (config, conectividad, un attach) sin
  escribir código.
- Toda la lógica vive en `core`/`adapters`; aquí solo hay parsing y render.
"""

from __future__ import annotations

import asyncio
import json
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from pow_box.adapters.http_client import HttpNetworkClient
from pow_box.adapters.proof_of_work_box import ProofOfWorkBox
from pow_box.cli import doctor
from pow_box.cli.ui_components import build_error_panel, build_trytes_table, print_banner
from pow_box.core.config import AppSettings
from pow_box.core.domain.trytes import Hash, Trytes
from pow_box.core.errors import PowBoxError

app = typer.Typer(no_args_is_help=True, help="Remote proof-of-work through a PoW box service.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


_FALLBACK_LOG_LEVEL = "WARNING"


def configure_logging(level: str) -> None:
    """Configura el root logger con `RichHandler` (solo desde la CLI).

    Un nivel desconocido cae a WARNING en lugar de romper el comando.
    """

    name = level.upper()
    if name not in logging.getLevelNamesMapping():
        name = _FALLBACK_LOG_LEVEL

    logging.basicConfig(
        level=name,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    # Un `.env` inválido no debe bloquear `doctor setup`; cada comando
    # reporta el error al cargar sus propios settings.
    try:
        level = AppSettings().log_level
    except ValueError:
        level = _FALLBACK_LOG_LEVEL
    configure_logging("DEBUG" if verbose else level)


async def _attach(
    settings: AppSettings,
    trunk: Hash,
    branch: Hash,
    trytes: list[Trytes],
    min_weight_magnitude: int,
) -> list[Trytes]:
    async with HttpNetworkClient(settings) as client:
        box = ProofOfWorkBox.from_settings(client, settings)
        await box.initialize()
        return await box.pow(trunk, branch, trytes, min_weight_magnitude)


@app.command()
def attach(
    trytes: list[str] = typer.Argument(..., help="Transaction trytes to attach (in order)."),
    trunk: str = typer.Option(..., "--trunk", help="Trunk transaction hash (81 trytes)."),
    branch: str = typer.Option(..., "--branch", help="Branch transaction hash (81 trytes)."),
    mwm: int = typer.Option(14, "--mwm", help="Minimum weight magnitude."),
    api_key: str | None = typer.Option(None, "--api-key", help="Override POW_BOX_API_KEY."),
    base_url: str | None = typer.Option(None, "--base-url", help="Override POW_BOX_BASE_URL."),
    poll_interval_ms: int | None = typer.Option(None, "--poll-interval-ms", help="Override POW_BOX_POLL_INTERVAL_MS."),
    as_json: bool = typer.Option(False, "--json", help="Print the resulting trytes as JSON."),
) -> None:
    """Run proof-of-work for TRYTES on the remote PoW box."""

    overrides: dict[str, object] = {}
    if api_key is not None:
        overrides["api_key"] = api_key
    if base_url is not None:
        overrides["base_url"] = base_url
    if poll_interval_ms is not None:
        overrides["poll_interval_ms"] = poll_interval_ms

    try:
        settings = AppSettings(**overrides)
        trunk_hash = Hash.from_string(trunk)
        branch_hash = Hash.from_string(branch)
        chunks = [Trytes.from_string(t) for t in trytes]
        result = asyncio.run(_attach(settings, trunk_hash, branch_hash, chunks, mwm))
    except PowBoxError as exc:
        _console.print(build_error_panel(exc))
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        # Settings inválidos (pydantic).
        _console.print(build_error_panel(exc))
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(json.dumps([str(t) for t in result]))
        return

    print_banner(_console)
    _console.print(build_trytes_table(result))


def run() -> None:
    app()
