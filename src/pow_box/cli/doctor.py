"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from pow_box.adapters.http_client import build_async_client
from pow_box.cli.ui_components import build_error_panel
from pow_box.core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _load_settings() -> AppSettings | None:
    """Settings actuales, o `None` si el `.env` de usuario no valida."""

    try:
        return AppSettings()
    except ValueError as exc:
        _console.print(build_error_panel(exc))
        return None


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or type(exc).__name__


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = _load_settings()
    if settings is None:
        _console.print("[yellow]Fix:[/yellow] run `pow-box doctor setup` or correct the POW_BOX_* values.")
        raise typer.Exit(code=1)

    table = Table(title="pow-box Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.api_key:
        table.add_row("API key", "OK", "Set")
    else:
        table.add_row("API key", "MISSING", "Run `pow-box doctor setup` or set POW_BOX_API_KEY")
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Poll interval", "OK", f"{settings.poll_interval_ms} ms")
    table.add_row("Performs single", "OK", str(settings.performs_single))

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings.base_url, settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not settings.api_key:
        _console.print("\n[yellow]Note:[/yellow] `pow-box attach` needs an API key.")


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = _load_settings()
    default_base_url = settings.base_url if settings else AppSettings.model_fields["base_url"].default

    base_url = typer.prompt("PoW box base URL", default=default_base_url, show_default=True).strip()
    api_key = typer.prompt("PoW box API key", hide_input=True, confirmation_prompt=False).strip()

    if not base_url or not api_key:
        raise typer.BadParameter("base_url and api_key are required")

    env_path = write_user_env_vars(
        {
            "POW_BOX_BASE_URL": base_url,
            "POW_BOX_API_KEY": api_key,
        }
    )

    _console.print(f"[green]Saved PoW box config to:[/green] {env_path}")
