"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pow_box.core.domain.trytes import Trytes
from pow_box.core.errors import PowBoxError


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("POW-BOX", style="bold cyan")
    subtitle = Text("Remote proof-of-work • attachToTangle", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _shorten(value: str, max_chars: int) -> str:
    if len(value) <= max_chars:
        return value
    return value[: max_chars - 1] + "…"


def build_trytes_table(trytes: Sequence[Trytes], *, max_chars: int = 64) -> Table:
    """Tabla con los trytes resultantes (uno por chunk, en orden)."""

    table = Table(title="Proof of Work")
    table.add_column("#", style="cyan", no_wrap=True, justify="right")
    table.add_column("Length", style="white", justify="right")
    table.add_column("Trytes", style="magenta")
    for index, t in enumerate(trytes):
        table.add_row(str(index), str(len(t)), _shorten(str(t), max_chars))
    return table


def build_error_panel(error: BaseException) -> Panel:
    """Panel para errores de la aplicación (o del transporte)."""

    if isinstance(error, PowBoxError):
        body = Text(error.format().rstrip())
        title = Text(f"{error.domain} error", style="bold red")
    else:
        body = Text(str(error) or type(error).__name__)
        title = Text("Error", style="bold red")
    return Panel(body, title=title, border_style="red")
