"""Componentes de UI para CLI (Rich).

Tablas, banner y configuración de logging compartidos por los comandos.
"""

from __future__ import annotations

import logging

from rich.align import Align
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


def configure_logging(level: str = "INFO", console: Console | None = None) -> None:
    """Instala un `RichHandler` en el logger raíz.

    `force=True` para que repetir la llamada (tests, varios comandos) no
    duplique handlers.
    """

    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console or Console(stderr=True), show_path=False)],
        force=True,
    )


def print_banner(console: Console) -> None:
    title = Text("fraction-docs", style="bold cyan")
    subtitle = Text("Maven artifacts • JAR metadata • AsciiDoc pages", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_pages_table() -> Table:
    """Tabla resumen de un build de libro."""

    table = Table(title="Book pages")
    table.add_column("Path", style="cyan", no_wrap=True)
    table.add_column("Mode", style="white")
    table.add_column("Output", style="magenta")
    return table
