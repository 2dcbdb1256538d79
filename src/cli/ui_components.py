"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Las tablas de actividades y entradas se comparten entre `activities` y `entries`.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Activity, TimeEntry


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Permite desactivar el banner en modos no interactivos (`--json`).
    """

    title = Text("timeular-client", style="bold cyan")
    subtitle = Text("Activities • Time entries • Reports", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def format_elapsed(elapsed: timedelta) -> str:
    total = int(elapsed.total_seconds())
    sign = "-" if total < 0 else ""
    hours, rest = divmod(abs(total), 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{sign}{hours:d}:{minutes:02d}:{seconds:02d}"


def build_activities_table(activities: Iterable[Activity]) -> Table:
    table = Table(title="Activities")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", style="cyan")
    table.add_column("Color", style="white")
    table.add_column("Integration", style="magenta")
    table.add_column("Side", style="green", justify="right")
    for activity in activities:
        table.add_row(
            activity.id,
            activity.name,
            activity.color or "",
            activity.integration or "",
            "" if activity.device_side is None else str(activity.device_side),
        )
    return table


def build_entries_table(entries: list[TimeEntry]) -> Table:
    """Tabla de entradas en el orden recibido, con el total en el pie."""

    table = Table(title="Time Entries", show_footer=True)
    table.add_column("Activity", style="cyan", footer="Total")
    table.add_column("Start", style="white", no_wrap=True)
    table.add_column("Stop", style="white", no_wrap=True)

    total = sum((entry.elapsed for entry in entries), timedelta())
    table.add_column("Duration", style="green", justify="right", footer=format_elapsed(total))
    table.add_column("Note", style="dim")

    for entry in entries:
        name = entry.activity.name if entry.activity else f"? ({entry.activity_id})"
        table.add_row(
            name,
            entry.started_at.strftime("%Y-%m-%d %H:%M"),
            entry.stopped_at.strftime("%Y-%m-%d %H:%M"),
            format_elapsed(entry.elapsed),
            entry.note_text,
        )
    return table
