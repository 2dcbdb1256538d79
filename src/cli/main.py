"""timeular-client CLI (composition root).

- Builds settings, logging and the API object, then delegates to the query
  layer.
- Installs the terminal failure handler: any request error is logged and the
  process exits with status 1.
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.json_exporter import export_time_entries_json
from adapters.timeular import exit_on_failure
from cli.doctor import app as doctor_app
from cli.ui_components import build_activities_table, build_entries_table, print_banner
from core.config import AppSettings
from core.domain.models import Activity, TimeEntry
from core.domain.timestamps import parse_service_timestamp
from core.services.time_tracking import TimeularApi

app = typer.Typer(no_args_is_help=True, help="Timeular activities and time entries from the terminal.")
app.add_typer(doctor_app, name="doctor")

_console = Console()


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _load_settings(debug: bool) -> AppSettings:
    settings = AppSettings()
    if debug:
        settings = settings.model_copy(update={"debug": True})
    if not settings.has_credentials:
        _console.print(
            "[red]Missing credentials.[/red] Set TIMEULAR_API_KEY and TIMEULAR_API_SECRET "
            "or run `timeular-client doctor setup`."
        )
        raise typer.Exit(code=2)
    return settings


def _parse_date(value: str, name: str) -> datetime:
    """Parse a CLI date; offsets are converted to naive UTC."""

    try:
        parsed = parse_service_timestamp(value)
    except ValueError as exc:
        raise typer.BadParameter(f"expected YYYY-MM-DD or YYYY-MM-DDTHH:MM:SS, got {value!r}", param_hint=name) from exc
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _build_api(settings: AppSettings) -> TimeularApi:
    api = TimeularApi(settings, on_failure=exit_on_failure)
    api.debug(settings.debug)
    return api


async def _fetch_activities(settings: AppSettings) -> list[Activity]:
    async with _build_api(settings) as api:
        await api.connect(settings.api_key or "", settings.api_secret or "")
        return await api.get_activities()


async def _fetch_entries(settings: AppSettings, start: datetime, end: datetime) -> list[TimeEntry]:
    async with _build_api(settings) as api:
        await api.connect(settings.api_key or "", settings.api_secret or "")
        return await api.get_time_entries(start, end)


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Log cache hits and outgoing requests."),
) -> None:
    configure_logging(debug)
    ctx.obj = {"debug": debug}


@app.command()
def activities(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table."),
) -> None:
    """List the account's activities."""

    settings = _load_settings(ctx.obj["debug"])
    result = asyncio.run(_fetch_activities(settings))

    if json_output:
        payload = [activity.model_dump(mode="json") for activity in result]
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    print_banner(_console)
    _console.print(build_activities_table(result))


@app.command()
def entries(
    ctx: typer.Context,
    start: str = typer.Option(..., "--start", help="Range start (YYYY-MM-DD[THH:MM:SS])."),
    end: str = typer.Option(..., "--end", help="Range end (YYYY-MM-DD[THH:MM:SS])."),
    export: Optional[Path] = typer.Option(None, "--export", help="Also write the entries to a JSON file."),
    json_output: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table."),
) -> None:
    """List time entries in chronological order, each with its activity."""

    start_at = _parse_date(start, "--start")
    end_at = _parse_date(end, "--end")
    if end_at < start_at:
        raise typer.BadParameter("--end must not be before --start", param_hint="--end")

    settings = _load_settings(ctx.obj["debug"])
    result = asyncio.run(_fetch_entries(settings, start_at, end_at))

    if export is not None:
        path = export_time_entries_json(entries=result, output_path=export)
        _console.print(f"[green]Exported {len(result)} entries to:[/green] {path}")

    if json_output:
        payload = [entry.model_dump(mode="json") for entry in result]
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    print_banner(_console)
    _console.print(build_entries_table(result))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
