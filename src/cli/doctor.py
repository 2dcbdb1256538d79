"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.timeular import TimeularClient
from core.config import AppSettings, write_user_env_vars
from core.errors import RequestError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_sign_in(settings: AppSettings) -> tuple[bool, str]:
    async with TimeularClient(settings) as client:
        try:
            await client.connect(settings.api_key or "", settings.api_secret or "")
        except RequestError as exc:
            return False, str(exc)
    return True, "Signed in"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="timeular-client Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("API URL", "OK", settings.api_url)
    timeout = "none" if settings.http_timeout_seconds is None else f"{settings.http_timeout_seconds}s"
    table.add_row("HTTP timeout", "OK", timeout)

    if not settings.has_credentials:
        table.add_row("Credentials", "MISSING", "Set TIMEULAR_API_KEY / TIMEULAR_API_SECRET")
        table.add_row("Sign-in", "SKIPPED", "No credentials")
        _console.print(table)
        _console.print("\n[yellow]Note:[/yellow] Run `timeular-client doctor setup` to store credentials.")
        raise typer.Exit(code=1)

    table.add_row("Credentials", "OK", "API key and secret configured")
    ok, detail = asyncio.run(_check_sign_in(settings))
    table.add_row("Sign-in", "OK" if ok else "FAIL", detail)

    _console.print(table)
    if not ok:
        raise typer.Exit(code=1)


@app.command()
def setup() -> None:
    """Interactive credential setup (stored in the user config .env)."""

    api_key = typer.prompt("Timeular API key").strip()
    api_secret = typer.prompt("Timeular API secret", hide_input=True, confirmation_prompt=False).strip()

    if not api_key or not api_secret:
        raise typer.BadParameter("API key and secret are required")

    env_path = write_user_env_vars(
        {
            "TIMEULAR_API_KEY": api_key,
            "TIMEULAR_API_SECRET": api_secret,
        }
    )

    _console.print(f"[green]Saved credentials to:[/green] {env_path}")
