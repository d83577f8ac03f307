"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from piperun.client import PiperunClient
from piperun.core.config import ClientSettings, write_user_env_vars
from piperun.core.domain.errors import PiperunError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_api(settings: ClientSettings) -> tuple[bool, str]:
    try:
        with PiperunClient(settings) as client:
            envelope = client.executor.get("pipelines")
    except PiperunError as exc:
        return False, str(exc)
    if envelope.http_code == 200:
        return True, "HTTP 200"
    return False, f"HTTP {envelope.http_code}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = ClientSettings()

    table = Table(title="piperun doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    has_token = bool(settings.token)
    table.add_row("API token", "OK" if has_token else "MISSING", "PIPERUN_TOKEN" if not has_token else "set")
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    ok_api = False
    if has_token:
        ok_api, detail_api = _check_api(settings)
        table.add_row("API access", "OK" if ok_api else "FAIL", detail_api)
    else:
        table.add_row("API access", "SKIPPED", "no token")

    _console.print(table)

    if not has_token:
        _console.print("\n[yellow]Note:[/yellow] run `piperun doctor setup` to store a token.")
    if not ok_api:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive token setup (stores config in the user config .env)."""

    token = typer.prompt("PipeRun API token", hide_input=True, confirmation_prompt=False).strip()
    if not token:
        raise typer.BadParameter("token is required")

    env_path = write_user_env_vars({"PIPERUN_TOKEN": token})
    _console.print(f"[green]Saved token to:[/green] {env_path}")
