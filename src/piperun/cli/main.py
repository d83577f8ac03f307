"""CLI de piperun (Typer + Rich).

Cada comando arma un `PiperunClient` con la configuración del entorno más
las opciones globales, llama a una operación y muestra el envelope.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import typer
from rich.console import Console

from piperun.adapters.json_exporter import export_envelope_json
from piperun.cli import doctor
from piperun.cli.ui_components import print_envelope
from piperun.client import PiperunClient
from piperun.core.config import ClientSettings
from piperun.core.domain.errors import PiperunError, ValidationError
from piperun.core.domain.models import ResponseEnvelope
from piperun.core.logging_setup import configure_logging

app = typer.Typer(no_args_is_help=True, help="Command line access to the PipeRun CRM API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@dataclass
class CliState:
    token: str | None = None
    debug: bool = False
    raw: bool = False
    output: Path | None = None


def build_client(settings: ClientSettings) -> PiperunClient:
    return PiperunClient(settings)


def _settings_for(state: CliState) -> ClientSettings:
    settings = ClientSettings()
    changes: dict[str, object] = {"debug": state.debug, "decode": not state.raw}
    if state.token:
        changes["token"] = state.token
    return settings.model_copy(update=changes)


def _run(
    ctx: typer.Context,
    call: Callable[[PiperunClient], ResponseEnvelope],
    *,
    title: str,
    columns: list[str],
) -> None:
    state: CliState = ctx.obj
    try:
        with build_client(_settings_for(state)) as client:
            envelope = call(client)
    except ValidationError as exc:
        for violation in exc.violations:
            _console.print(f"[red]- {violation}[/red]")
        raise typer.Exit(code=2)
    except PiperunError as exc:
        _console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1)

    if state.output is not None:
        path = export_envelope_json(envelope=envelope, output_path=state.output)
        _console.print(f"[green]Saved response to:[/green] {path}")
    print_envelope(_console, envelope, title=title, columns=columns)


def _parse_fields(fields: list[str]) -> dict[str, str]:
    data: dict[str, str] = {}
    for item in fields:
        if "=" not in item:
            raise typer.BadParameter(f"expected key=value, got {item!r}")
        key, value = item.split("=", 1)
        data[key.strip()] = value.strip()
    return data


@app.callback()
def main(
    ctx: typer.Context,
    token: Optional[str] = typer.Option(None, "--token", help="API token (defaults to PIPERUN_TOKEN)."),
    debug: bool = typer.Option(False, "--debug", help="Include request diagnostics in the output."),
    raw: bool = typer.Option(False, "--raw", help="Do not decode successful responses as JSON."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the response envelope to a JSON file."),
) -> None:
    settings = ClientSettings()
    configure_logging(settings.log_level, settings.log_json)
    ctx.obj = CliState(token=token, debug=debug, raw=raw, output=output)


@app.command()
def pipelines(ctx: typer.Context) -> None:
    """List pipelines."""

    _run(ctx, lambda c: c.pipelines.list(), title="Pipelines", columns=["name"])


@app.command("person-by-email")
def person_by_email(ctx: typer.Context, email: str) -> None:
    """Find people by email."""

    _run(ctx, lambda c: c.persons.find_by_email(email), title="Persons", columns=["name", "email"])


@app.command("person-by-phone")
def person_by_phone(ctx: typer.Context, phone: str) -> None:
    """Find people by phone (includes deals)."""

    _run(ctx, lambda c: c.persons.find_by_phone(phone), title="Persons", columns=["name", "email"])


@app.command("company-by-cnpj")
def company_by_cnpj(ctx: typer.Context, cnpj: str) -> None:
    """Find companies by CNPJ."""

    _run(ctx, lambda c: c.companies.find_by_cnpj(cnpj), title="Companies", columns=["name", "cnpj"])


@app.command("company-by-phone")
def company_by_phone(ctx: typer.Context, phone: str) -> None:
    """Find companies by phone (includes deals)."""

    _run(ctx, lambda c: c.companies.find_by_phone(phone), title="Companies", columns=["name", "cnpj"])


@app.command()
def city(ctx: typer.Context, name: str, uf: str) -> None:
    """Look up a city id by name and state."""

    _run(ctx, lambda c: c.cities.find(name, uf), title="Cities", columns=["name", "uf"])


@app.command("deals-by-account")
def deals_by_account(ctx: typer.Context, account_id: int) -> None:
    """Find deals linked to an account id."""

    _run(ctx, lambda c: c.deals.find_by_account(account_id), title="Deals", columns=["title", "stage_id"])


@app.command("create-person")
def create_person(
    ctx: typer.Context,
    name: str,
    field: list[str] = typer.Option([], "--field", "-f", help="Extra field as key=value."),
) -> None:
    """Create a person."""

    data = {"name": name, **_parse_fields(field)}
    _run(ctx, lambda c: c.persons.create(data), title="Person", columns=["name"])


@app.command("create-deal")
def create_deal(
    ctx: typer.Context,
    pipeline_id: int,
    stage_id: int,
    title: str,
    field: list[str] = typer.Option([], "--field", "-f", help="Extra field as key=value."),
) -> None:
    """Create a deal in a pipeline stage."""

    data = {"pipeline_id": pipeline_id, "stage_id": stage_id, "title": title, **_parse_fields(field)}
    _run(ctx, lambda c: c.deals.create(data), title="Deal", columns=["title"])


@app.command("add-note")
def add_note(
    ctx: typer.Context,
    text: str,
    deal: int = typer.Option(..., "--deal", help="Deal id."),
    person: Optional[int] = typer.Option(None, "--person", help="Person id."),
    company: Optional[int] = typer.Option(None, "--company", help="Company id."),
) -> None:
    """Attach a note to a deal and a person or company."""

    if (person is None) == (company is None):
        raise typer.BadParameter("pass exactly one of --person or --company")
    if person is not None:
        _run(ctx, lambda c: c.notes.create_for_person(person, deal, text), title="Note", columns=["text"])
    else:
        _run(ctx, lambda c: c.notes.create_for_company(company, deal, text), title="Note", columns=["text"])


@app.command("delete-deal")
def delete_deal(ctx: typer.Context, deal_id: int) -> None:
    """Delete a deal."""

    _run(ctx, lambda c: c.deals.delete(deal_id), title="Deal", columns=[])


def run() -> None:
    app()
