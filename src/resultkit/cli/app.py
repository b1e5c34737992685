"""
Root Typer application for the resultkit CLI.

``resultkit validate`` runs the signup pipeline over values given as options
and/or a JSON file; ``resultkit config`` shows the effective settings.
"""

from __future__ import annotations

import json
from importlib.metadata import PackageNotFoundError, version as pkg_version
from pathlib import Path

import typer
from rich.markup import escape

from resultkit.cli.utils import (
    console,
    fail_input,
    fields_from_document,
    output_outcome,
    read_document,
)
from resultkit.core.errors import ConfigError, ParseError
from resultkit.core.logging import configure_logging, get_logger
from resultkit.core.result import Err, Ok
from resultkit.core.settings import ValidationMode, get_settings, load_settings
from resultkit.validation.pipeline import signup_pipeline

app = typer.Typer(
    name="resultkit",
    help="resultkit: Result-based field validation.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

logger = get_logger(__name__)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        try:
            v = pkg_version("resultkit")
        except PackageNotFoundError:
            v = "0.1.0"
        typer.echo(f"resultkit {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """resultkit CLI: validate fields and inspect configuration."""
    try:
        settings = get_settings()
    except ConfigError as exc:
        fail_input(exc)
    configure_logging(level=settings.log_level, json_format=settings.json_logs)


# ── Commands ─────────────────────────────────────────────────────────────


def _parse_mode(raw: str) -> ValidationMode:
    try:
        return ValidationMode.parse(raw)
    except ValueError:
        raise typer.BadParameter("expected fail-fast or collect-all", param_hint="--mode") from None


@app.command("validate")
def validate_command(
    email: str | None = typer.Option(None, "--email", help="Email address."),
    age: str | None = typer.Option(None, "--age", help="Age in whole years."),
    password: str | None = typer.Option(None, "--password", help="Password."),
    file: Path | None = typer.Option(
        None, "--file", "-f", help="JSON object with field values; options override it."
    ),
    mode: str | None = typer.Option(
        None, "--mode", "-m", help="fail-fast or collect-all; defaults to RESULTKIT_DEFAULT_MODE."
    ),
    json_out: bool = typer.Option(False, "--json", help="Print the outcome as JSON."),
) -> None:
    """Validate signup fields and report the problems found."""
    settings = get_settings()
    selected = _parse_mode(mode) if mode is not None else settings.default_mode
    pipeline = signup_pipeline(settings)

    fields: dict[str, str] = {}
    if file is not None:
        loaded = read_document(file).flat_map(
            lambda doc: fields_from_document(doc, selected, pipeline.fields)
        )
        match loaded:
            case Ok(from_file):
                fields.update(from_file)
            case Err(ParseError() as error):
                fail_input(error)
            case Err() as failed:
                output_outcome(failed, as_json=json_out)

    overrides = {"email": email, "age": age, "password": password}
    fields.update({name: value for name, value in overrides.items() if value is not None})

    logger.debug("cli_validate", fields=sorted(fields), mode=selected.value)
    output_outcome(pipeline.run(fields, selected), as_json=json_out, title="Validated")


@app.command("config")
def config_command(
    json_out: bool = typer.Option(False, "--json", help="Print settings as JSON."),
) -> None:
    """Show the effective settings."""
    settings = load_settings()
    data = settings.model_dump(mode="json")
    if json_out:
        console.print_json(json.dumps(data))
        return
    for key, value in data.items():
        console.print(f"[cyan]{escape(key)}[/cyan] = {escape(str(value))}")
