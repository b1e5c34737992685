"""
CLI utility helpers for input loading and output formatting.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from resultkit.core.errors import (
    InvalidFormatError,
    OutOfRangeError,
    ParseError,
    ValidationError,
    ValidationErrors,
)
from resultkit.core.result import Err, Ok, Result, collect_all_errors, collect_results, try_result_with
from resultkit.core.settings import ValidationMode
from resultkit.core.values import from_python

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

EXIT_INVALID = 1
EXIT_BAD_INPUT = 2

SECRET_FIELDS = frozenset({"password"})
MASK = "********"


# ── Input ────────────────────────────────────────────────────────────────


def read_document(path: Path) -> Result[dict[str, Any], ParseError]:
    """Read a JSON object from ``path``."""
    loaded = try_result_with(
        lambda: json.loads(path.read_text(encoding="utf-8")),
        lambda e: ParseError(f"cannot read {path}: {e}", path=str(path), cause=e),
    )
    return loaded.flat_map(
        lambda doc: Ok(doc)
        if isinstance(doc, dict)
        else Err(ParseError(f"{path} must contain a JSON object", path=str(path)))
    )


def fields_from_document(
    doc: dict[str, Any], mode: ValidationMode, declared: Iterable[str]
) -> Result[dict[str, str], Exception]:
    """
    Turn a JSON object into text fields through the tagged value model.

    Only ``declared`` keys are read; anything else in the document is
    ignored. Scalars are rendered to text; a nested list or object under a
    field name is a format error for that field. Unsupported JSON (``null``)
    under a declared key is a ParseError for the whole document.
    """
    wanted = set(declared)
    selected = {name: value for name, value in doc.items() if name in wanted}
    parsed = from_python(selected).flat_map(lambda value: value.as_map())
    if parsed.is_err():
        return parsed

    def render(name: str, value: Any) -> Result[tuple[str, str], ValidationError]:
        return value.render().map(lambda text: (name, text)).map_err(
            lambda e: InvalidFormatError(name, "text or number", cause=e)
        )

    rendered = [render(name, value) for name, value in parsed.unwrap().items()]
    if mode is ValidationMode.COLLECT_ALL:
        collected = collect_all_errors(rendered, combine=ValidationErrors)
    else:
        collected = collect_results(rendered)
    return collected.map(dict)


# ── Output ───────────────────────────────────────────────────────────────


def _mask(values: dict[str, Any]) -> dict[str, Any]:
    return {k: (MASK if k in SECRET_FIELDS else v) for k, v in values.items()}


def describe_error(error: ValidationError) -> str:
    """``field: reason`` line; out-of-range errors also carry value and bounds."""
    if error.field is None:
        return error.describe()
    return f"{error.field}: {error.describe()}"


def output_outcome(
    result: Result[dict[str, Any], Exception],
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render a validation outcome; exits with code 1 on failure."""
    match result:
        case Ok(values):
            if as_json:
                console.print_json(json.dumps({"ok": True, "value": _mask(values)}, default=str))
                return
            _print_dict(_mask(values), title=title)
        case Err(error):
            if as_json:
                console.print_json(json.dumps(result.to_dict(), default=str))
                raise typer.Exit(code=EXIT_INVALID)
            _print_failure(error)
            raise typer.Exit(code=EXIT_INVALID)


def fail_input(error: Exception) -> NoReturn:
    """Report unreadable input and exit with code 2."""
    err_console.print(f"[bold red]Error[/bold red]: {escape(str(error))}")
    raise typer.Exit(code=EXIT_BAD_INPUT)


def _print_failure(error: Exception) -> None:
    errors = error.errors if isinstance(error, ValidationErrors) else (error,)
    err_console.print(f"[bold red]Validation failed[/bold red] ({len(errors)} error(s))")
    for item in errors:
        if isinstance(item, ValidationError):
            line = describe_error(item)
        else:
            line = str(item)
        err_console.print(f"  ✗ {escape(line)}")
        if isinstance(item, OutOfRangeError):
            err_console.print(
                f"    [dim]attempted {item.value}, allowed {item.minimum}..{item.maximum}[/dim]"
            )


def _print_dict(data: dict[str, Any], *, title: str = "") -> None:
    table = Table(title=title or None, show_header=True, header_style="bold cyan")
    table.add_column("Field")
    table.add_column("Value")
    for key, value in data.items():
        table.add_row(escape(str(key)), escape(str(value)))
    console.print(table)
