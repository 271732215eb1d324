"""
Reservoir CLI: validate model schemas, inspect model types, and parse documents.

- Schemas are YAML files loaded from ./schemas unless --schemas is given
- Documents are JSON or YAML files holding one raw input mapping
"""

from __future__ import annotations

from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from reservoir.cli.formatters import (
    build_coverage_table,
    build_definition_table,
    build_values_table,
)
from reservoir.cli.load_helpers import load_or_exit
from reservoir.cli.paths import schemas_path
from reservoir.core.errors import CoercionError, MissingAttribute, UnknownAttribute
from reservoir.core.registries import RegistryManager
from reservoir.core.registries.validators import RegistryValidator
from reservoir.io.loaders import load_document, load_schemas
from reservoir.utils.logging import configure_logging

app = typer.Typer(help="Reservoir CLI: validate model schemas, inspect model types, and parse documents.")
console = Console()


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level for reservoir messages"),
) -> None:
    try:
        configure_logging(log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level")


def _load_registries(schemas: str | None, *, verbose_load: bool = False) -> RegistryManager:
    rm = RegistryManager()
    load_or_exit(load_schemas, schemas_path(schemas), rm, console=console, verbose_errors=verbose_load)
    return rm


def _get_model(rm: RegistryManager, name: str) -> type:
    try:
        return rm.get(name)
    except KeyError as exc:
        console.print(f"[red]{escape(str(exc.args[0]))}[/red]")
        raise typer.Exit(code=1)


@app.command()
def validate(
    schemas: str | None = typer.Argument(None, help="Path to a schema file or folder"),
    verbose: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Validate model schemas."""
    rm = _load_registries(schemas, verbose_load=verbose)

    console.print(f"[green]OK[/green] Loaded {len(list(rm.models.all()))} model type(s)")

    errors = RegistryValidator(rm).validate_all()
    if errors:
        console.print("[red]Validation errors detected:[/red]")
        for error in errors:
            console.print(f" - {error}")
        raise typer.Exit(code=1)

    console.print("[green]All validations passed[/green]")


@app.command("show")
def show_model(
    name: str = typer.Argument(..., help="Model type name"),
    schemas: str | None = typer.Option(None, help="Path to a schema file or folder"),
) -> None:
    """Show the attribute definitions of a model type."""
    rm = _load_registries(schemas)
    model_cls = _get_model(rm, name)
    console.print(build_definition_table(name, model_cls.describe()))


@app.command()
def parse(
    name: str = typer.Argument(..., help="Model type name"),
    document: str = typer.Argument(..., help="JSON or YAML document to build the model from"),
    schemas: str | None = typer.Option(None, help="Path to a schema file or folder"),
    field: Optional[List[str]] = typer.Option(None, "--field", "-f", help="Attribute to read (repeatable)"),
    require: Optional[List[str]] = typer.Option(None, "--require", "-r", help="Attribute that must be set"),
    coverage: bool = typer.Option(False, "--coverage", help="Show attribute read coverage"),
) -> None:
    """Build a model instance from a document and print its attributes."""
    rm = _load_registries(schemas)
    model_cls = _get_model(rm, name)
    raw = load_or_exit(load_document, document, console=console, what="document")

    try:
        instance = model_cls(raw)
        if require:
            instance.requires(*require)
        names = field or list(model_cls.attribute_registry.names())
        values = {attr: instance.read_attribute(attr) for attr in names}
    except (CoercionError, MissingAttribute, UnknownAttribute) as err:
        console.print(f"[red]{escape(str(err))}[/red]")
        raise typer.Exit(code=1)

    console.print(build_values_table(name, values))
    if coverage:
        console.print(build_coverage_table(name, rm.coverage.report(model_cls.coverage_key)))
