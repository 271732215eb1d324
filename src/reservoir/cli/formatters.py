"""Formatting helpers for CLI presentation."""

from __future__ import annotations

import os
from typing import Any, Iterable, Mapping, Optional

from rich.markup import escape
from rich.table import Table

from reservoir.core.attributes import CoverageRecord
from reservoir.core.models import AttributeInfo


def format_site(file: Optional[str], line: Optional[int]) -> str:
    if not file:
        return "-"
    return f"{os.path.basename(file)}:{line}"


def format_resolution(info: AttributeInfo) -> str:
    """Describe where an attribute's value comes from."""
    if info.squash:
        return "squash " + ".".join(info.squash)
    if info.aliases:
        return "aliases " + ", ".join(info.aliases)
    return "key " + info.name


def build_definition_table(model_name: str, described: Mapping[str, AttributeInfo]) -> Table:
    table = Table(title=f"Model: {model_name}")
    table.add_column("Attribute")
    table.add_column("Type")
    table.add_column("Source")
    table.add_column("Default")
    table.add_column("Defined at")
    for name, info in described.items():
        label = f"{name} [bold](identity)[/bold]" if info.identity else name
        site = format_site(info.coverage_file, info.coverage_line)
        default = "-" if info.default is None else repr(info.default)
        table.add_row(label, info.type, format_resolution(info), default, site)
    return table


def build_values_table(model_name: str, values: Mapping[str, Any]) -> Table:
    table = Table(title=f"{model_name} attributes")
    table.add_column("Attribute")
    table.add_column("Value")
    table.add_column("Python type")
    for name, value in values.items():
        table.add_row(name, escape(repr(value)), type(value).__name__)
    return table


def build_coverage_table(model_name: str, records: Iterable[CoverageRecord]) -> Table:
    table = Table(title=f"Coverage: {model_name}")
    table.add_column("Attribute")
    table.add_column("Hits", justify="right")
    table.add_column("Defined at")
    for record in records:
        hits = str(record.hits) if record.hits else "[red]0[/red]"
        site = format_site(record.file, record.line)
        table.add_row(record.attribute, hits, site)
    return table
