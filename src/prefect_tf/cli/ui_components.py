"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from presentation details.
- Tables/panels are reused by several commands.
"""

from __future__ import annotations

import json
from typing import Any

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from prefect_tf import __version__
from prefect_tf.core.domain.diagnostics import Diagnostics, Severity
from prefect_tf.core.schema import Schema


def print_banner(console: Console) -> None:
    """Print the welcome banner (interactive commands only)."""

    title = Text("prefect-tf", style="bold cyan")
    subtitle = Text(f"Declarative Prefect resources • v{__version__}", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_diagnostics_table(diags: Diagnostics) -> Table:
    table = Table(title="Diagnostics")
    table.add_column("Severity", no_wrap=True)
    table.add_column("Attribute", style="cyan")
    table.add_column("Summary", style="bold")
    table.add_column("Detail", style="white")
    for d in diags:
        style = "red" if d.severity is Severity.ERROR else "yellow"
        table.add_row(Text(d.severity.value, style=style), d.attribute or "", d.summary, d.detail)
    return table


def build_state_panel(type_name: str, state: dict[str, Any], *, title: str | None = None) -> Panel:
    body = Syntax(json.dumps(state, indent=2, sort_keys=True), "json", word_wrap=True)
    return Panel(body, title=title or type_name, border_style="green")


def build_schema_table(type_name: str, schema: Schema) -> Table:
    table = Table(title=type_name, caption=schema.description)
    table.add_column("Attribute", style="cyan", no_wrap=True)
    table.add_column("Type", style="magenta")
    table.add_column("Flags", style="green")
    table.add_column("Default", style="dim")
    table.add_column("Description", style="white")
    for name, attr in schema.attributes.items():
        default = "" if attr.default is None else json.dumps(attr.default)
        table.add_row(name, attr.type.value, attr.flags(), default, attr.description)
    return table


def build_types_table(resources: list[str], data_sources: list[str]) -> Table:
    table = Table(title="Registered types")
    table.add_column("Kind", style="cyan", no_wrap=True)
    table.add_column("Type name", style="white")
    for name in resources:
        table.add_row("resource", name)
    for name in data_sources:
        table.add_row("data source", name)
    return table
