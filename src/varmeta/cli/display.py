"""Rich display helpers for terminal output."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from varmeta.models.metadata import VariableMetadata, VariableRecord


def _format_value_labels(var: VariableRecord, limit: int = 3) -> str:
    if not var.has_value_labels:
        return ""
    items = [f"{code}={label}" for code, label in sorted(var.value_labels.items())]
    shown = ", ".join(items[:limit])
    if len(items) > limit:
        shown += f", ... (+{len(items) - limit})"
    return f"{var.value_label_set_name}: {shown}"


def display_variable_metadata(
    record: VariableMetadata, console: Console, title: str = "Variable Metadata"
) -> None:
    """Print one row per variable.

    Shows: Index, Name, Label, Type, Value Labels. String variables are
    highlighted in green.

    Args:
        record: Collected variable metadata.
        console: Rich Console for output.
        title: Table title.
    """
    table = Table(title=title, show_lines=True)
    table.add_column("Index", justify="right", style="dim")
    table.add_column("Name", style="bold cyan", no_wrap=True)
    table.add_column("Label", max_width=35)
    table.add_column("Type", no_wrap=True)
    table.add_column("Value Labels", max_width=50)

    for var in record.variables():
        table.add_row(
            str(var.index),
            var.name,
            var.label[:35] if var.label else "",
            "string" if var.is_string else "numeric",
            _format_value_labels(var),
            style="green" if var.is_string else "",
        )

    console.print(table)
    console.print(f"\n[bold]{record.count}[/bold] variables described")
