"""varmeta CLI application entry point.

Provides commands for extracting variable metadata from statistical data
files as JSON and for viewing it as a table.

Usage:
    varmeta extract <data-file> [--vars "age income"] [--output out.json]
    varmeta show <data-file> [--vars "inc*"]
    varmeta version
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console

from varmeta.models.metadata import VariableMetadata

LOG_LEVEL_ENV = "VARMETA_LOG_LEVEL"

app = typer.Typer(
    name="varmeta",
    help="Extract variable names, labels and value labels from statistical datasets.",
    no_args_is_help=True,
)

console = Console()


def configure_logging(verbose: bool = False) -> None:
    """Route loguru output to stderr at the configured level.

    ``--verbose`` selects DEBUG; otherwise VARMETA_LOG_LEVEL is used,
    defaulting to WARNING.
    """
    level = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logger.remove()
    logger.add(sys.stderr, level=level)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging on stderr"),
    ] = False,
) -> None:
    configure_logging(verbose)


@app.command()
def version() -> None:
    """Show the current version."""
    from varmeta import __version__

    console.print(f"varmeta {__version__}")


def _collect(data_file: Path, varlist: str | None) -> VariableMetadata:
    """Read ``data_file`` and collect its metadata, exiting on failure."""
    from varmeta.collector import collect_variable_metadata
    from varmeta.host.base import HostLookupError
    from varmeta.host.readstat import ReadstatHost

    if not data_file.is_file():
        console.print(f"[bold red]Error:[/bold red] File not found: {data_file}")
        raise typer.Exit(code=1)

    try:
        host = ReadstatHost(data_file, varlist=varlist, metadataonly=True)
        return collect_variable_metadata(host)
    except (HostLookupError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e
    except Exception as e:
        console.print(f"[bold red]Error reading {data_file.name}:[/bold red] {e}")
        raise typer.Exit(code=1) from e


@app.command()
def extract(
    data_file: Annotated[
        Path,
        typer.Argument(help="Data file (.dta, .sav, .zsav, .por, .sas7bdat, .xpt)"),
    ],
    varlist: Annotated[
        str | None,
        typer.Option("--vars", help="Variables to describe, e.g. \"age income\" or \"inc*\""),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the JSON document to this file"),
    ] = None,
    indent: Annotated[
        int,
        typer.Option("--indent", min=0, help="JSON indentation"),
    ] = 2,
) -> None:
    """Extract variable metadata as a JSON document.

    Prints the document to stdout unless --output is given.
    """
    from varmeta.serialization import metadata_to_json, write_metadata_json

    record = _collect(data_file, varlist)

    if output is not None:
        write_metadata_json(record, output, indent=indent)
        console.print(f"[green]Metadata for {record.count} variables written to {output}[/green]")
    else:
        typer.echo(metadata_to_json(record, indent=indent))


@app.command()
def show(
    data_file: Annotated[
        Path,
        typer.Argument(help="Data file (.dta, .sav, .zsav, .por, .sas7bdat, .xpt)"),
    ],
    varlist: Annotated[
        str | None,
        typer.Option("--vars", help="Variables to describe, e.g. \"age income\" or \"inc*\""),
    ] = None,
) -> None:
    """Show variable metadata as a table."""
    from varmeta.cli.display import display_variable_metadata

    record = _collect(data_file, varlist)
    display_variable_metadata(record, console, title=data_file.name)


if __name__ == "__main__":
    app()
