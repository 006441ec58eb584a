"""Command-line interface for python-smartnav.

Reads HTML documents the way a screen reader would, from the terminal.
"""

from pathlib import Path
from typing import Annotated

import typer

from . import __version__
from .accessibility.dom_util import get_content_text
from .accessibility.types import CellPosition
from .config import NavigationConfig
from .export import export_reading
from .session import NavigationSession

app = typer.Typer(
    name="smartnav",
    help="Read HTML documents unit by unit, as a screen reader would.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"smartnav version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Read HTML documents unit by unit, as a screen reader would."""
    pass


def _load_config(config: Path | None) -> NavigationConfig:
    if config is None:
        return NavigationConfig()
    return NavigationConfig.from_yaml(config)


@app.command()
def read(
    file: Annotated[Path, typer.Argument(help="Path to the HTML file")],
    format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: text or yaml")
    ] = "text",
    max_steps: Annotated[
        int | None, typer.Option("--max-steps", "-n", help="Stop after this many units")
    ] = None,
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to a YAML settings file")
    ] = None,
    reverse: Annotated[bool, typer.Option("--reverse", help="Read from the end")] = False,
) -> None:
    """Read a document from start to end."""
    if format not in ("text", "yaml"):
        typer.echo(f"Error: Unknown format '{format}'. Use 'text' or 'yaml'", err=True)
        raise typer.Exit(1)

    try:
        settings = _load_config(config)
        with NavigationSession.from_file(file, config=settings) as session:
            steps = list(session.read_all(max_steps=max_steps, reverse=reverse))
        output = export_reading(steps, format=format)
        if output:
            typer.echo(output.rstrip("\n"))
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def table(
    file: Annotated[Path, typer.Argument(help="Path to the HTML file")],
    index: Annotated[
        int, typer.Option("--index", "-i", help="Which table to read (1-based)")
    ] = 1,
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to a YAML settings file")
    ] = None,
) -> None:
    """Show a table's dimensions and every cell with its headers."""
    try:
        settings = _load_config(config)
        with NavigationSession.from_file(file, config=settings) as session:
            tables = list(session.root.iter("table"))
            if not 1 <= index <= len(tables):
                typer.echo(
                    f"Error: Table {index} not found ({len(tables)} tables in document)",
                    err=True,
                )
                raise typer.Exit(1)

            walker = session.walker
            walker.set_current_node(tables[index - 1])
            walker.enter_table()
            navigator = walker.current_table_navigator
            rows, cols = walker.get_row_count(), walker.get_col_count()
            typer.echo(f"Table {index}: {rows} rows, {cols} columns")

            for row, slots in enumerate(navigator.grid):
                for col, shadow in enumerate(slots):
                    # Spanned cells are listed once, at their top-left slot
                    if shadow is None or (shadow.row, shadow.col) != (row, col):
                        continue
                    navigator.go_to_cell(CellPosition(row, col))
                    text = get_content_text(shadow.element)
                    line = f"  [{row + 1},{col + 1}] {text}"
                    headers = []
                    if row_header := walker.get_row_header_text():
                        headers.append(f"row: {row_header}")
                    if col_header := walker.get_col_header_text():
                        headers.append(f"col: {col_header}")
                    if headers:
                        line += f" ({'; '.join(headers)})"
                    typer.echo(line)
    except typer.Exit:
        raise
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
