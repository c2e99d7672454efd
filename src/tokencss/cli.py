"""
tokencss command line interface.

Commands:
- build: turn a directory of exported token documents into theme.css,
  primitives.json and tokens.json
- check: run the structural self-check on an existing stylesheet
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from ._version import __version__
from .assembler import check_structure, render_header
from .config import PipelineConfig, load_config, load_config_file
from .errors import ConfigError
from .pipeline import ThemeBuild, build_from_directory

console = Console()

MAX_LISTED_WARNINGS = 20

app = typer.Typer(
    help="Generate a normalized CSS theme from exported design-token JSON files.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"tokencss {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """tokencss main callback for global options."""
    pass


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(config_file: Path | None, source: Path) -> PipelineConfig:
    if config_file is not None:
        return load_config_file(config_file)
    return load_config(source)


def _print_summary(build: ThemeBuild) -> None:
    summary = build.summary
    table = Table(title=f"Extraction summary ({summary.files} file(s))")
    table.add_column("Category")
    table.add_column("Primitives", justify="right")
    table.add_column("Tokens", justify="right")
    for category, primitives, tokens in summary.rows():
        table.add_row(category, str(primitives), str(tokens))
    console.print(table)
    if summary.synthesized:
        console.print(f"[dim]{summary.synthesized} primitive(s) synthesized[/dim]")


def _print_warnings(build: ThemeBuild) -> None:
    if not build.warnings:
        return
    console.print(f"\n[yellow]Warnings ({len(build.warnings)}):[/yellow]")
    for warning in build.warnings[:MAX_LISTED_WARNINGS]:
        console.print(f"- {warning.format()}", markup=False, highlight=False)
    remaining = len(build.warnings) - MAX_LISTED_WARNINGS
    if remaining > 0:
        console.print(f"- and {remaining} more warnings...")


@app.command(name="build")
def build_command(
    source: Annotated[Path, typer.Argument(help="Directory of exported *.json documents")],
    output: Annotated[Path, typer.Argument(help="Directory to write the artifacts to")],
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file (default: SOURCE/tokencss.yaml)"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable debug logging")] = False,
) -> None:
    """
    Build theme.css, primitives.json and tokens.json from a source directory.

    Malformed documents are skipped and reported; the build always writes
    best-effort artifacts.

    Examples:
        tokencss build source dist
        tokencss build source dist --config tokencss.yaml
    """
    _configure_logging(verbose)
    try:
        config = _load_config(config_file, source)
    except ConfigError as e:
        typer.echo(f"Config error: {e.message}", err=True)
        raise typer.Exit(code=1) from e

    build = build_from_directory(source, output, config=config)

    _print_summary(build)
    _print_warnings(build)
    console.print(f"\n[green]Wrote[/green] theme.css, primitives.json, tokens.json to {output}")


@app.command(name="check")
def check_command(
    theme_css: Annotated[Path, typer.Argument(help="Stylesheet to check")],
    fix: Annotated[bool, typer.Option("--fix", help="Rewrite the file with corrections")] = False,
    title: Annotated[
        str, typer.Option("--title", help="Expected header title")
    ] = PipelineConfig().header_title,
) -> None:
    """
    Check the header and blank-line layout of an existing stylesheet.

    Exits with code 1 when corrections are needed and --fix was not given.
    """
    if not theme_css.is_file():
        typer.echo(f"File not found: {theme_css}", err=True)
        raise typer.Exit(code=1)

    text = theme_css.read_text(encoding="utf-8")
    corrected, corrections = check_structure(text, render_header(title))

    if not corrections:
        console.print(f"[green]✓[/green] {theme_css} is well-formed")
        return

    for correction in corrections:
        console.print(f"- {correction}", markup=False, highlight=False)

    if fix:
        theme_css.write_text(corrected, encoding="utf-8")
        console.print(f"[green]Fixed[/green] {len(corrections)} issue(s) in {theme_css}")
        return

    raise typer.Exit(code=1)


def main() -> None:
    app()
