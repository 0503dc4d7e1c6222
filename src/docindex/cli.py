"""Command line interface for DocIndex."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from docindex.config import AppConfig
from docindex.errors import RootDirectoryError
from docindex.index.scanner import Scanner
from docindex.index.series import build_series_index
from docindex.models import LanguageVariant
from docindex.pipeline import run_pipeline
from docindex.report import EXIT_FATAL, render_json, render_markdown_toc, render_text


console = Console(emoji=False)
err_console = Console(stderr=True, emoji=False)
app = typer.Typer(help="DocIndex - series index and link checker for Markdown collections")


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _build_config(
    variant_suffix: str, extensions: List[str], concurrency: Optional[int] = None
) -> AppConfig:
    try:
        return AppConfig(
            variant_suffix=variant_suffix,
            extensions=tuple(extensions),
            concurrency=concurrency,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _fail(exc: RootDirectoryError) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
    raise typer.Exit(code=EXIT_FATAL)


@app.command()
def scan(
    root: Path = typer.Argument(..., help="Root directory of the content tree."),
    variant_suffix: str = typer.Option(
        AppConfig().variant_suffix, "--variant-suffix", help="Filename marker of the translated variant"
    ),
    ext: List[str] = typer.Option(
        list(AppConfig().extensions), "--ext", help="Document extension, repeatable"
    ),
    concurrency: Optional[int] = typer.Option(
        None, "--concurrency", min=1, help="File reader threads (default: CPU count)"
    ),
    output_format: OutputFormat = typer.Option(OutputFormat.TEXT, "--format", help="Report format"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Index the tree, check links and variant pairs, and print a report.

    Exits 1 when broken links are found and 2 when the root is unusable.
    """
    _setup_logging(verbose)
    config = _build_config(variant_suffix, ext, concurrency)

    try:
        report = run_pipeline(root, config)
    except RootDirectoryError as exc:
        _fail(exc)

    if output_format is OutputFormat.JSON:
        typer.echo(render_json(report))
    else:
        render_text(report, console)
    raise typer.Exit(code=report.exit_code)


@app.command()
def toc(
    root: Path = typer.Argument(..., help="Root directory of the content tree."),
    variant: LanguageVariant = typer.Option(
        LanguageVariant.BASE, "--variant", help="Language variant to list"
    ),
    variant_suffix: str = typer.Option(
        AppConfig().variant_suffix, "--variant-suffix", help="Filename marker of the translated variant"
    ),
    ext: List[str] = typer.Option(
        list(AppConfig().extensions), "--ext", help="Document extension, repeatable"
    ),
    heading: Optional[str] = typer.Option(None, "--heading", help="Top-level heading to prepend"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write Markdown to this file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print a Markdown table of contents for one language variant."""
    _setup_logging(verbose)
    config = _build_config(variant_suffix, ext)
    scanner = Scanner.from_config(root, config)

    try:
        documents = list(scanner.iter_documents())
    except RootDirectoryError as exc:
        _fail(exc)

    markdown = render_markdown_toc(build_series_index(documents, variant=variant), heading=heading)
    if output is None:
        typer.echo(markdown, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(markdown, encoding="utf-8")
    console.print(f"Wrote [bold]{escape(str(output))}[/bold] ({len(documents)} documents scanned)")
