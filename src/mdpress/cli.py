"""Command-line interface for mdpress."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.tree import Tree

from mdpress import __version__
from mdpress.config import get_settings, load_settings
from mdpress.core.converter import (
    ConversionError,
    DocumentConverter,
    load_source,
    load_style,
    source_stats,
)
from mdpress.export.base import ExportFailure, ExportInProgressError, HostUnavailable
from mdpress.export.pdf_exporter import RasterPdfExporter
from mdpress.formatting.ir import Document, Heading, InlineRun, ListBlock, Paragraph
from mdpress.log import configure_logging
from mdpress.samples import SAMPLE_MARKDOWN
from mdpress.style.config import FontFamily, StyleConfig

app = typer.Typer(
    name="mdpress",
    help="Turn extended markdown into print-ready A4 PDF documents.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"mdpress v{__version__}")
        raise typer.Exit()


def status_line(source: str, style: StyleConfig) -> str:
    """Editor-style status line: size of the source and main typography."""
    stats = source_stats(source)
    return (
        f"Characters: {stats.characters} | Lines: {stats.lines} | "
        f"A4 • {style.font_family.value} • {style.font_size.body}pt"
    )


def _load_inputs(
    path: Path, style_file: Optional[Path], font: Optional[FontFamily]
) -> tuple[str, StyleConfig]:
    """Read source and style, exiting with an error message on failure."""
    try:
        source = load_source(path)
        style = load_style(style_file)
    except ConversionError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    if font is not None:
        style = style.updated(font_family=font)
    return source, style


def _describe_run(run: InlineRun) -> str:
    parts = []
    for span in run.spans:
        flags = []
        if span.bold:
            flags.append("bold")
        if span.italic:
            flags.append("italic")
        if span.href:
            flags.append(f"link={span.href}")
        if span.centered:
            flags.append("center")
        if span.color:
            flags.append(f"color={span.color}")
        label = repr(span.plain)
        parts.append(f"{label} [dim]({', '.join(flags)})[/dim]" if flags else label)
    return " ".join(parts)


def document_tree(document: Document, title: str) -> Tree:
    """Build a rich tree showing the block structure of a document."""
    tree = Tree(f"[bold]{title}[/bold] ({len(document)} blocks)")
    for block in document.blocks:
        if isinstance(block, Heading):
            tree.add(f"[cyan]H{block.level}[/cyan] {_describe_run(block.inline)}")
        elif isinstance(block, Paragraph):
            node = tree.add(f"[green]Paragraph[/green] [dim]{block.role.value}[/dim]")
            for line in block.lines:
                node.add(_describe_run(line))
        elif isinstance(block, ListBlock):
            node = tree.add(f"[magenta]List[/magenta] ({len(block.items)} items)")
            for item in block.items:
                node.add(_describe_run(item))
        else:
            tree.add("[yellow]Rule[/yellow]")
    return tree


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    env_file: Optional[Path] = typer.Option(
        None,
        "--env-file",
        exists=True,
        dir_okay=False,
        help="Read settings from this .env file",
    ),
) -> None:
    """
    Convert extended markdown into styled A4 documents.

    Examples:

        mdpress export resume.md

        mdpress export resume.md -o out/resume.pdf --style style.json

        mdpress print resume.md  # Browser print dialog

        mdpress inspect resume.md  # Show the parsed structure

        mdpress --env-file print.env export resume.md
    """
    settings = load_settings(env_file) if env_file else get_settings()
    configure_logging(settings.log_level)


@app.command()
def export(
    path: Path = typer.Argument(..., help="Markdown file to export", exists=True, dir_okay=False),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output PDF path (default: document.pdf)",
    ),
    style_file: Optional[Path] = typer.Option(
        None,
        "--style",
        "-s",
        help="Style settings JSON file",
    ),
    font: Optional[FontFamily] = typer.Option(
        None,
        "--font",
        "-f",
        help="Font family override",
    ),
    scale: Optional[float] = typer.Option(
        None,
        "--scale",
        min=0.5,
        max=8.0,
        help="Rasterization scale (default: 2)",
    ),
    fallback: bool = typer.Option(
        True,
        "--fallback/--no-fallback",
        help="Open the print fallback if PDF export fails",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
) -> None:
    """Export a markdown file as a rasterized A4 PDF."""
    settings = get_settings()
    if verbose:
        configure_logging("INFO")

    source, style = _load_inputs(path, style_file, font)
    output_path = output or Path(settings.output_filename)

    if verbose:
        console.print(f"[blue]Processing:[/blue] {path}")
        console.print(f"[blue]Output:[/blue] {output_path}")
        console.print(f"[blue]Status:[/blue] {status_line(source, style)}")

    converter = DocumentConverter(pdf_exporter=RasterPdfExporter(scale=scale))
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task("Exporting...", total=None)
            written = asyncio.run(converter.export_pdf(source, output_path, style))
    except ExportInProgressError as e:
        console.print(f"[yellow]Busy:[/yellow] {e}")
        raise typer.Exit(1)
    except ExportFailure as e:
        console.print(f"[red]PDF export failed:[/red] {e}")
        if not fallback:
            console.print("[yellow]Try the print fallback:[/yellow] mdpress print " + str(path))
            raise typer.Exit(1)
        console.print("[yellow]Opening the print fallback instead...[/yellow]")
        try:
            printed = converter.print_document(source, style)
        except HostUnavailable as host_error:
            console.print(f"[red]Error:[/red] {host_error}")
            raise typer.Exit(1)
        console.print(f"[green]Print document:[/green] {printed}")
        raise typer.Exit(1)

    console.print(f"[green]Success:[/green] {written}")


@app.command("print")
def print_command(
    path: Path = typer.Argument(..., help="Markdown file to print", exists=True, dir_okay=False),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Where to write the HTML document (default: temporary file)",
    ),
    style_file: Optional[Path] = typer.Option(
        None,
        "--style",
        "-s",
        help="Style settings JSON file",
    ),
    font: Optional[FontFamily] = typer.Option(
        None,
        "--font",
        "-f",
        help="Font family override",
    ),
    open_window: bool = typer.Option(
        True,
        "--open/--no-open",
        help="Open the document in the browser print dialog",
    ),
) -> None:
    """Write a printable HTML document and open the print dialog."""
    source, style = _load_inputs(path, style_file, font)
    if not open_window and output is None:
        console.print("[red]Error:[/red] --no-open requires --output")
        raise typer.Exit(1)

    converter = DocumentConverter()
    try:
        written = converter.print_document(source, style, output, open_window=open_window)
    except HostUnavailable as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]Print document:[/green] {written}")


@app.command()
def inspect(
    path: Path = typer.Argument(..., help="Markdown file to inspect", exists=True, dir_okay=False),
    style_file: Optional[Path] = typer.Option(
        None,
        "--style",
        "-s",
        help="Style settings JSON file",
    ),
) -> None:
    """Show the parsed block structure of a markdown file."""
    source, style = _load_inputs(path, style_file, None)
    document = DocumentConverter().parse(source)
    console.print(document_tree(document, path.name))
    console.print(f"[dim]{status_line(source, style)}[/dim]")


@app.command()
def sample(
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the sample to a file instead of the terminal",
    ),
) -> None:
    """Print the built-in sample document (a resume template)."""
    if output is None:
        console.print(SAMPLE_MARKDOWN, markup=False, highlight=False)
        return
    output.write_text(SAMPLE_MARKDOWN, encoding="utf-8")
    console.print(f"[green]Sample written:[/green] {output}")


if __name__ == "__main__":
    app()
