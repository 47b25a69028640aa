"""CLI application using Typer for building PRISMA 2020 flow diagrams."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..core.exceptions import FlowDiagramError
from ..core.models import COUNT_FIELDS, EXCLUSION_FIELDS, DiagramOptions
from ..core.text import format_count
from ..io.paths import default_output_path
from ..io.reader import read_prisma_data
from ..io.template import write_template
from ..prisma.diagram import prisma_flowdiagram
from ..prisma.export import SUPPORTED_FORMATS
from ..prisma.layout import resolve_wings
from ..utils.logging import get_logger
from ..web.app import start_server as _start_web_server

app = typer.Typer(
    name="prismaflow",
    help="PRISMA 2020 flow diagrams for systematic reviews",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


@app.command()
def template(
    output: Path = typer.Argument(Path("PRISMA.csv"), help="Where to write the blank CSV template"),
) -> None:
    """Write the CSV data template to fill in with your review's counts."""
    path = write_template(output)
    logger.info(f"Template written to {path}")
    console.print(f"[green]✓ Template saved to {path}[/green]")


@app.command()
def validate(
    csv_file: Path = typer.Argument(..., help="Filled-in CSV template"),
) -> None:
    """Check a CSV template and summarise the counts it contains."""
    if not csv_file.exists():
        console.print(f"[red]Error: {csv_file} not found[/red]")
        raise typer.Exit(1)
    try:
        data = read_prisma_data(csv_file)
    except FlowDiagramError as e:
        console.print(f"[red]Invalid template: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title="Flow diagram data")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="yellow")
    for field in COUNT_FIELDS:
        table.add_row(field, format_count(getattr(data, field)))
    for field in EXCLUSION_FIELDS:
        rows = getattr(data, field)
        table.add_row(field, f"{len(rows)} reason(s), n = {format_count(sum(r.n for r in rows))}")
    console.print(table)

    wings = resolve_wings(data, DiagramOptions())
    console.print(f"Previous studies column: {'yes' if wings.previous else 'no'}")
    console.print(f"Other methods column: {'yes' if wings.other else 'no'}")
    console.print(f"Tooltips: {len(data.tooltips)}, links: {len(data.urls)}")
    console.print("[green]✓ Template is valid[/green]")


@app.command()
def render(
    csv_file: Path = typer.Argument(..., help="Filled-in CSV template"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file (default: timestamped HTML)"),
    fmt: Optional[str] = typer.Option(
        None, "--format", "-f", help=f"Output format ({', '.join(SUPPORTED_FORMATS)}); inferred from --output"
    ),
    interactive: bool = typer.Option(False, "--interactive/--static", help="Hyperlink boxes in HTML output"),
    previous: bool = typer.Option(True, "--previous/--no-previous", help="Show the previous studies column"),
    other: bool = typer.Option(True, "--other/--no-other", help="Show the other methods column"),
    font: str = typer.Option("Helvetica", "--font", help="Font family"),
    fontsize: int = typer.Option(12, "--fontsize", help="Font size"),
    title_colour: str = typer.Option("Goldenrod1", "--title-colour", help="Fill colour of the column titles"),
    greybox_colour: str = typer.Option("Gainsboro", "--greybox-colour", help="Fill colour of the grey boxes"),
    main_colour: str = typer.Option("Black", "--main-colour", help="Outline colour of the main boxes"),
    arrow_colour: str = typer.Option("Black", "--arrow-colour", help="Arrow colour"),
    arrow_head: str = typer.Option("normal", "--arrow-head", help="Arrow head shape"),
    arrow_tail: str = typer.Option("none", "--arrow-tail", help="Arrow tail shape"),
) -> None:
    """Render a flow diagram from a CSV template."""
    if not csv_file.exists():
        console.print(f"[red]Error: {csv_file} not found[/red]")
        raise typer.Exit(1)
    if fmt is not None and fmt.lower() not in SUPPORTED_FORMATS:
        console.print(f"[red]Error: unsupported format '{fmt}'[/red]")
        raise typer.Exit(1)
    if output is None:
        output = default_output_path(fmt.lower() if fmt else "html")

    console.print(f"[bold blue]Rendering flow diagram[/bold blue] from {csv_file}")
    try:
        data = read_prisma_data(csv_file)
        options = DiagramOptions(
            font=font,
            fontsize=fontsize,
            title_colour=title_colour,
            greybox_colour=greybox_colour,
            main_colour=main_colour,
            arrow_colour=arrow_colour,
            arrow_head=arrow_head,
            arrow_tail=arrow_tail,
            interactive=interactive,
            previous=previous,
            other=other,
        )
        diagram = prisma_flowdiagram(data, options)
        path = diagram.save(output, fmt=fmt)
    except (FlowDiagramError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✓ Flow diagram saved to {path}[/green]")


@app.command()
def serve(
    host: str = typer.Option(
        "127.0.0.1",
        "--host",
        help="Hostname to bind the web server to.",
    ),
    port: int = typer.Option(
        8000,
        "--port",
        help="Port for the web server.",
    ),
    reload: bool = typer.Option(
        False,
        "--reload/--no-reload",
        help="Enable auto-reload (development only).",
    ),
) -> None:
    """Start the web front-end for uploading templates and viewing diagrams."""
    console.print(f"[bold blue]Starting web server[/bold blue] at http://{host}:{port}")
    try:
        _start_web_server(host=host, port=port, reload=reload)
    except Exception as exc:
        logger.error(f"Failed to start web server: {exc}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
