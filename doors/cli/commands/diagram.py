"""Diagram command for generating gate tree visualizations."""

from pathlib import Path
from typing import Annotated

import click
import typer

from doors.cli.utils import safe_write_file
from doors.visualization.mermaid import MermaidDiagramGenerator


def diagram_command(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="Gate definition file (YAML/JSON)")],
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Output file path")
    ] = None,
):
    """Generate a Mermaid diagram of a gate tree."""
    cli_ctx = ctx.obj

    gate = cli_ctx.load_gate_or_exit(source)

    cli_ctx.print_progress("Generating diagram...")
    generator = MermaidDiagramGenerator()
    diagram_content = generator.generate_gate_diagram(gate)

    if output is None:
        typer.echo(diagram_content)
        return

    if not output.suffix:
        output = output.with_suffix(".md")

    try:
        safe_write_file(output, diagram_content, verbose=cli_ctx.verbose)
    except click.ClickException as e:
        cli_ctx.print_error(e.message)
        raise typer.Exit(1) from e

    cli_ctx.print_success(f"Diagram written to {output}")
