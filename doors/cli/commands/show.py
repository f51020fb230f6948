"""Show command for displaying a gate tree."""

from typing import Annotated

import typer


def show_command(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="Gate definition file (YAML/JSON)")],
    json_output: Annotated[
        bool, typer.Option("--json", help="Output in JSON format")
    ] = False,
):
    """Show the gate tree defined in a file, with its initial lock state."""
    cli_ctx = ctx.obj
    cli_ctx.set_json_mode(json_output)

    gate = cli_ctx.load_gate_or_exit(source)
    cli_ctx.printer.print_gate(gate)
