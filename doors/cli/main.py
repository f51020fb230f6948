"""Doors CLI - Typer-based command line interface."""

from typing import Annotated

import typer
from rich.console import Console

from doors.cli.commands import diagram_command, show_command, simulate_command
from doors.cli.utils import CLIContext
from doors.config import DoorsConfig, configure_logging
from doors.exceptions import ConfigurationError

# Create main app and console
app = typer.Typer(
    name="doors",
    help="Doors: composable gates that open once all their locks are released",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable verbose output")
    ] = False,
):
    """
    Doors CLI callback - sets up context for all commands.

    Reads configuration from DOORS_* environment variables, configures
    logging and stores a CLIContext in ctx.obj for the commands.
    """
    try:
        config = DoorsConfig.from_env()
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    if verbose and config.log_level.upper() == "WARNING":
        config = DoorsConfig(
            log_level="DEBUG",
            path_separator=config.path_separator,
            default_format=config.default_format,
        )
    configure_logging(config)

    ctx.obj = CLIContext(console=console, config=config, verbose=verbose)


app.command(name="show")(show_command)
app.command(name="simulate")(simulate_command)
app.command(name="diagram")(diagram_command)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
