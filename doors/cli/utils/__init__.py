"""CLI utilities package.

This package provides utilities for CLI commands including:
- CLIContext: Context management for commands
- CliPrinter: Rich output for gate trees and simulations
- Helper functions: File writing
"""

from pathlib import Path

import click

from doors.cli.utils.context import CLIContext
from doors.cli.utils.printer import CliPrinter

__all__ = [
    "CLIContext",
    "CliPrinter",
    "safe_write_file",
]


def safe_write_file(file_path: Path, content: str, verbose: bool = False) -> None:
    """Safely write content to file with error handling.

    Args:
        file_path: Path to output file
        content: Content to write
        verbose: Whether to show detailed information

    Raises:
        click.ClickException: If writing fails
    """
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)

        if verbose:
            click.echo(f"Writing output to {file_path}")

        with open(file_path, "w", encoding="utf-8") as f:
            f.write(content)

    except PermissionError as e:
        raise click.ClickException(f"Permission denied writing to {file_path}") from e

    except OSError as e:
        raise click.ClickException(f"Failed to write to {file_path}: {e}") from e
