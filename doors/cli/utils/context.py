"""
CLI Context for Doors.

Provides centralized gate loading and context management for all CLI commands.
"""

from dataclasses import dataclass, field
from typing import Any

import typer
from rich.console import Console

from doors.cli.utils.printer import CliPrinter
from doors.config import DoorsConfig
from doors.exceptions import LoadError
from doors.gate import Gate
from doors.loader import load_gate


@dataclass
class CLIContext:
    """
    Context object for CLI commands.

    Created once by the app callback and passed to commands via Typer's
    context injection.

    Attributes:
        console: Rich console for output
        config: Configuration read from the environment
        verbose: Enable verbose output (ignored when json_mode is True)
        printer: CLI printer for formatted output
        gate: Loaded root gate (if loading succeeded)
        source: Definition file the gate was loaded from
        json_mode: When True, suppress all non-JSON output (set by commands)
    """

    console: Console
    config: DoorsConfig = field(default_factory=DoorsConfig)
    verbose: bool = False
    printer: CliPrinter = field(init=False)
    gate: Gate | None = None
    source: str = ""
    json_mode: bool = False

    def __post_init__(self):
        """Initialize printer."""
        self.printer = CliPrinter(console=self.console, verbose=self.verbose)

    def set_json_mode(self, json_mode: bool) -> None:
        """Switch JSON mode for the context and its printer."""
        self.json_mode = json_mode
        self.printer.json_mode = json_mode

    def _should_print_verbose(self) -> bool:
        """Check if verbose output should be printed (not in JSON mode)."""
        return self.verbose and not self.json_mode

    def print_verbose(self, message: str, **kwargs) -> None:
        """Print a message only if verbose mode is enabled and not in JSON mode."""
        if self._should_print_verbose():
            self.console.print(message, **kwargs)

    def print_progress(self, message: str) -> None:
        """Print a progress message (only in verbose mode, not in JSON mode)."""
        if self._should_print_verbose():
            self.printer.show_progress(message)

    def print_error(self, message: str) -> None:
        """Print an error message, as JSON when in JSON mode."""
        if self.json_mode:
            self.printer.print_json({"error": message})
        else:
            self.printer.print_error(message)

    def print_success(self, message: str) -> None:
        """Print a success message (always prints unless in JSON mode)."""
        if not self.json_mode:
            self.printer.show_success(message)

    def print_json(self, data: Any) -> None:
        """Print data as JSON (always prints, even in JSON mode)."""
        self.printer.print_json(data=data)

    def load_gate_or_exit(self, source: str) -> Gate:
        """
        Load a gate definition and exit on failure.

        Args:
            source: Definition file path

        Returns:
            Root gate (only if successful; otherwise exits)

        Raises:
            typer.Exit: If loading fails
        """
        self.source = source
        self.print_verbose(f"[dim]Loading gate definition from: {source}[/dim]")

        try:
            self.gate = load_gate(source, self.config.default_format)
        except LoadError as e:
            self.print_error(str(e))
            raise typer.Exit(1) from e

        return self.gate
