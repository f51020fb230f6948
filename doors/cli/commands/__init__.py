"""CLI commands module for Doors."""

from doors.cli.commands.diagram import diagram_command
from doors.cli.commands.show import show_command
from doors.cli.commands.simulate import simulate_command

__all__ = [
    "diagram_command",
    "show_command",
    "simulate_command",
]
