"""
Command-line interface module for Doors.

This module provides the CLI entry point and command implementations
for inspecting and simulating gate trees.
"""

from doors.cli.main import main

__all__ = ["main"]
