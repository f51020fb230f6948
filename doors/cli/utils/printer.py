"""CLI Printer for consistent output formatting."""

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from doors.gate import Gate
from doors.lock import LockKind


class CliPrinter:
    """Centralized printer for CLI output.

    This class handles all printing operations for the CLI, ensuring consistent
    formatting across commands and proper handling of verbose/JSON modes.
    """

    def __init__(
        self, console: Console, verbose: bool = False, json_mode: bool = False
    ):
        """Initialize printer with console and mode settings.

        Args:
            console: Rich console for output
            verbose: Whether to show detailed output
            json_mode: Whether to output in JSON format (can be set later)
        """
        self.console = console
        self.verbose = verbose
        self.json_mode = json_mode

    def build_tree(self, gate: Gate) -> Tree:
        """Build a rich tree of ``gate`` with held/open markers."""
        tree = Tree(self._gate_label(gate, held=not gate.is_open))
        self._add_locks(tree, gate)
        return tree

    def _add_locks(self, tree: Tree, gate: Gate) -> None:
        for key in gate.keys:
            target = gate.locks[key]
            held = gate.has(key)
            if target.kind is LockKind.GATE:
                branch = tree.add(self._gate_label(target.gate, held=held))
                self._add_locks(branch, target.gate)
            else:
                marker = "[red]locked[/red]" if held else "[green]unlocked[/green]"
                tree.add(f"{escape(key)} {marker}")

    @staticmethod
    def _gate_label(gate: Gate, held: bool) -> str:
        if gate.is_open:
            status = "[green]open[/green]"
        else:
            status = f"[red]closed[/red] ({len(gate.held)}/{len(gate)} held)"
        key_marker = " [dim](key held)[/dim]" if held and gate.is_open else ""
        return f"[bold]{escape(gate.name)}[/bold] {status}{key_marker}"

    def print_gate(self, gate: Gate, json_mode: bool | None = None) -> None:
        """Print a gate tree as JSON or as a rich tree.

        Args:
            gate: Root gate
            json_mode: If True, output as JSON. If None, uses self.json_mode
        """
        json_mode = json_mode if json_mode is not None else self.json_mode

        if json_mode:
            self.console.print_json(data=gate.to_dict())
        else:
            self.console.print(self.build_tree(gate))

    def print_simulation(
        self,
        gate: Gate,
        steps: list[str],
        events: list[str],
        json_mode: bool | None = None,
    ) -> None:
        """Print the outcome of a simulation run.

        Args:
            gate: Root gate after all steps were applied
            steps: Steps that were applied, in order
            events: Paths of gates that emitted ``open``, in emission order
            json_mode: If True, output as JSON. If None, uses self.json_mode
        """
        json_mode = json_mode if json_mode is not None else self.json_mode

        if json_mode:
            self.console.print_json(
                data={"steps": steps, "events": events, "final": gate.to_dict()}
            )
            return

        if events:
            for event in events:
                self.console.print(f"[green]open[/green] {escape(event)}")
        else:
            self.console.print("[dim]No open events fired[/dim]")
        self.console.print(self.build_tree(gate))

    def show_progress(self, message: str) -> None:
        """Show progress message if verbose mode is enabled.

        Args:
            message: Progress message to show
        """
        if self.verbose:
            self.console.print(f"[dim]{message}[/dim]")

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message to show
        """
        self.console.print(f"[green]Success:[/green] {message}")

    def print_json(self, data: dict) -> None:
        """Print data as JSON.

        Args:
            data: Dictionary to print as JSON
        """
        self.console.print_json(data=data)

    def print_error(self, message: str) -> None:
        """Print error message with red formatting.

        Args:
            message: Error message to print
        """
        self.console.print(f"[red]Error:[/red] {escape(message)}")
