"""Simulate command for driving a gate tree through lock/unlock steps."""

from dataclasses import dataclass
from typing import Annotated

import typer

from doors.exceptions import LockError
from doors.gate import OPEN_EVENT, Gate

ACTIONS = ("lock", "unlock", "open")
ALL_KEYS = "*"


@dataclass(frozen=True)
class Step:
    """A parsed simulation step: ``ACTION`` or ``ACTION:PATH``."""

    action: str
    path: tuple[str, ...] = ()

    def __str__(self) -> str:
        return f"{self.action}:{'/'.join(self.path)}" if self.path else self.action


def parse_step(raw: str, separator: str = "/") -> Step:
    """
    Parse a step string.

    ``lock`` / ``unlock`` alone apply to every key of the root gate.
    ``unlock:tests/unit`` releases key ``unit`` of nested gate ``tests``;
    ``unlock:tests/*`` releases every key of ``tests``. ``open:tests``
    attempts to open the gate at that path.

    Raises:
        ValueError: If the action is unknown
    """
    action, _, path = raw.partition(":")
    action = action.strip().lower()
    if action not in ACTIONS:
        raise ValueError(
            f"Unknown action '{action}' in step '{raw}'. Expected one of: {', '.join(ACTIONS)}"
        )
    segments = tuple(s for s in path.split(separator) if s)
    return Step(action=action, path=segments)


def apply_step(root: Gate, step: Step) -> None:
    """
    Apply ``step`` to the tree under ``root``.

    Raises:
        LockError: If the path does not resolve to a nested gate
    """
    if step.action == "open":
        root.find(step.path).open()
        return

    if not step.path:
        gate, keys = root, ()
    else:
        gate = root.find(step.path[:-1])
        key = step.path[-1]
        keys = () if key == ALL_KEYS else (key,)

    if step.action == "lock":
        gate.lock(*keys)
    else:
        gate.unlock(*keys)


def record_open_events(root: Gate, separator: str = "/") -> list[str]:
    """
    Subscribe to ``open`` on every gate in the tree; return the event log.

    Recorders run ahead of the parent release handlers, so a child is logged
    before the parent it opens.
    """
    events: list[str] = []
    for path, gate in root.walk():
        label = separator.join(path)
        gate.on(OPEN_EVENT, lambda label=label: events.append(label), prepend=True)
    return events


def simulate_command(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="Gate definition file (YAML/JSON)")],
    steps: Annotated[
        list[str],
        typer.Argument(help="Steps such as 'unlock:build', 'lock:tests/*', 'unlock'"),
    ],
    json_output: Annotated[
        bool, typer.Option("--json", help="Output in JSON format")
    ] = False,
):
    """
    Apply lock/unlock steps to a gate tree and report open events.

    Every gate defined in the file starts fully locked. Steps are applied in
    order; each 'open' event fired anywhere in the tree is reported.
    """
    cli_ctx = ctx.obj
    cli_ctx.set_json_mode(json_output)

    root = cli_ctx.load_gate_or_exit(source)
    separator = cli_ctx.config.path_separator
    events = record_open_events(root, separator)

    applied: list[str] = []
    for raw in steps:
        try:
            step = parse_step(raw, separator)
            cli_ctx.print_progress(f"Applying {step}")
            apply_step(root, step)
        except (ValueError, LockError) as e:
            cli_ctx.print_error(f"Step '{raw}' failed: {e}")
            raise typer.Exit(1) from e
        applied.append(raw)

    cli_ctx.printer.print_simulation(root, applied, events)
