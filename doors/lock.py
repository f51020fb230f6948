"""Lock targets stored in a gate's registry."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from doors.gate import Gate
    from doors.notifier import Handler


class LockKind(StrEnum):
    """Discriminator for registry entries."""

    KEY = "key"  # opaque key, carries no state of its own
    GATE = "gate"  # nested gate, locked/unlocked recursively


@dataclass(frozen=True)
class KeyLock:
    """A plain named lock. The key is its own target."""

    key: str
    kind: LockKind = field(default=LockKind.KEY, init=False)


@dataclass(frozen=True)
class GateLock:
    """
    A nested gate registered under its name.

    Attributes:
        key: Name of the child gate, used as the key in the parent
        gate: The child gate itself (referenced, not copied)
        on_open: Handler the parent subscribed to the child's ``open`` event
    """

    key: str
    gate: "Gate"
    on_open: "Handler" = field(repr=False, compare=False)
    kind: LockKind = field(default=LockKind.GATE, init=False)


LockTarget = KeyLock | GateLock
