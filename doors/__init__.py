"""
Doors: composable gates that open once all their locks are released.

A Gate holds a set of named locks. Locks are released with ``unlock``; when
none is held the gate emits ``open``. Gates nest: a gate can be a lock in
another gate, and opening it releases the corresponding key in the parent.

Core Components:
    - Notifier: Named-event publish/subscribe embedded in every gate
    - Gate: Lock registry, held set and open notification
    - KeyLock / GateLock: Registry entries, discriminated by LockKind

Example Usage:
    ```python
    from doors import Gate

    gate = Gate("root", ["a", "b"])
    gate.once("open", lambda: print("open!"))
    gate.unlock("a")
    gate.unlock("b")  # prints "open!"
    ```
"""

__version__ = "0.1.0"

from .exceptions import (
    ConfigurationError,
    DoorsError,
    LoadError,
    LockError,
    OwnershipError,
)
from .gate import OPEN_EVENT, Gate, GateDefinition
from .lock import GateLock, KeyLock, LockKind, LockTarget
from .loader import build_gate, load_definition, load_gate, parse_definition
from .notifier import Notifier

__all__ = [
    # Core functionality
    "Gate",
    "Notifier",
    "OPEN_EVENT",
    "__version__",
    # Lock targets
    "LockKind",
    "LockTarget",
    "KeyLock",
    "GateLock",
    "GateDefinition",
    # Loading
    "build_gate",
    "load_definition",
    "load_gate",
    "parse_definition",
    # Errors
    "DoorsError",
    "LockError",
    "OwnershipError",
    "LoadError",
    "ConfigurationError",
]
