"""Gate: a lock-coordination primitive that opens once all its locks are released.

A gate owns a registry of named locks. Each lock is either a plain key or
another gate, so gates compose into a dependency tree: when a nested gate
opens, the key it is registered under in its parent is released.

Example:
    ```python
    from doors import Gate

    assets = Gate("assets", ["images", "fonts"])
    page = Gate("page", ["dom", assets])
    page.on("open", lambda: print("ready"))

    page.unlock("dom")
    assets.unlock("images", "fonts")  # assets opens, releasing page -> "ready"
    ```
"""

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, TypedDict

from doors.exceptions import DoorsError, LockError, OwnershipError
from doors.lock import GateLock, KeyLock, LockKind, LockTarget
from doors.notifier import Notifier

logger = logging.getLogger(__name__)

OPEN_EVENT = "open"


class GateDefinition(TypedDict):
    name: str
    open: bool
    held: list[str]
    locks: list["str | GateDefinition"]


class Gate(Notifier):
    """
    A gate that is open iff none of its registered locks is held.

    Locks added at construction or via ``add`` start out held. ``unlock``
    releases keys and attempts to ``open`` after each release; ``open`` emits
    the ``open`` event whenever the held set is empty.

    Attributes:
        name: Identifier of the gate; its key when nested in a parent
        parent: Gate this one is registered in, if any
    """

    name: str
    parent: "Gate | None"
    _registry: dict[str, LockTarget]
    _keys: list[str]
    _held: list[str]

    def __init__(self, name: str, locks: Iterable["str | Gate"] | None = None):
        super().__init__()
        if not isinstance(name, str) or not name:
            raise LockError("Gate must have a non-empty string name", key=name)
        self.name = name
        self.parent = None
        self._registry = {}
        self._keys = []
        self._held = []
        try:
            for lock in reversed(list(locks or [])):
                self.add(lock)
        except DoorsError:
            self._release_children()
            raise

    def __repr__(self) -> str:
        state = "open" if self.is_open else f"held={self._held}"
        return f"Gate({self.name!r}, keys={self._keys}, {state})"

    def __contains__(self, key: object) -> bool:
        return key in self._registry

    def __len__(self) -> int:
        return len(self._registry)

    @property
    def keys(self) -> tuple[str, ...]:
        """Registered keys in registration order."""
        return tuple(self._keys)

    @property
    def held(self) -> tuple[str, ...]:
        """Currently locked keys, in the order they were locked."""
        return tuple(self._held)

    @property
    def locks(self) -> Mapping[str, LockTarget]:
        """Copy of the registry."""
        return dict(self._registry)

    @property
    def is_open(self) -> bool:
        """Whether the held set is empty. Never emits."""
        return not self._held

    def has(self, key: str) -> bool:
        """Return True if ``key`` is currently locked (not merely registered)."""
        return key in self._held

    def add(self, lock: "str | Gate") -> "Gate":
        """
        Register a lock. The new key starts out held.

        A gate is registered under its name and the parent subscribes to its
        ``open`` event so that the child opening releases the parent key.
        Adding a key that is already registered does nothing.

        Raises:
            LockError: If ``lock`` is neither a string nor a Gate
            OwnershipError: If a nested gate already has another parent or
                would create a cycle
        """
        if isinstance(lock, Gate):
            key = lock.name
        elif isinstance(lock, str) and lock:
            key = lock
        else:
            raise LockError(
                f"Lock must be a non-empty string or a Gate, got {lock!r}",
                key=lock,
                gate_name=self.name,
            )

        if key in self._registry:
            return self

        target: LockTarget
        if isinstance(lock, Gate):
            self._check_ownership(lock)
            target = GateLock(key=key, gate=lock, on_open=self._release_handler(key))
            lock.parent = self
            lock.on(OPEN_EVENT, target.on_open)
        else:
            target = KeyLock(key=key)

        self._registry[key] = target
        self._keys.append(key)
        self._held.append(key)
        logger.debug(f"Gate '{self.name}': added {target.kind.value} lock '{key}'")
        return self

    def remove(self, key: str) -> "Gate":
        """
        Unregister ``key``, detaching a nested gate from this parent.

        Releasing a held key re-evaluates openness, as ``unlock`` does.
        """
        target = self._registry.pop(key, None)
        if target is None:
            return self

        self._keys.remove(key)
        if target.kind is LockKind.GATE:
            self._detach(target)

        logger.debug(f"Gate '{self.name}': removed lock '{key}'")
        if key in self._held:
            self._held.remove(key)
            self.open()
        return self

    def lock(self, *keys: str) -> "Gate":
        """
        Lock the given keys, or every registered key when called without any.

        Keys are processed last to first. Unknown or already locked keys are
        skipped. Locking a nested gate locks all of its keys. Never emits.
        """
        if not keys:
            if self._registry:
                self.lock(*self._registry)
            return self

        for key in reversed(keys):
            target = self._registry.get(key)
            if target is None or self.has(key):
                continue
            if target.kind is LockKind.GATE:
                target.gate.lock()
            self._held.append(key)
            logger.debug(f"Gate '{self.name}': locked '{key}'")
        return self

    def unlock(self, *keys: str) -> "Gate":
        """
        Unlock the given keys, or every held key when called without any.

        Keys are processed last to first. Keys that are not held are skipped.
        Unlocking a nested gate unlocks all of its keys. An open attempt
        follows every released key.
        """
        if not keys:
            if self._held:
                self.unlock(*self._held)
            return self

        for key in reversed(keys):
            if not self.has(key):
                continue
            self._held.remove(key)
            logger.debug(f"Gate '{self.name}': unlocked '{key}'")
            target = self._registry[key]
            if target.kind is LockKind.GATE:
                target.gate.unlock()
            self.open()
        return self

    def toggle(self, key: str, unlocked: Any) -> "Gate":
        """Unlock ``key`` if ``unlocked`` is truthy, lock it otherwise."""
        if unlocked:
            return self.unlock(key)
        return self.lock(key)

    def open(self) -> bool:
        """Emit ``open`` and return True if no lock is held; return False otherwise."""
        if self._held:
            return False
        logger.info(f"Gate '{self.name}' is open")
        self.emit(OPEN_EVENT)
        return True

    def walk(self, _path: tuple[str, ...] = ()) -> Iterator[tuple[tuple[str, ...], "Gate"]]:
        """Yield ``(path, gate)`` for this gate and every nested gate, depth first."""
        path = _path + (self.name,)
        yield path, self
        for key in self._keys:
            target = self._registry[key]
            if target.kind is LockKind.GATE:
                yield from target.gate.walk(path)

    def find(self, path: str | Sequence[str], separator: str = "/") -> "Gate":
        """
        Resolve a path of nested gate names, relative to this gate.

        Raises:
            LockError: If a segment does not name a nested gate
        """
        segments = path.split(separator) if isinstance(path, str) else list(path)
        gate = self
        for segment in segments:
            if not segment:
                continue
            target = gate._registry.get(segment)
            if target is None or target.kind is not LockKind.GATE:
                raise LockError(
                    f"'{segment}' is not a nested gate of '{gate.name}'",
                    key=segment,
                    gate_name=gate.name,
                )
            gate = target.gate
        return gate

    def to_dict(self) -> GateDefinition:
        """Describe the gate tree and its current state."""
        locks: list[str | GateDefinition] = []
        for key in self._keys:
            target = self._registry[key]
            if target.kind is LockKind.GATE:
                locks.append(target.gate.to_dict())
            else:
                locks.append(key)
        return {
            "name": self.name,
            "open": self.is_open,
            "held": list(self._held),
            "locks": locks,
        }

    def _release_handler(self, key: str):
        def on_open() -> None:
            self.unlock(key)

        return on_open

    def _detach(self, target: GateLock) -> None:
        target.gate.off(OPEN_EVENT, target.on_open)
        target.gate.parent = None

    def _release_children(self) -> None:
        """Detach every nested gate, undoing a partially built registry."""
        for target in self._registry.values():
            if target.kind is LockKind.GATE:
                self._detach(target)
        self._registry.clear()
        self._keys.clear()
        self._held.clear()

    def _check_ownership(self, child: "Gate") -> None:
        if child.parent is not None and child.parent is not self:
            raise OwnershipError(
                f"Gate '{child.name}' already belongs to '{child.parent.name}'",
                gate_name=child.name,
                parent_name=child.parent.name,
            )
        for _, descendant in child.walk():
            if descendant is self:
                raise OwnershipError(
                    f"Adding gate '{child.name}' to '{self.name}' would create a cycle",
                    gate_name=child.name,
                    parent_name=self.name,
                )
