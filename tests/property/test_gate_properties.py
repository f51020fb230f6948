"""Property-based tests for gate bookkeeping and nested propagation.

Key properties tested:
- Held set stays a subset of the registered keys
- open() reflects the held set and never mutates it
- The held set follows a simple set model under arbitrary lock/unlock calls
- An open event fires exactly when an unlock call empties the held set
- Nested children opening release their parent key
"""

import pytest
from hypothesis import given

from doors import Gate
from tests.property.generators import gate_with_operations, lock_keys, nested_gates

pytestmark = pytest.mark.property


class TestGateBookkeepingProperties:
    """Single-gate invariants."""

    @given(keys=lock_keys())
    def test_constructor_registers_in_reverse(self, keys: list[str]):
        gate = Gate("g", keys)

        assert gate.keys == tuple(reversed(keys))
        assert set(gate.held) == set(keys)
        assert gate.is_open == (not keys)

    @given(keys=lock_keys())
    def test_add_is_idempotent(self, keys: list[str]):
        gate = Gate("g", keys)

        for key in keys:
            gate.add(key)

        assert gate.keys == tuple(reversed(keys))

    @given(case=gate_with_operations())
    def test_held_set_follows_model(self, case):
        keys, operations = case
        gate = Gate("g", keys)
        events: list[str] = []
        gate.on("open", lambda: events.append("open"))
        model = set(keys)

        for action, args in operations:
            before = set(model)
            events.clear()
            targets = args or tuple(keys if action == "lock" else model)

            getattr(gate, action)(*args)

            if action == "lock":
                model |= set(targets) & set(keys)
                assert events == []
            else:
                model -= set(targets)
                released = bool(before & set(targets))
                assert len(events) == (1 if released and not model else 0)

            assert set(gate.held) == model
            assert set(gate.held) <= set(gate.keys)
            assert len(gate.held) == len(set(gate.held))

    @given(case=gate_with_operations())
    def test_open_reflects_and_preserves_held(self, case):
        keys, operations = case
        gate = Gate("g", keys)
        for action, args in operations:
            getattr(gate, action)(*args)
        before = gate.held

        result = gate.open()

        assert result == (not before)
        assert gate.held == before

    @given(keys=lock_keys(min_size=1))
    def test_bulk_operations(self, keys: list[str]):
        gate = Gate("g", keys)

        gate.unlock()
        assert gate.is_open

        gate.lock()
        assert set(gate.held) == set(keys)


class TestNestedGateProperties:
    """Propagation through nested gates."""

    @given(tree=nested_gates())
    def test_children_opening_releases_parent_keys(self, tree):
        parent, children = tree

        for child in children:
            child.unlock()

        for child in children:
            # A child without locks never emits on unlock, so its key stays held.
            assert parent.has(child.name) == (len(child) == 0)

    @given(tree=nested_gates())
    def test_locking_parent_locks_every_child_key(self, tree):
        parent, children = tree
        parent.unlock()

        parent.lock()

        for child in children:
            assert set(child.held) == set(child.keys)
            assert parent.has(child.name)

    @given(tree=nested_gates())
    def test_unlocking_parent_opens_every_child(self, tree):
        parent, children = tree

        parent.unlock()

        assert parent.is_open
        for child in children:
            assert child.is_open
