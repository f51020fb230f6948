"""Property-based testing for Doors components.

These tests use the Hypothesis library to check the invariants of gates and
nested gates over generated key sets and operation sequences.
"""
