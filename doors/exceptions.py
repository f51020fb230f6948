"""Exceptions for the Doors library.

Gate state operations are total: locking or unlocking unknown keys and
emitting unknown events are silent no-ops. The exceptions below cover misuse
of the API (invalid keys, broken ownership) and failures of the definition
loader and configuration layers.
"""

from typing import Any


class DoorsError(Exception):
    """Base exception for all Doors-related errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        """Initialize exception with message and optional context."""
        super().__init__(message)
        self.context = context or {}


class LockError(DoorsError):
    """Raised when a lock or key is not a valid identifier."""

    def __init__(
        self,
        message: str,
        key: Any | None = None,
        gate_name: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        """Initialize lock error with the offending key."""
        super().__init__(message, context)
        self.key = key
        self.gate_name = gate_name


class OwnershipError(DoorsError):
    """Raised when a nested gate would get a second parent or form a cycle."""

    def __init__(
        self,
        message: str,
        gate_name: str | None = None,
        parent_name: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        """Initialize ownership error with the gates involved."""
        super().__init__(message, context)
        self.gate_name = gate_name
        self.parent_name = parent_name


class LoadError(DoorsError):
    """Raised when a gate definition cannot be loaded."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        """Initialize load error with the definition source."""
        super().__init__(message, context)
        self.source = source


class ConfigurationError(DoorsError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        """Initialize configuration error with details."""
        super().__init__(message, context)
        self.config_key = config_key
