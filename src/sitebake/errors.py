"""Exception hierarchy for sitebake.

Lookups never raise for a missing key; these cover the failures that
cannot be absorbed locally.
"""

from __future__ import annotations


class SitebakeError(Exception):
    """Base class for all sitebake errors."""


class ConversionError(SitebakeError, ValueError):
    """A stored value cannot be coerced to the requested type."""

    def __init__(self, key: str, value: object, target: str) -> None:
        self.key = key
        self.value = value
        self.target = target
        super().__init__(f"Key {key!r} holds {value!r}, which is not a valid {target}")


class ConfigurationFrozenError(SitebakeError, RuntimeError):
    """A mutating call was made after the configuration was frozen."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Cannot {operation}: configuration is frozen")
