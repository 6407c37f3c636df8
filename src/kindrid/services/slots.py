"""Durable key-value slot abstractions."""

from dataclasses import dataclass
from typing import Protocol


class KeyValueSlot(Protocol):
    """Interface for a durable string blob store keyed by name."""

    def read(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""

    def write(self, key: str, value: str) -> None:
        """Overwrite the value stored under a key."""


@dataclass
class InMemorySlot(KeyValueSlot):
    """Slot that keeps values for the life of the process."""

    _values: dict[str, str]

    def __init__(self) -> None:
        self._values = {}

    def read(self, key: str) -> str | None:
        """Return the stored value, if any."""
        return self._values.get(key)

    def write(self, key: str, value: str) -> None:
        """Store a value."""
        self._values[key] = value
