"""Task priority levels."""

from __future__ import annotations

from enum import Enum


class Priority(Enum):
    """Priority of a task.

    The value is the sort weight: lower values sort first, so
    High < Medium < None < Low.
    """

    HIGH = "1"
    MEDIUM = "2"
    NONE = "3"
    LOW = "4"

    @property
    def weight(self) -> int:
        return int(self.value)

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_name(cls, name: str) -> Priority:
        """Look up a priority by its query-language name (case-insensitive)."""
        return cls[name.strip().upper()]


PRIORITY_SYMBOLS: dict[str, Priority] = {
    "⏫": Priority.HIGH,
    "🔼": Priority.MEDIUM,
    "🔽": Priority.LOW,
}
