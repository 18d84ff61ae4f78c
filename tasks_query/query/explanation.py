"""Printable trees describing what compiled filters do."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Explanation:
    """A description plus ordered child explanations.

    Leaves describe one filter; internal nodes describe a boolean combinator.
    """

    description: str
    children: tuple[Explanation, ...] = ()

    @classmethod
    def boolean_and(cls, children: Sequence[Explanation]) -> Explanation:
        return cls("AND (All of)", tuple(children))

    @classmethod
    def boolean_or(cls, children: Sequence[Explanation]) -> Explanation:
        return cls("OR (At least one of)", tuple(children))

    @classmethod
    def boolean_not(cls, children: Sequence[Explanation]) -> Explanation:
        return cls("NOT (None of)", tuple(children))

    @classmethod
    def boolean_xor(cls, children: Sequence[Explanation]) -> Explanation:
        return cls("XOR (Exactly one of)", tuple(children))

    def as_string(self, indent: str = "") -> str:
        if not self.children:
            return f"{indent}{self.description}"
        lines = [f"{indent}{self.description}:"]
        lines.extend(child.as_string(indent + "  ") for child in self.children)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.as_string()
