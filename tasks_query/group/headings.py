"""Choose the minimal set of headings that separates consecutive groups."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

_SORT_PREFIX_RE = re.compile(r"%%.*?%%")


def display_name(name: str) -> str:
    """Strip ``%%n%%`` ordering prefixes from a group name."""
    return _SORT_PREFIX_RE.sub("", name).strip()


@dataclass(frozen=True)
class GroupHeading:
    """A heading to print before a group; level 0 is the outermost."""

    nesting_level: int
    name: str

    @property
    def display_name(self) -> str:
        return display_name(self.name)


def select_headings(paths: Sequence[Sequence[str]]) -> list[list[GroupHeading]]:
    """Headings needed before each group, given the groups in display order.

    Once one level differs from the previous group, that level and every
    deeper level get a heading.
    """
    result: list[list[GroupHeading]] = []
    previous: Sequence[str] | None = None
    for names in paths:
        first_change = 0
        if previous is not None:
            first_change = len(names)
            for level, (current, before) in enumerate(zip(names, previous)):
                if current != before:
                    first_change = level
                    break
        result.append(
            [GroupHeading(level, names[level]) for level in range(first_change, len(names))]
        )
        previous = names
    return result
