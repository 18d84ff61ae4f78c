"""Comparators and the composite sort."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import cmp_to_key

from tasks_query.model.task import Task
from tasks_query.query.search_info import SearchInfo

Comparator = Callable[[Task, Task, SearchInfo], int]


@dataclass(frozen=True)
class Sorter:
    """One ``sort by`` line: a named comparator and its direction."""

    property: str
    comparator: Comparator
    reverse: bool = False

    def compare(self, a: Task, b: Task, search_info: SearchInfo) -> int:
        result = self.comparator(a, b, search_info)
        return -result if self.reverse else result


def compare_values(a: object, b: object) -> int:
    """Three-way compare, with None sorting after everything else."""
    if a is None and b is None:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1
    if a < b:  # type: ignore[operator]
        return -1
    if a > b:  # type: ignore[operator]
        return 1
    return 0


def sort_tasks(
    tasks: Sequence[Task], sorters: Sequence[Sorter], search_info: SearchInfo
) -> list[Task]:
    """Stable sort; earlier sorters take precedence, later ones break ties."""
    if not sorters:
        return list(tasks)

    def composite(a: Task, b: Task) -> int:
        for sorter in sorters:
            result = sorter.compare(a, b, search_info)
            if result != 0:
                return result
        return 0

    return sorted(tasks, key=cmp_to_key(composite))
