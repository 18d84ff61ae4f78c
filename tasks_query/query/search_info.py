"""Context shared by every filter evaluation within one search."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from functools import cached_property

from tasks_query.model.task import Task


@dataclass(frozen=True)
class SearchInfo:
    """The whole task universe and the path of the query being run.

    Built once per ``apply_to_tasks`` call from the unfiltered task list so
    cross-task predicates see every task.
    """

    all_tasks: tuple[Task, ...] = ()
    query_path: str | None = None

    @classmethod
    def from_tasks(cls, tasks: Sequence[Task], query_path: str | None = None) -> SearchInfo:
        return cls(tuple(tasks), query_path)

    @cached_property
    def tasks_by_id(self) -> dict[str, list[Task]]:
        index: dict[str, list[Task]] = {}
        for task in self.all_tasks:
            if task.id:
                index.setdefault(task.id, []).append(task)
        return index

    @cached_property
    def dependency_ids(self) -> frozenset[str]:
        """Ids that some task depends on."""
        return frozenset(dep for task in self.all_tasks for dep in task.depends_on)
