"""The outcome of running a query over a task list."""

from __future__ import annotations

from dataclasses import dataclass, field

from tasks_query.group.task_groups import TaskGroup, TaskGroups


@dataclass(frozen=True)
class QueryResult:
    """Grouped tasks plus counts, or a search error message.

    Attributes:
        task_groups: Groups produced by the search.
        total_tasks_count_before_limit: Matching tasks before ``limit`` was applied.
        search_error_message: Set when evaluating the query failed.
    """

    task_groups: TaskGroups = field(default_factory=TaskGroups.empty)
    total_tasks_count_before_limit: int = 0
    search_error_message: str | None = None

    @classmethod
    def from_error(cls, message: str) -> QueryResult:
        return cls(search_error_message=message)

    @property
    def groups(self) -> list[TaskGroup]:
        return self.task_groups.groups

    @property
    def total_tasks_count(self) -> int:
        return self.task_groups.total_tasks_count
