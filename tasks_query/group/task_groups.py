"""Ordered groups of tasks produced by one search."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from tasks_query.group.headings import GroupHeading, display_name, select_headings
from tasks_query.group.tree import TaskGroupingTree
from tasks_query.model.task import Task
from tasks_query.query.grouper import Grouper
from tasks_query.query.search_info import SearchInfo


@dataclass
class TaskGroup:
    """One leaf of the grouping tree.

    Attributes:
        group_names: Name at each grouping level, outermost first.
        group_headings: Headings to display before this group.
        tasks: Tasks in the group, in sorted order.
    """

    group_names: list[str]
    group_headings: list[GroupHeading] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)

    @property
    def display_names(self) -> list[str]:
        return [display_name(name) for name in self.group_names]

    def __str__(self) -> str:
        lines = [f"Group names: [{','.join(self.group_names)}]"]
        for heading in self.group_headings:
            lines.append(f"{'#' * (4 + heading.nesting_level)} {heading.display_name}")
        lines.extend(task.original_markdown or task.description for task in self.tasks)
        return "\n".join(lines) + "\n"


class TaskGroups:
    """All groups of one search, in display order.

    Built once per search and not modified afterwards. Without groupers there
    is a single group with no names holding every task, and the per-group
    limit does not apply.
    """

    def __init__(
        self,
        groupers: Sequence[Grouper],
        tasks: Sequence[Task],
        search_info: SearchInfo | None = None,
        task_group_limit: int | None = None,
    ) -> None:
        self.groupers = list(groupers)
        tree = TaskGroupingTree(self.groupers, tasks, search_info)
        paths = tree.sorted_paths()
        headings = select_headings([names for names, _ in paths])

        self.groups: list[TaskGroup] = []
        for (names, group_tasks), group_headings in zip(paths, headings):
            if task_group_limit is not None and self.groupers:
                group_tasks = group_tasks[:task_group_limit]
            self.groups.append(TaskGroup(names, group_headings, list(group_tasks)))

    @classmethod
    def empty(cls) -> TaskGroups:
        groups = cls([], [])
        groups.groups = []
        return groups

    @property
    def total_tasks_count(self) -> int:
        """Distinct tasks across all groups; fan-out groupers do not inflate it."""
        return len({id(task) for group in self.groups for task in group.tasks})

    def __len__(self) -> int:
        return len(self.groups)

    def __iter__(self) -> Iterator[TaskGroup]:
        return iter(self.groups)

    def __str__(self) -> str:
        lines = []
        if self.groupers:
            lines.append("Groupers (if any):")
            lines.extend(
                f"- {grouper.property}{' reverse' if grouper.reverse else ''}"
                for grouper in self.groupers
            )
            lines.append("")
        lines.extend(f"{group}\n---\n" for group in self.groups)
        lines.append(f"{self.total_tasks_count} tasks")
        return "\n".join(lines) + "\n"
