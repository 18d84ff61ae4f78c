"""Grouping functions for ``group by`` lines."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from tasks_query.model.task import Task
from tasks_query.query.search_info import SearchInfo

GroupingFunction = Callable[[Task, SearchInfo], list[str]]


@dataclass(frozen=True)
class Grouper:
    """Maps a task to the names of the groups it belongs to.

    Attributes:
        property: Field name, e.g. ``"tags"``; shown in explanations.
        grouping_function: Returns zero or more group names per task.
        reverse: Sort this level's group names in descending order.
    """

    property: str
    grouping_function: GroupingFunction
    reverse: bool = False

    def group_names(self, task: Task, search_info: SearchInfo) -> list[str]:
        return self.grouping_function(task, search_info)
