"""The ``priority`` field."""

from __future__ import annotations

import re

from tasks_query.fields.base import Field, compare_by_key
from tasks_query.model.priority import Priority
from tasks_query.model.task import Task
from tasks_query.query.filter import Filter
from tasks_query.query.grouper import GroupingFunction
from tasks_query.query.search_info import SearchInfo
from tasks_query.query.sorter import Comparator

_GROUP_LABELS: dict[Priority, str] = {
    Priority.HIGH: "High priority",
    Priority.MEDIUM: "Medium priority",
    Priority.NONE: "Normal priority",
    Priority.LOW: "Low priority",
}


class PriorityField(Field):
    _FILTER_RE = re.compile(
        r"^priority(?: is)?(?: (above|below|not))? (low|none|medium|high)$",
        re.IGNORECASE,
    )

    def field_name(self) -> str:
        return "priority"

    def filter_regexp(self) -> re.Pattern[str]:
        return self._FILTER_RE

    def create_filter(self, line: str) -> Filter:
        match = self._FILTER_RE.search(line)
        if match is None:
            return super().create_filter(line)
        operator = (match.group(1) or "").lower()
        wanted = Priority.from_name(match.group(2))

        # Lower weight means more important
        if operator == "above":

            def filter_function(task: Task, _search_info: SearchInfo) -> bool:
                return task.priority.weight < wanted.weight

        elif operator == "below":

            def filter_function(task: Task, _search_info: SearchInfo) -> bool:
                return task.priority.weight > wanted.weight

        elif operator == "not":

            def filter_function(task: Task, _search_info: SearchInfo) -> bool:
                return task.priority is not wanted

        else:

            def filter_function(task: Task, _search_info: SearchInfo) -> bool:
                return task.priority is wanted

        qualifier = f"{operator} " if operator else ""
        explanation = f"priority is {qualifier}{wanted.name.lower()}"
        return self._filter(line, filter_function, explanation)

    def supports_sorting(self) -> bool:
        return True

    def comparator(self) -> Comparator:
        return compare_by_key(lambda task: task.priority.weight)

    def supports_grouping(self) -> bool:
        return True

    def grouper(self) -> GroupingFunction:
        def group_names(task: Task, _search_info: SearchInfo) -> list[str]:
            return [f"%%{task.priority.value}%%{_GROUP_LABELS[task.priority]}"]

        return group_names
