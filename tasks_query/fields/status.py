"""Status fields: ``done``/``not done`` and ``status.type``."""

from __future__ import annotations

import re

from tasks_query.exceptions import InstructionError
from tasks_query.fields.base import Field, compare_by_key
from tasks_query.model.status import STATUS_TYPE_ORDER, StatusType
from tasks_query.model.task import Task
from tasks_query.query.filter import Filter
from tasks_query.query.grouper import GroupingFunction
from tasks_query.query.search_info import SearchInfo
from tasks_query.query.sorter import Comparator


class StatusField(Field):
    """Whether a task is done; cancelled tasks count as done."""

    _FILTER_RE = re.compile(r"^(done|not done)$", re.IGNORECASE)

    def field_name(self) -> str:
        return "status"

    def filter_regexp(self) -> re.Pattern[str]:
        return self._FILTER_RE

    def create_filter(self, line: str) -> Filter:
        wanted_done = line.strip().lower() == "done"
        return self._filter(line, lambda task, _info: task.is_done == wanted_done)

    def supports_sorting(self) -> bool:
        return True

    def comparator(self) -> Comparator:
        # Open tasks first
        return compare_by_key(lambda task: task.is_done)

    def supports_grouping(self) -> bool:
        return True

    def grouper(self) -> GroupingFunction:
        return lambda task, _search_info: ["Done" if task.is_done else "Todo"]


class StatusTypeField(Field):
    _FILTER_RE = re.compile(r"^status\.type (is not|is) (.*)$", re.IGNORECASE)

    def field_name(self) -> str:
        return "status.type"

    def filter_regexp(self) -> re.Pattern[str]:
        return self._FILTER_RE

    def create_filter(self, line: str) -> Filter:
        match = self._FILTER_RE.search(line)
        if match is None:
            return super().create_filter(line)
        operator, value = match.group(1).lower(), match.group(2).strip().upper()
        try:
            wanted = StatusType[value]
        except KeyError:
            allowed = ", ".join(f"'{status_type.value}'" for status_type in StatusType)
            raise InstructionError(
                f"Invalid status.type instruction: '{line}'.\n"
                f"    Allowed options: {allowed} (without quotes)."
            ) from None

        negate = operator == "is not"
        return self._filter(line, lambda task, _info: (task.status.type == wanted) != negate)

    def supports_sorting(self) -> bool:
        return True

    def comparator(self) -> Comparator:
        return compare_by_key(lambda task: STATUS_TYPE_ORDER[task.status.type])

    def supports_grouping(self) -> bool:
        return True

    def grouper(self) -> GroupingFunction:
        def group_names(task: Task, _search_info: SearchInfo) -> list[str]:
            status_type = task.status.type
            return [f"%%{STATUS_TYPE_ORDER[status_type]}%%{status_type.value}"]

        return group_names
