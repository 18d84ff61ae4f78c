"""``is recurring`` / ``is not recurring``."""

from __future__ import annotations

import re

from tasks_query.fields.base import Field, compare_by_key
from tasks_query.query.filter import Filter
from tasks_query.query.grouper import GroupingFunction
from tasks_query.query.sorter import Comparator


class RecurringField(Field):
    _FILTER_RE = re.compile(r"^is (not )?recurring$", re.IGNORECASE)

    def field_name(self) -> str:
        return "recurring"

    def filter_regexp(self) -> re.Pattern[str]:
        return self._FILTER_RE

    def create_filter(self, line: str) -> Filter:
        match = self._FILTER_RE.search(line)
        if match is None:
            return super().create_filter(line)
        wanted = match.group(1) is None
        return self._filter(line, lambda task, _info: task.is_recurring == wanted)

    def supports_sorting(self) -> bool:
        return True

    def comparator(self) -> Comparator:
        # Recurring tasks first
        return compare_by_key(lambda task: not task.is_recurring)

    def supports_grouping(self) -> bool:
        return True

    def grouper(self) -> GroupingFunction:
        return lambda task, _search_info: ["Recurring" if task.is_recurring else "Not Recurring"]
