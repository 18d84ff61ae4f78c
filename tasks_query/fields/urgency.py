"""``sort by urgency`` and ``group by urgency``."""

from __future__ import annotations

from tasks_query.fields.base import Field, compare_by_key
from tasks_query.query.grouper import Grouper, GroupingFunction
from tasks_query.query.sorter import Comparator


class UrgencyField(Field):
    """Most urgent first, both when sorting and grouping."""

    def field_name(self) -> str:
        return "urgency"

    def supports_sorting(self) -> bool:
        return True

    def comparator(self) -> Comparator:
        return compare_by_key(lambda task: -task.urgency)

    def supports_grouping(self) -> bool:
        return True

    def grouper(self) -> GroupingFunction:
        return lambda task, _search_info: [f"{task.urgency:.2f}"]

    def create_grouper(self, reverse: bool = False) -> Grouper:
        # Group names sort ascending by default; urgency reads best descending.
        return Grouper(self.field_name(), self.grouper(), not reverse)
