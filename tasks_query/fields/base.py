"""Common behaviour of every query-language field.

A field recognises its own instruction lines and compiles them into
filters, sorters and groupers. Fields are stateless, so one instance of each
is shared by every query.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable

from tasks_query.exceptions import InstructionError
from tasks_query.model.task import Task
from tasks_query.query.explanation import Explanation
from tasks_query.query.filter import Filter, FilterFunction
from tasks_query.query.grouper import Grouper, GroupingFunction
from tasks_query.query.search_info import SearchInfo
from tasks_query.query.sorter import Comparator, Sorter, compare_values


class Field(ABC):
    """A named task property and its query instructions."""

    @abstractmethod
    def field_name(self) -> str:
        """Name used in ``sort by`` / ``group by`` lines."""

    def filter_regexp(self) -> re.Pattern[str] | None:
        """Pattern recognising this field's filter lines, or None if it has none."""
        return None

    def can_create_filter_for_line(self, line: str) -> bool:
        regexp = self.filter_regexp()
        return regexp is not None and regexp.search(line) is not None

    def create_filter(self, line: str) -> Filter:
        """Compile a filter line.

        Raises:
            InstructionError: If the line is recognised but malformed.
        """
        raise InstructionError(f"do not understand query filter ({self.field_name()})")

    @staticmethod
    def _filter(
        instruction: str, function: FilterFunction, description: str | None = None
    ) -> Filter:
        return Filter(instruction, function, Explanation(description or instruction))

    # Sorting

    def supports_sorting(self) -> bool:
        return False

    def sorter_regexp(self) -> re.Pattern[str]:
        return re.compile(rf"^sort by ({re.escape(self.field_name())})( reverse)?$", re.IGNORECASE)

    def create_sorter_from_line(self, line: str) -> Sorter | None:
        if not self.supports_sorting():
            return None
        match = self.sorter_regexp().search(line)
        if match is None:
            return None
        return self.create_sorter(reverse=bool(match.group(2)))

    def comparator(self) -> Comparator:
        raise NotImplementedError(f"{self.field_name()} does not support sorting")

    def create_sorter(self, reverse: bool = False) -> Sorter:
        return Sorter(self.field_name(), self.comparator(), reverse)

    # Grouping

    def supports_grouping(self) -> bool:
        return False

    def grouper_regexp(self) -> re.Pattern[str]:
        return re.compile(rf"^group by ({re.escape(self.field_name())})( reverse)?$", re.IGNORECASE)

    def create_grouper_from_line(self, line: str) -> Grouper | None:
        if not self.supports_grouping():
            return None
        match = self.grouper_regexp().search(line)
        if match is None:
            return None
        return self.create_grouper(reverse=bool(match.group(2)))

    def grouper(self) -> GroupingFunction:
        raise NotImplementedError(f"{self.field_name()} does not support grouping")

    def create_grouper(self, reverse: bool = False) -> Grouper:
        return Grouper(self.field_name(), self.grouper(), reverse)


KeyFunction = Callable[[Task], object]


def compare_by_key(key: KeyFunction) -> Comparator:
    """Build a comparator from a key function; None keys sort last."""

    def comparator(a: Task, b: Task, _search_info: SearchInfo) -> int:
        return compare_values(key(a), key(b))

    return comparator
