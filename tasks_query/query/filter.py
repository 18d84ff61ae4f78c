"""Compiled filter predicates."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from tasks_query.model.task import Task
from tasks_query.query.explanation import Explanation
from tasks_query.query.search_info import SearchInfo

FilterFunction = Callable[[Task, SearchInfo], bool]


@dataclass(frozen=True)
class Filter:
    """A pure predicate compiled from one instruction line."""

    instruction: str
    filter_function: FilterFunction
    explanation: Explanation

    def matches(self, task: Task, search_info: SearchInfo) -> bool:
        return self.filter_function(task, search_info)

    def explain_filter_indented(self, indent: str = "") -> str:
        """Render the instruction, followed by its explanation if that adds anything."""
        if self.explanation.as_string() == self.instruction:
            return f"{indent}{self.instruction}\n"
        return f"{indent}{self.instruction} =>\n{self.explanation.as_string(indent + '  ')}\n"
