"""``filter by function``, ``sort by function`` and ``group by function``."""

from __future__ import annotations

import logging
import re

from tasks_query.exceptions import ExpressionEvaluationError
from tasks_query.fields.base import Field
from tasks_query.model.dates import TasksDate
from tasks_query.model.task import Task
from tasks_query.query.explanation import Explanation
from tasks_query.query.filter import Filter
from tasks_query.query.grouper import Grouper
from tasks_query.query.search_info import SearchInfo
from tasks_query.query.sorter import Sorter, compare_values
from tasks_query.scripting.expression import Evaluator, compile_expression, evaluate_expression
from tasks_query.scripting.properties import make_context

logger = logging.getLogger(__name__)

_FILTER_RE = re.compile(r"^filter by function (.*)$", re.IGNORECASE | re.DOTALL)
_SORTER_RE = re.compile(r"^sort by function( reverse)? (.*)$", re.IGNORECASE | re.DOTALL)
_GROUPER_RE = re.compile(r"^group by function( reverse)? (.*)$", re.IGNORECASE | re.DOTALL)


def _group_name(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def group_names_from_value(value: object) -> list[str]:
    """Normalise what a grouping expression returned into group names."""
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_group_name(item) for item in value if item is not None]
    return [_group_name(value)]


def _sort_value(value: object) -> object:
    if isinstance(value, TasksDate):
        return value.moment
    if isinstance(value, bool):
        return int(value)
    return value


class FunctionField(Field):
    """Delegates to an expression evaluated once per task.

    Args:
        evaluator: ``evaluate(expression, context)``; anything it raises is
            reported as an :class:`ExpressionEvaluationError`.
    """

    def __init__(self, evaluator: Evaluator = evaluate_expression) -> None:
        self._evaluator = evaluator

    def field_name(self) -> str:
        return "function"

    def evaluate(self, expression: str, task: Task, search_info: SearchInfo) -> object:
        try:
            return self._evaluator(expression, make_context(task, search_info.query_path))
        except Exception as e:
            logger.debug("Expression %r failed: %s", expression, e)
            raise ExpressionEvaluationError.from_exception(expression, e) from e

    def _compile(self, expression: str) -> str:
        expression = expression.strip()
        if self._evaluator is evaluate_expression:
            compile_expression(expression)
        return expression

    # Filtering

    def filter_regexp(self) -> re.Pattern[str]:
        return _FILTER_RE

    def create_filter(self, line: str) -> Filter:
        match = _FILTER_RE.search(line)
        if match is None:
            return super().create_filter(line)
        expression = self._compile(match.group(1))

        def filter_function(task: Task, search_info: SearchInfo) -> bool:
            result = self.evaluate(expression, task, search_info)
            if not isinstance(result, bool):
                raise ExpressionEvaluationError(
                    expression,
                    f'filtering function must return True or False. This returned "{result!r}".',
                )
            return result

        return Filter(line, filter_function, Explanation(line))

    # Sorting

    def supports_sorting(self) -> bool:
        return True

    def sorter_regexp(self) -> re.Pattern[str]:
        return _SORTER_RE

    def create_sorter_from_line(self, line: str) -> Sorter | None:
        match = _SORTER_RE.search(line)
        if match is None:
            return None
        expression = self._compile(match.group(2))

        def comparator(a: Task, b: Task, search_info: SearchInfo) -> int:
            value_a = _sort_value(self.evaluate(expression, a, search_info))
            value_b = _sort_value(self.evaluate(expression, b, search_info))
            try:
                return compare_values(value_a, value_b)
            except TypeError as e:
                raise ExpressionEvaluationError.from_exception(expression, e) from e

        return Sorter(self.field_name(), comparator, bool(match.group(1)))

    # Grouping

    def supports_grouping(self) -> bool:
        return True

    def grouper_regexp(self) -> re.Pattern[str]:
        return _GROUPER_RE

    def create_grouper_from_line(self, line: str) -> Grouper | None:
        match = _GROUPER_RE.search(line)
        if match is None:
            return None
        expression = self._compile(match.group(2))

        def grouping_function(task: Task, search_info: SearchInfo) -> list[str]:
            return group_names_from_value(self.evaluate(expression, task, search_info))

        return Grouper(self.field_name(), grouping_function, bool(match.group(1)))
