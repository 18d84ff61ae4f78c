"""Date fields: due, scheduled, start, created, done and happens."""

from __future__ import annotations

import re
from abc import abstractmethod
from collections.abc import Callable

import pendulum

from tasks_query.exceptions import InstructionError
from tasks_query.fields.base import Field, compare_by_key
from tasks_query.model.dates import describe_date
from tasks_query.model.task import Task
from tasks_query.query.date_parser import DateRange, parse_date_range
from tasks_query.query.filter import Filter
from tasks_query.query.grouper import GroupingFunction
from tasks_query.query.search_info import SearchInfo
from tasks_query.query.sorter import Comparator

_OPERATORS = r"on or before|on or after|in or before|in or after|before|after|on|in"

DatePredicate = Callable[[pendulum.Date], bool]


def _date_predicate(operator: str, date_range: DateRange) -> tuple[DatePredicate, str]:
    """Predicate for one comparison keyword, plus how to describe it."""
    start, end = date_range.start, date_range.end
    if operator == "before":
        return (lambda date: date < start), f"before {describe_date(start)}"
    if operator == "after":
        return (lambda date: date > end), f"after {describe_date(end)}"
    if operator in ("on or before", "in or before"):
        return (lambda date: date <= end), f"on or before {describe_date(end)}"
    if operator in ("on or after", "in or after"):
        return (lambda date: date >= start), f"on or after {describe_date(start)}"
    if date_range.is_single_day:
        return date_range.contains, f"on {date_range.describe()}"
    return date_range.contains, f"between {date_range.describe()}"


class DateField(Field):
    """Common parsing for ``<field> [before|after|on|in] <date>`` lines."""

    def instruction_keyword(self) -> str:
        return self.field_name()

    def explanation_label(self) -> str:
        return f"{self.field_name()} date"

    @abstractmethod
    def date(self, task: Task) -> pendulum.Date | None:
        """The date compared for this task, or None if it has none."""

    def has_invalid_date(self, task: Task) -> bool:
        """Whether the task's marker for this field held an impossible date."""
        return self.field_name() in task.invalid_dates

    def filter_result_if_field_missing(self) -> bool:
        return False

    def filter_regexp(self) -> re.Pattern[str]:
        keyword = re.escape(self.instruction_keyword())
        name = re.escape(self.field_name())
        return re.compile(
            rf"^{name} date is invalid$"
            rf"|^{keyword} (?:({_OPERATORS}) )?(.+)$"
            rf"|^(has|no) {name} date$",
            re.IGNORECASE,
        )

    def create_filter(self, line: str) -> Filter:
        match = self.filter_regexp().search(line)
        if match is None:
            return super().create_filter(line)

        if match.group(1) is None and match.group(2) is None and match.group(3) is None:
            return self._filter(line, lambda task, _info: self.has_invalid_date(task))

        if match.group(3) is not None:
            wanted = match.group(3).lower() == "has"
            return self._filter(line, lambda task, _info: (self.date(task) is not None) == wanted)

        operator = (match.group(1) or "on").lower()
        date_range = parse_date_range(match.group(2))
        if date_range is None:
            raise InstructionError(f"do not understand {self.field_name()} date")

        predicate, description = _date_predicate(operator, date_range)
        explanation = f"{self.explanation_label()} is {description}"
        if self.filter_result_if_field_missing():
            explanation += f" OR no {self.explanation_label()}"
        return self._filter(line, self.make_filter_function(predicate), explanation)

    def make_filter_function(self, predicate: DatePredicate) -> Callable[[Task, SearchInfo], bool]:
        def filter_function(task: Task, _search_info: SearchInfo) -> bool:
            date = self.date(task)
            if date is None:
                return self.filter_result_if_field_missing()
            return predicate(date)

        return filter_function

    def supports_sorting(self) -> bool:
        return True

    def comparator(self) -> Comparator:
        return compare_by_key(self.date)

    def supports_grouping(self) -> bool:
        return True

    def grouper(self) -> GroupingFunction:
        def group_names(task: Task, _search_info: SearchInfo) -> list[str]:
            date = self.date(task)
            if date is None and self.has_invalid_date(task):
                return [f"Invalid {self.field_name()} date"]
            if date is None:
                return [f"No {self.field_name()} date"]
            return [date.format("YYYY-MM-DD dddd")]

        return group_names


class DueDateField(DateField):
    def field_name(self) -> str:
        return "due"

    def date(self, task: Task) -> pendulum.Date | None:
        return task.due_date


class ScheduledDateField(DateField):
    def field_name(self) -> str:
        return "scheduled"

    def date(self, task: Task) -> pendulum.Date | None:
        return task.scheduled_date


class StartDateField(DateField):
    """``starts before ...`` also matches tasks without a start date."""

    def field_name(self) -> str:
        return "start"

    def instruction_keyword(self) -> str:
        return "starts"

    def date(self, task: Task) -> pendulum.Date | None:
        return task.start_date

    def filter_result_if_field_missing(self) -> bool:
        return True


class CreatedDateField(DateField):
    def field_name(self) -> str:
        return "created"

    def date(self, task: Task) -> pendulum.Date | None:
        return task.created_date


class DoneDateField(DateField):
    def field_name(self) -> str:
        return "done"

    def date(self, task: Task) -> pendulum.Date | None:
        return task.done_date


class HappensDateField(DateField):
    """Matches if any of start, scheduled or due date matches; done date is ignored."""

    def field_name(self) -> str:
        return "happens"

    def explanation_label(self) -> str:
        return "due, start or scheduled date"

    def date(self, task: Task) -> pendulum.Date | None:
        return task.happens_date

    def has_invalid_date(self, task: Task) -> bool:
        return not task.invalid_dates.isdisjoint(("start", "scheduled", "due"))

    def make_filter_function(self, predicate: DatePredicate) -> Callable[[Task, SearchInfo], bool]:
        def filter_function(task: Task, _search_info: SearchInfo) -> bool:
            dates = (task.start_date, task.scheduled_date, task.due_date)
            return any(date is not None and predicate(date) for date in dates)

        return filter_function
