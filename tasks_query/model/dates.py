"""Date helpers shared by the model, the date parser and scripts.

``today()`` is the single source of the current date; tests pin it with
``monkeypatch.setattr("tasks_query.model.dates.today", ...)``.
"""

from __future__ import annotations

from dataclasses import dataclass

import pendulum

DATE_FORMAT = "YYYY-MM-DD"


def today() -> pendulum.Date:
    """Return the current local date."""
    return pendulum.today().date()


def parse_iso_date(text: str) -> pendulum.Date | None:
    """Parse ``YYYY-MM-DD``; impossible calendar dates give None."""
    try:
        year, month, day = (int(part) for part in text.split("-"))
        return pendulum.date(year, month, day)
    except ValueError:
        return None


def describe_date(date: pendulum.Date) -> str:
    """Render a date as ``2012-01-23 (Monday 23rd January 2012)``."""
    return f"{date.format(DATE_FORMAT)} ({date.format('dddd Do MMMM YYYY')})"


@dataclass(frozen=True)
class TasksDateCategory:
    """Coarse bucket of a date relative to today.

    ``group_text`` carries a ``%%n%%`` prefix so that groups sort
    Overdue, Today, Future, Undated.
    """

    name: str
    sort_order: int

    @property
    def group_text(self) -> str:
        return f"%%{self.sort_order}%% {self.name}"


class TasksDate:
    """Read-only wrapper around an optional task date, exposed to scripts."""

    def __init__(self, date: pendulum.Date | None) -> None:
        self._date = date

    @property
    def moment(self) -> pendulum.Date | None:
        return self._date

    def format(self, fmt: str, fallback: str = "") -> str:
        """Format with pendulum tokens, e.g. ``"YYYY-MM-DD dddd"``."""
        if self._date is None:
            return fallback
        return self._date.format(fmt)

    def format_as_date(self, fallback: str = "") -> str:
        return self.format(DATE_FORMAT, fallback)

    @property
    def category(self) -> TasksDateCategory:
        if self._date is None:
            return TasksDateCategory("Undated", 4)
        current = today()
        if self._date < current:
            return TasksDateCategory("Overdue", 1)
        if self._date == current:
            return TasksDateCategory("Today", 2)
        return TasksDateCategory("Future", 3)

    def __bool__(self) -> bool:
        return self._date is not None

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TasksDate):
            return self._date == other._date
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._date)

    def __str__(self) -> str:
        return self.format_as_date()

    def __repr__(self) -> str:
        return f"TasksDate({self.format_as_date('None')})"
