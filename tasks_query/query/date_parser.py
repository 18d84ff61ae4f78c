"""Turn date expressions from query lines into date ranges.

Three strategies are tried in order, first match wins:

1. relative phrases: ``this week``, ``next month``, ``last quarter``...
2. numbered ranges: ``2022``, ``2022-Q2``, ``2022-04``, ``2022-W14``,
   or two ISO dates ``2022-04-01 2022-04-15``
3. any single date, ISO or natural language (``today``, ``next friday``)
"""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass

import dateparser
import pendulum

from tasks_query.model import dates
from tasks_query.model.dates import describe_date, parse_iso_date

RELATIVE_RANGE_RE = re.compile(r"^(last|this|next) (week|month|quarter|year)$", re.IGNORECASE)
WEEK_RE = re.compile(r"^(\d{4})-w(\d{1,2})$", re.IGNORECASE)
QUARTER_RE = re.compile(r"^(\d{4})-q([1-4])$", re.IGNORECASE)
MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")
YEAR_RE = re.compile(r"^(\d{4})$")
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TWO_DATES_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})\s+(\d{4}-\d{2}-\d{2})$")


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar days."""

    start: pendulum.Date
    end: pendulum.Date

    @classmethod
    def single_day(cls, date: pendulum.Date) -> DateRange:
        return cls(date, date)

    @property
    def is_single_day(self) -> bool:
        return self.start == self.end

    def contains(self, date: pendulum.Date) -> bool:
        return self.start <= date <= self.end

    def describe(self) -> str:
        if self.is_single_day:
            return describe_date(self.start)
        return f"{describe_date(self.start)} and {describe_date(self.end)} inclusive"


def _quarter_range(date: pendulum.Date) -> DateRange:
    first_month = 3 * ((date.month - 1) // 3) + 1
    start = pendulum.date(date.year, first_month, 1)
    return DateRange(start, start.add(months=3).subtract(days=1))


def _parse_relative_range(text: str) -> DateRange | None:
    match = RELATIVE_RANGE_RE.match(text)
    if match is None:
        return None
    which, unit = match.group(1).lower(), match.group(2).lower()
    offset = {"last": -1, "this": 0, "next": 1}[which]

    current = dates.today()
    if unit == "quarter":
        return _quarter_range(current.add(months=3 * offset))

    shifted = current.add(**{f"{unit}s": offset})
    return DateRange(shifted.start_of(unit), shifted.end_of(unit))


def _parse_numbered_range(text: str) -> DateRange | None:
    if match := TWO_DATES_RE.match(text):
        first, second = parse_iso_date(match.group(1)), parse_iso_date(match.group(2))
        if first is None or second is None:
            return None
        return DateRange(min(first, second), max(first, second))

    if match := WEEK_RE.match(text):
        year, week = int(match.group(1)), int(match.group(2))
        try:
            monday = datetime.date.fromisocalendar(year, week, 1)
        except ValueError:
            return None
        start = pendulum.date(monday.year, monday.month, monday.day)
        return DateRange(start, start.add(days=6))

    if match := QUARTER_RE.match(text):
        year, quarter = int(match.group(1)), int(match.group(2))
        return _quarter_range(pendulum.date(year, 3 * quarter - 2, 1))

    if match := MONTH_RE.match(text):
        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            return None
        start = pendulum.date(year, month, 1)
        return DateRange(start, start.end_of("month"))

    if match := YEAR_RE.match(text):
        start = pendulum.date(int(match.group(1)), 1, 1)
        return DateRange(start, start.end_of("year"))

    return None


def parse_date(text: str) -> pendulum.Date | None:
    """Parse a single date, ISO first, then natural language relative to today."""
    text = text.strip()
    if ISO_DATE_RE.match(text):
        return parse_iso_date(text)

    current = dates.today()
    parsed = dateparser.parse(
        text,
        languages=["en"],
        settings={
            "RELATIVE_BASE": datetime.datetime(current.year, current.month, current.day),
            "RETURN_AS_TIMEZONE_AWARE": False,
        },
    )
    if parsed is None:
        return None
    return pendulum.date(parsed.year, parsed.month, parsed.day)


def parse_date_range(text: str) -> DateRange | None:
    """Parse a date expression into an inclusive range, or None if not understood."""
    text = text.strip()
    if not text:
        return None

    date_range = _parse_relative_range(text) or _parse_numbered_range(text)
    if date_range is not None:
        return date_range

    date = parse_date(text)
    if date is None:
        return None
    return DateRange.single_day(date)
