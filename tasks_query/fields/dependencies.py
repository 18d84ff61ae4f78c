"""Fields that look at other tasks: blocking, blocked and sub-items."""

from __future__ import annotations

import re

from tasks_query.fields.base import Field
from tasks_query.model.task import Task
from tasks_query.query.filter import Filter
from tasks_query.query.search_info import SearchInfo


def is_blocking(task: Task, search_info: SearchInfo) -> bool:
    """A task with an id that any other task depends on, done or not."""
    if not task.id:
        return False
    return task.id in search_info.dependency_ids


def is_blocked(task: Task, search_info: SearchInfo) -> bool:
    """A task depending on at least one task that is not completed.

    Unknown ids are ignored. When several tasks share an id the first one
    decides.
    """
    for dependency in task.depends_on:
        candidates = search_info.tasks_by_id.get(dependency)
        if candidates and not candidates[0].is_done:
            return True
    return False


class BlockingField(Field):
    _FILTER_RE = re.compile(r"^is (not )?blocking$", re.IGNORECASE)

    def field_name(self) -> str:
        return "blocking"

    def filter_regexp(self) -> re.Pattern[str]:
        return self._FILTER_RE

    def create_filter(self, line: str) -> Filter:
        match = self._FILTER_RE.search(line)
        if match is None:
            return super().create_filter(line)
        wanted = match.group(1) is None
        return self._filter(line, lambda task, info: is_blocking(task, info) == wanted)


class BlockedField(Field):
    _FILTER_RE = re.compile(r"^is (not )?blocked$", re.IGNORECASE)

    def field_name(self) -> str:
        return "blocked"

    def filter_regexp(self) -> re.Pattern[str]:
        return self._FILTER_RE

    def create_filter(self, line: str) -> Filter:
        match = self._FILTER_RE.search(line)
        if match is None:
            return super().create_filter(line)
        wanted = match.group(1) is None
        return self._filter(line, lambda task, info: is_blocked(task, info) == wanted)


class ExcludeSubItemsField(Field):
    """``exclude sub-items`` keeps only tasks that are not indented."""

    _FILTER_RE = re.compile(r"^exclude sub-items$", re.IGNORECASE)
    _QUOTE_PREFIX_RE = re.compile(r"^(?:>\s?)*")

    def field_name(self) -> str:
        return "exclude"

    def filter_regexp(self) -> re.Pattern[str]:
        return self._FILTER_RE

    def create_filter(self, line: str) -> Filter:
        def filter_function(task: Task, _search_info: SearchInfo) -> bool:
            return self._QUOTE_PREFIX_RE.sub("", task.indentation) == ""

        return self._filter(line, filter_function)
