"""Compile query source text and run it over tasks."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from tasks_query.exceptions import ExpressionEvaluationError, InstructionError, QueryError
from tasks_query.fields.registry import parse_filter, parse_grouper, parse_sorter
from tasks_query.group.task_groups import TaskGroups
from tasks_query.model.task import Task
from tasks_query.query.filter import Filter
from tasks_query.query.grouper import Grouper
from tasks_query.query.layout import HIDEABLE_COMPONENTS, LayoutOptions
from tasks_query.query.placeholders import expand_placeholders
from tasks_query.query.result import QueryResult
from tasks_query.query.search_info import SearchInfo
from tasks_query.query.sorter import Sorter, sort_tasks

logger = logging.getLogger(__name__)

_CONTINUATION_RE = re.compile(r"[ \t]*\\\r?\n[ \t]*")

_SHORT_MODE_RE = re.compile(r"^short( mode)?$", re.IGNORECASE)
_EXPLAIN_RE = re.compile(r"^explain$", re.IGNORECASE)
_IGNORE_GLOBAL_QUERY_RE = re.compile(r"^ignore global query$", re.IGNORECASE)
_LIMIT_RE = re.compile(r"^limit (?:to )?(\d+)(?: tasks?)?$", re.IGNORECASE)
_GROUP_LIMIT_RE = re.compile(r"^limit groups (?:to )?(\d+)(?: tasks?)?$", re.IGNORECASE)
_HIDE_SHOW_RE = re.compile(
    r"^(hide|show) (" + "|".join(re.escape(name) for name in HIDEABLE_COMPONENTS) + r")$",
    re.IGNORECASE,
)
_SORT_RE = re.compile(r"^sort by ", re.IGNORECASE)
_GROUP_RE = re.compile(r"^group by ", re.IGNORECASE)

NO_FILTERS_EXPLANATION = "No filters supplied. All tasks will match the query."


def scan_lines(source: str) -> list[str]:
    """Split source into trimmed, non-blank lines, joining ``\\`` continuations."""
    joined = _CONTINUATION_RE.sub(" ", source)
    return [line.strip() for line in joined.splitlines() if line.strip()]


def search_failed_message(detail: str) -> str:
    return f'Error: Search failed.\nThe error message was:\n    "{detail}"'


class Query:
    """A compiled query.

    Construction parses ``source``; the first line that cannot be compiled
    sets :attr:`error` and stops parsing. Lines compiled before it remain
    recorded but :meth:`apply_to_tasks` refuses to run an erroneous query.

    Args:
        source: Query text, one instruction per line.
        path: Path of the file containing the query, used for placeholders.
    """

    def __init__(self, source: str, path: str | None = None) -> None:
        self.source = source
        self.file_path = path
        self.filters: list[Filter] = []
        self.sorting: list[Sorter] = []
        self.grouping: list[Grouper] = []
        self.layout_options = LayoutOptions()
        self.limit: int | None = None
        self.task_group_limit: int | None = None
        self.ignore_global_query = False
        self.error: str | None = None

        for line in scan_lines(source):
            try:
                self._parse_line(line)
            except QueryError as e:
                self.error = f'{e}\nProblem line: "{line}"'
                logger.debug("Query parse failed: %s", self.error)
                break

    def _parse_line(self, line: str) -> None:
        if line.startswith("#"):
            return

        if _SHORT_MODE_RE.match(line):
            self.layout_options.short_mode = True
        elif _EXPLAIN_RE.match(line):
            self.layout_options.explain_query = True
        elif _IGNORE_GLOBAL_QUERY_RE.match(line):
            self.ignore_global_query = True
        elif match := _GROUP_LIMIT_RE.match(line):
            self.task_group_limit = int(match.group(1))
        elif match := _LIMIT_RE.match(line):
            self.limit = int(match.group(1))
        elif match := _HIDE_SHOW_RE.match(line):
            self.layout_options.set_component(match.group(2), match.group(1).lower() == "hide")
        elif _SORT_RE.match(line):
            sorter = parse_sorter(expand_placeholders(line, self.file_path))
            if sorter is None:
                raise InstructionError("do not understand query")
            self.sorting.append(sorter)
        elif _GROUP_RE.match(line):
            grouper = parse_grouper(expand_placeholders(line, self.file_path))
            if grouper is None:
                raise InstructionError("do not understand query")
            self.grouping.append(grouper)
        else:
            query_filter = parse_filter(expand_placeholders(line, self.file_path))
            if query_filter is None:
                raise InstructionError("do not understand query")
            self.filters.append(query_filter)

    def add_filter(self, query_filter: Filter) -> None:
        """Add a filter compiled elsewhere, e.g. by the embedding application."""
        self.filters.append(query_filter)

    def append(self, other: Query) -> Query:
        """Combine sources, ``self`` first, unless ``other`` ignores the global query."""
        if other.ignore_global_query:
            return Query(other.source, other.file_path)
        return Query(f"{self.source}\n{other.source}", other.file_path)

    def apply_to_tasks(self, tasks: Sequence[Task]) -> QueryResult:
        """Filter, sort, limit and group tasks.

        Evaluation errors from custom functions do not raise; they are
        reported in :attr:`QueryResult.search_error_message`.
        """
        if self.error is not None:
            return QueryResult.from_error(f"Query has an error:\n{self.error}")

        search_info = SearchInfo.from_tasks(tasks, self.file_path)
        try:
            matching = [
                task for task in tasks if all(f.matches(task, search_info) for f in self.filters)
            ]
            ordered = sort_tasks(matching, self.sorting, search_info)
            total_before_limit = len(ordered)
            if self.limit is not None:
                ordered = ordered[: self.limit]
            task_groups = TaskGroups(self.grouping, ordered, search_info, self.task_group_limit)
        except ExpressionEvaluationError as e:
            logger.debug("Search failed: %s", e)
            return QueryResult.from_error(search_failed_message(e.detail))

        return QueryResult(task_groups, total_before_limit)

    def explain_query(self) -> str:
        """Describe what the query does, in plain text."""
        if self.error is not None:
            return f"Query has an error:\n{self.error}\n"

        sections: list[str] = []
        if self.filters:
            sections.append("\n".join(f.explain_filter_indented("") for f in self.filters))
        else:
            sections.append(NO_FILTERS_EXPLANATION)

        if self.limit is not None:
            noun = "task" if self.limit == 1 else "tasks"
            sections.append(f"At most {self.limit} {noun}.\n")

        if self.task_group_limit is not None:
            sections.append(
                f"At most {self.task_group_limit} tasks per group "
                '(if any "group by" options are supplied).\n'
            )

        return "\n\n".join(sections)
