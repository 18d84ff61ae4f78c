"""The ``tag``/``tags`` field."""

from __future__ import annotations

import re

from tasks_query.exceptions import InstructionError
from tasks_query.fields.base import Field
from tasks_query.fields.text import RegexMatcher, invalid_regex_message
from tasks_query.model.task import Task
from tasks_query.query.explanation import Explanation
from tasks_query.query.filter import Filter
from tasks_query.query.grouper import GroupingFunction
from tasks_query.query.search_info import SearchInfo
from tasks_query.query.sorter import Comparator, Sorter, compare_values

_FILTER_RE = re.compile(
    r"^(?:tags?) "
    r"(includes|include|does not include|do not include|regex matches|regex does not match) "
    r"(.*)$"
    r"|^(has|no) tags?$",
    re.IGNORECASE,
)
_SORTER_RE = re.compile(r"^sort by (tag)( reverse)?(?: (\d+))?$", re.IGNORECASE)


class TagsField(Field):
    def field_name(self) -> str:
        return "tags"

    def filter_regexp(self) -> re.Pattern[str]:
        return _FILTER_RE

    def create_filter(self, line: str) -> Filter:
        match = _FILTER_RE.search(line)
        if match is None:
            return super().create_filter(line)

        if match.group(3) is not None:
            wanted = match.group(3).lower() == "has"
            return self._filter(line, lambda task, _info: bool(task.tags) == wanted)

        operator, search = match.group(1).lower(), match.group(2)
        negate = " not " in f" {operator} "

        if operator.startswith("regex"):
            matcher = RegexMatcher.from_source(search)
            if matcher is None:
                raise InstructionError(invalid_regex_message(line))
            tag_matches = matcher.matches
            explanation = matcher.explanation()
        else:
            needle = search.casefold()

            def tag_matches(tag: str) -> bool:
                return needle in tag.casefold()

            explanation = line

        def filter_function(task: Task, _search_info: SearchInfo) -> bool:
            return any(tag_matches(tag) for tag in task.tags) != negate

        return Filter(line, filter_function, Explanation(explanation))

    def supports_sorting(self) -> bool:
        return True

    def sorter_regexp(self) -> re.Pattern[str]:
        return _SORTER_RE

    def create_sorter_from_line(self, line: str) -> Sorter | None:
        match = _SORTER_RE.search(line)
        if match is None:
            return None
        tag_number = int(match.group(3)) if match.group(3) else 1
        return Sorter("tag", self.tag_comparator(tag_number), bool(match.group(2)))

    @staticmethod
    def tag_comparator(tag_number: int = 1) -> Comparator:
        """Compare the n-th tag (1-based); tasks without one sort last."""
        index = tag_number - 1

        def key(task: Task) -> str | None:
            return task.tags[index].casefold() if len(task.tags) > index else None

        def comparator(a: Task, b: Task, _search_info: SearchInfo) -> int:
            return compare_values(key(a), key(b))

        return comparator

    def comparator(self) -> Comparator:
        return self.tag_comparator()

    def supports_grouping(self) -> bool:
        return True

    def grouper(self) -> GroupingFunction:
        return lambda task, _search_info: list(task.tags) or ["(No tags)"]
