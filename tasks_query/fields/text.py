"""Fields whose value is a piece of text: description, path, heading..."""

from __future__ import annotations

import re
from abc import abstractmethod

from tasks_query.exceptions import InstructionError
from tasks_query.fields.base import Field, compare_by_key
from tasks_query.model.task import Task
from tasks_query.query.explanation import Explanation
from tasks_query.query.filter import Filter
from tasks_query.query.grouper import GroupingFunction
from tasks_query.query.search_info import SearchInfo
from tasks_query.query.sorter import Comparator

REGEX_INSTRUCTIONS_HELP = r"""Regular expressions must look like this:
    /pattern/
or this:
    /pattern/flags

Where:
- pattern: The 'regular expression' pattern to search for.
- flags:   Optional characters that modify the search.
           i => make the search case-insensitive
           u => add Unicode support

Examples:  /^Log/
           /^Log/i
           /File Name\.md/
           /waiting|waits|waited/i
           /\d\d:\d\d/

The following characters have special meaning in the pattern:
to find them literally, you must add a \ before them:
    [\^$.|?*+()

CAUTION! Regular expression (or 'regex') searching is a powerful
but advanced feature that requires thorough knowledge in order to
use successfully, and not miss intended search results."""

_REGEX_SOURCE_RE = re.compile(r"^/(.+)/([a-z]*)$", re.DOTALL)
_REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "u": 0,
}


class RegexMatcher:
    """A ``/pattern/flags`` search."""

    def __init__(self, pattern: str, flags: str) -> None:
        self.pattern = pattern
        self.flags = flags
        compiled_flags = 0
        for flag in flags:
            compiled_flags |= _REGEX_FLAGS[flag]
        self.regex = re.compile(pattern, compiled_flags)

    @classmethod
    def from_source(cls, source: str) -> RegexMatcher | None:
        """Parse ``/pattern/flags``; None if the shape, flags or pattern are invalid."""
        match = _REGEX_SOURCE_RE.match(source.strip())
        if match is None:
            return None
        pattern, flags = match.groups()
        if any(flag not in _REGEX_FLAGS for flag in flags):
            return None
        try:
            return cls(pattern, flags)
        except re.error:
            return None

    def matches(self, value: str) -> bool:
        return self.regex.search(value) is not None

    def explanation(self) -> str:
        text = f"using regex: '{self.pattern}'"
        if len(self.flags) == 1:
            text += f" with flag '{self.flags}'"
        elif self.flags:
            text += f" with flags '{self.flags}'"
        return text


def invalid_regex_message(line: str) -> str:
    return f"Invalid instruction: '{line}'\n\n{REGEX_INSTRUCTIONS_HELP}"


class TextField(Field):
    """A field searched with ``includes`` / ``regex matches`` and friends.

    Substring searches ignore case; regex searches follow their flags.
    """

    def instruction_names(self) -> tuple[str, ...]:
        return (self.field_name(),)

    def filter_regexp(self) -> re.Pattern[str]:
        names = "|".join(re.escape(name) for name in self.instruction_names())
        return re.compile(
            rf"^(?:{names}) (includes|does not include|regex matches|regex does not match) (.*)$",
            re.IGNORECASE | re.DOTALL,
        )

    @abstractmethod
    def value(self, task: Task) -> str:
        """The text searched for this task."""

    def create_filter(self, line: str) -> Filter:
        match = self.filter_regexp().search(line)
        if match is None:
            return super().create_filter(line)
        operator, search = match.group(1).lower(), match.group(2)
        negate = operator.startswith("does not") or operator.endswith("does not match")

        if operator.startswith("regex"):
            matcher = RegexMatcher.from_source(search)
            if matcher is None:
                raise InstructionError(invalid_regex_message(line))
            matches = matcher.matches
            explanation = matcher.explanation()
            if negate:
                explanation = f"{explanation} (negated)"
        else:
            needle = search.casefold()

            def matches(value: str) -> bool:
                return needle in value.casefold()

            explanation = line

        def filter_function(task: Task, _search_info: SearchInfo) -> bool:
            return matches(self.value(task)) != negate

        return Filter(line, filter_function, Explanation(explanation))

    def supports_sorting(self) -> bool:
        return True

    def sort_key(self, task: Task) -> object:
        return self.value(task).casefold()

    def comparator(self) -> Comparator:
        return compare_by_key(self.sort_key)

    def supports_grouping(self) -> bool:
        return True

    def group_name(self, task: Task) -> str:
        return self.value(task)

    def grouper(self) -> GroupingFunction:
        return lambda task, _search_info: [self.group_name(task)]


class DescriptionField(TextField):
    _LEADING_MARKUP_RE = re.compile(r"^(\*\*|\*|__|_|==|~~|\[\[)+")

    def field_name(self) -> str:
        return "description"

    def value(self, task: Task) -> str:
        return task.description

    def sort_key(self, task: Task) -> object:
        return self._LEADING_MARKUP_RE.sub("", task.description).casefold()

    def supports_grouping(self) -> bool:
        return False


UNKNOWN_LOCATION = "Unknown Location"


class PathField(TextField):
    def field_name(self) -> str:
        return "path"

    def value(self, task: Task) -> str:
        return task.path

    def group_name(self, task: Task) -> str:
        return task.path_without_extension if task.path else UNKNOWN_LOCATION


class FolderField(TextField):
    def field_name(self) -> str:
        return "folder"

    def value(self, task: Task) -> str:
        return task.folder

    def supports_sorting(self) -> bool:
        return False

    def group_name(self, task: Task) -> str:
        return task.folder if task.path else UNKNOWN_LOCATION


class FilenameField(TextField):
    def field_name(self) -> str:
        return "filename"

    def value(self, task: Task) -> str:
        return task.filename

    def group_name(self, task: Task) -> str:
        return task.filename_without_extension if task.path else UNKNOWN_LOCATION


class RootField(TextField):
    def field_name(self) -> str:
        return "root"

    def value(self, task: Task) -> str:
        return task.root

    def supports_sorting(self) -> bool:
        return False

    def group_name(self, task: Task) -> str:
        return task.root if task.path else UNKNOWN_LOCATION


class HeadingField(TextField):
    def field_name(self) -> str:
        return "heading"

    def value(self, task: Task) -> str:
        return task.heading or ""

    def sort_key(self, task: Task) -> object:
        # Tasks without a heading sort first
        return task.heading.casefold() if task.heading else ""

    def group_name(self, task: Task) -> str:
        return task.heading or "(No heading)"


class StatusNameField(TextField):
    def field_name(self) -> str:
        return "status.name"

    def value(self, task: Task) -> str:
        return task.status.name


class RecurrenceField(TextField):
    def field_name(self) -> str:
        return "recurrence"

    def value(self, task: Task) -> str:
        return task.recurrence.to_text() if task.recurrence is not None else ""

    def supports_sorting(self) -> bool:
        return False

    def group_name(self, task: Task) -> str:
        return self.value(task) or "None"


class BacklinkField(Field):
    """Where a task lives, ``file > heading``; grouping only."""

    def field_name(self) -> str:
        return "backlink"

    def supports_grouping(self) -> bool:
        return True

    def grouper(self) -> GroupingFunction:
        def group_names(task: Task, _search_info: SearchInfo) -> list[str]:
            if not task.path:
                return [UNKNOWN_LOCATION]
            if task.heading and task.heading != task.filename_without_extension:
                return [f"{task.filename_without_extension} > {task.heading}"]
            return [task.filename_without_extension]

        return group_names
