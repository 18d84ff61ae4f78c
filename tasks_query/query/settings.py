"""Global filter and global query settings.

Both are plain values owned by the embedding application and passed to the
call sites that need them. An empty string means the setting is off.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from tasks_query.query.query import Query


@dataclass
class GlobalFilter:
    """Text a markdown list item must contain to count as a task, e.g. ``#task``."""

    value: str = ""

    def get(self) -> str:
        return self.value

    def set(self, value: str) -> None:
        self.value = value

    def reset(self) -> None:
        self.value = ""

    def is_empty(self) -> bool:
        return self.value == ""

    def includes_global_filter(self, description: str) -> bool:
        return self.is_empty() or self.value in description

    def remove_as_word_from(self, description: str) -> str:
        """Remove the filter where it stands as a separate word."""
        if self.is_empty():
            return description
        pattern = re.compile(rf"(^|\s){re.escape(self.value)}(?=$|\s)")
        return pattern.sub("", description).strip()


@dataclass
class GlobalQuery:
    """Instructions prepended to every query that does not opt out."""

    source: str = ""

    def get(self) -> str:
        return self.source

    def set(self, source: str) -> None:
        self.source = source

    def reset(self) -> None:
        self.source = ""

    def is_empty(self) -> bool:
        return self.source.strip() == ""

    def query(self, path: str | None = None) -> Query:
        return Query(self.source, path)

    def has_error(self, path: str | None = None) -> bool:
        return self.query(path).error is not None
