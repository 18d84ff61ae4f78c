"""The immutable task record the query engine operates on."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

import pendulum

from tasks_query.model.priority import Priority
from tasks_query.model.status import TODO, Status

if TYPE_CHECKING:
    from tasks_query.query.settings import GlobalFilter


@dataclass(frozen=True)
class Recurrence:
    """An opaque recurrence rule such as ``every week``.

    Computing the next occurrence is not part of the query engine; only
    the rule text is searched, sorted and grouped.
    """

    rule: str

    def to_text(self) -> str:
        return self.rule


@dataclass(frozen=True)
class Task:
    """One checkbox list item.

    Instances are never modified; use :meth:`evolve` to derive a changed copy.
    """

    status: Status = TODO
    description: str = ""
    path: str = ""
    indentation: str = ""
    list_marker: str = "-"
    tags: tuple[str, ...] = ()
    priority: Priority = Priority.NONE
    created_date: pendulum.Date | None = None
    start_date: pendulum.Date | None = None
    scheduled_date: pendulum.Date | None = None
    due_date: pendulum.Date | None = None
    done_date: pendulum.Date | None = None
    recurrence: Recurrence | None = None
    id: str = ""
    depends_on: tuple[str, ...] = ()
    block_link: str = ""
    heading: str | None = None
    original_markdown: str = field(default="", compare=False)
    # Date fields ("due", "start"...) whose marker held an impossible date
    invalid_dates: frozenset[str] = frozenset()

    @classmethod
    def from_line(
        cls,
        line: str,
        path: str = "",
        heading: str | None = None,
        global_filter: GlobalFilter | None = None,
    ) -> Task | None:
        """Parse a markdown checkbox line, returning None for non-task lines."""
        from tasks_query.model.line_parser import parse_task_line

        return parse_task_line(line, path=path, heading=heading, global_filter=global_filter)

    def evolve(self, **changes: object) -> Task:
        return replace(self, **changes)  # type: ignore[arg-type]

    @property
    def filename(self) -> str:
        """File name including extension, or empty for tasks without a path."""
        return posixpath.basename(self.path)

    @property
    def filename_without_extension(self) -> str:
        return posixpath.splitext(self.filename)[0]

    @property
    def path_without_extension(self) -> str:
        return posixpath.splitext(self.path)[0]

    @property
    def folder(self) -> str:
        """Containing folder with a trailing slash; ``/`` for top-level files."""
        folder = posixpath.dirname(self.path)
        return f"{folder}/" if folder else "/"

    @property
    def root(self) -> str:
        """First path component with a trailing slash; ``/`` for top-level files."""
        path = self.path.lstrip("/")
        if "/" not in path:
            return "/"
        return path.split("/", 1)[0] + "/"

    @property
    def happens_date(self) -> pendulum.Date | None:
        """Earliest of start, scheduled and due date."""
        dates = [d for d in (self.start_date, self.scheduled_date, self.due_date) if d is not None]
        return min(dates) if dates else None

    @property
    def is_done(self) -> bool:
        return self.status.is_completed

    @property
    def is_recurring(self) -> bool:
        return self.recurrence is not None

    @property
    def urgency(self) -> float:
        from tasks_query.model.urgency import calculate_urgency

        return calculate_urgency(self)
