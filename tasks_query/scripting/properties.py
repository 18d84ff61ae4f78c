"""Read-only views of tasks and queries handed to expressions."""

from __future__ import annotations

from tasks_query.model.dates import TasksDate
from tasks_query.model.task import Task
from tasks_query.query.placeholders import make_query_context


class FileProperties:
    """Location of a task or query file."""

    def __init__(self, path: str) -> None:
        self._values = make_query_context(path)["query"]["file"]

    @property
    def path(self) -> str:
        return self._values["path"]

    @property
    def path_without_extension(self) -> str:
        return self._values["path_without_extension"]

    @property
    def filename(self) -> str:
        return self._values["filename"]

    @property
    def filename_without_extension(self) -> str:
        return self._values["filename_without_extension"]

    @property
    def folder(self) -> str:
        return self._values["folder"]

    @property
    def root(self) -> str:
        return self._values["root"]


class StatusProperties:
    def __init__(self, task: Task) -> None:
        self._status = task.status

    @property
    def name(self) -> str:
        return self._status.name

    @property
    def type(self) -> str:
        return self._status.type.value

    @property
    def symbol(self) -> str:
        return self._status.symbol

    @property
    def next_status_symbol(self) -> str:
        return self._status.next_status_symbol


class TaskProperties:
    """What ``task`` means inside a ``by function`` expression."""

    def __init__(self, task: Task) -> None:
        self._task = task

    @property
    def description(self) -> str:
        return self._task.description

    @property
    def status(self) -> StatusProperties:
        return StatusProperties(self._task)

    @property
    def is_done(self) -> bool:
        return self._task.is_done

    @property
    def priority_number(self) -> int:
        return self._task.priority.weight

    @property
    def priority_name(self) -> str:
        return self._task.priority.label

    @property
    def urgency(self) -> float:
        return self._task.urgency

    @property
    def tags(self) -> list[str]:
        return list(self._task.tags)

    @property
    def created(self) -> TasksDate:
        return TasksDate(self._task.created_date)

    @property
    def start(self) -> TasksDate:
        return TasksDate(self._task.start_date)

    @property
    def scheduled(self) -> TasksDate:
        return TasksDate(self._task.scheduled_date)

    @property
    def due(self) -> TasksDate:
        return TasksDate(self._task.due_date)

    @property
    def done(self) -> TasksDate:
        return TasksDate(self._task.done_date)

    @property
    def happens(self) -> TasksDate:
        return TasksDate(self._task.happens_date)

    # Aliases spelled after the date fields
    due_date = due
    start_date = start
    scheduled_date = scheduled
    created_date = created
    done_date = done

    @property
    def is_recurring(self) -> bool:
        return self._task.is_recurring

    @property
    def recurrence_rule(self) -> str:
        return self._task.recurrence.to_text() if self._task.recurrence else ""

    @property
    def id(self) -> str:
        return self._task.id

    @property
    def depends_on(self) -> list[str]:
        return list(self._task.depends_on)

    @property
    def block_link(self) -> str:
        return self._task.block_link

    @property
    def heading(self) -> str | None:
        return self._task.heading

    @property
    def indentation(self) -> str:
        return self._task.indentation

    @property
    def original_markdown(self) -> str:
        return self._task.original_markdown

    @property
    def file(self) -> FileProperties:
        return FileProperties(self._task.path)


class QueryProperties:
    """What ``query`` means inside a ``by function`` expression."""

    def __init__(self, path: str | None) -> None:
        self._path = path or ""

    @property
    def file(self) -> FileProperties:
        return FileProperties(self._path)


def make_context(task: Task, query_path: str | None) -> dict[str, object]:
    """Fresh evaluation context for one task."""
    return {"task": TaskProperties(task), "query": QueryProperties(query_path)}
