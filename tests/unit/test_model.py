"""Unit tests for the task model: line parsing, statuses and urgency."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pendulum
import pytest

from tasks_query.model.markdown import parse_tasks, read_tasks
from tasks_query.model.priority import Priority
from tasks_query.model.status import DONE, Status, StatusRegistry, StatusType
from tasks_query.model.task import Recurrence, Task
from tasks_query.model.urgency import calculate_urgency
from tasks_query.query.settings import GlobalFilter


# ---------------------------------------------------------------------------
# Line parsing
# ---------------------------------------------------------------------------


class TestFromLine:
    def test_non_task_lines(self) -> None:
        assert Task.from_line("just text") is None
        assert Task.from_line("- plain list item") is None
        assert Task.from_line("- [] missing symbol") is None

    def test_all_markers(self) -> None:
        line = (
            "  - [ ] Do it #tag1 ⏫ 🔁 every week ➕ 2022-01-01 🛫 2022-01-02 "
            "⏳ 2022-01-03 📅 2022-01-04 🆔 t1 ⛔ a1, b2 ^abc-1"
        )
        task = Task.from_line(line, path="x/y.md", heading="Work")
        assert task is not None
        assert task.description == "Do it #tag1"
        assert task.tags == ("#tag1",)
        assert task.priority is Priority.HIGH
        assert task.recurrence == Recurrence("every week")
        assert task.created_date == pendulum.date(2022, 1, 1)
        assert task.start_date == pendulum.date(2022, 1, 2)
        assert task.scheduled_date == pendulum.date(2022, 1, 3)
        assert task.due_date == pendulum.date(2022, 1, 4)
        assert task.id == "t1"
        assert task.depends_on == ("a1", "b2")
        assert task.block_link == "^abc-1"
        assert task.indentation == "  "
        assert task.heading == "Work"
        assert task.original_markdown == line

    def test_done_task(self) -> None:
        task = Task.from_line("* [x] finished ✅ 2022-02-02")
        assert task is not None
        assert task.status == DONE
        assert task.is_done
        assert task.list_marker == "*"
        assert task.done_date == pendulum.date(2022, 2, 2)

    def test_invalid_date_is_ignored(self) -> None:
        task = Task.from_line("- [ ] odd 📅 2022-02-30")
        assert task is not None
        assert task.due_date is None
        assert task.description == "odd"

    def test_numbered_list(self) -> None:
        task = Task.from_line("1. [ ] first")
        assert task is not None
        assert task.list_marker == "1."

    def test_global_filter(self) -> None:
        global_filter = GlobalFilter("#task")
        assert Task.from_line("- [ ] no filter", global_filter=global_filter) is None

        task = Task.from_line("- [ ] #task buy #milk", global_filter=global_filter)
        assert task is not None
        assert task.description == "buy #milk"
        assert task.tags == ("#milk",)


class TestTaskProperties:
    @pytest.mark.parametrize(
        ("path", "folder", "root", "filename"),
        [
            ("a/b/c.md", "a/b/", "a/", "c.md"),
            ("c.md", "/", "/", "c.md"),
            ("", "/", "/", ""),
        ],
    )
    def test_path_properties(self, path: str, folder: str, root: str, filename: str) -> None:
        task = Task(path=path)
        assert task.folder == folder
        assert task.root == root
        assert task.filename == filename

    def test_happens_date(self) -> None:
        task = Task(
            start_date=pendulum.date(2022, 1, 5),
            due_date=pendulum.date(2022, 1, 3),
        )
        assert task.happens_date == pendulum.date(2022, 1, 3)
        assert Task().happens_date is None

    def test_evolve_returns_new_task(self) -> None:
        task = Task(description="a")
        changed = task.evolve(description="b")
        assert task.description == "a"
        assert changed.description == "b"


# ---------------------------------------------------------------------------
# Statuses
# ---------------------------------------------------------------------------


class TestStatusRegistry:
    def test_defaults(self) -> None:
        registry = StatusRegistry()
        assert registry.by_symbol("x").type is StatusType.DONE
        assert registry.by_symbol("X").type is StatusType.DONE
        assert registry.by_symbol("/").name == "In Progress"

    def test_unknown_symbol_is_open(self) -> None:
        status = StatusRegistry().by_symbol("?")
        assert status.name == "Unknown"
        assert status.type is StatusType.TODO

    def test_bulk_add_reports_duplicates(self) -> None:
        registry = StatusRegistry()
        warnings = registry.bulk_add(
            [
                Status("!", "Important", "x", StatusType.TODO),
                Status("x", "Another done", " ", StatusType.DONE),
                Status("!", "Again", "x", StatusType.TODO),
            ]
        )
        assert warnings == [
            'The symbol "x" is already in use.',
            'The symbol "!" is already in use.',
        ]
        assert registry.by_symbol("!").name == "Important"

    def test_non_task_counts_as_done(self) -> None:
        assert StatusType.NON_TASK.is_completed
        assert not StatusType.IN_PROGRESS.is_completed


# ---------------------------------------------------------------------------
# Urgency
# ---------------------------------------------------------------------------


class TestUrgency:
    @pytest.mark.parametrize(
        ("line", "urgency"),
        [
            ("- [ ] plain", 1.95),
            ("- [ ] low 🔽", 0.0),
            ("- [ ] high ⏫", 6.0),
            ("- [ ] overdue 📅 2022-01-01", 12.0 + 1.95),
            ("- [ ] far future 📅 2022-03-01", 0.2 * 12 + 1.95),
            ("- [ ] scheduled ⏳ 2022-01-10", 5.0 + 1.95),
            ("- [ ] not started 🛫 2022-01-20", -3.0 + 1.95),
        ],
    )
    def test_urgency(
        self, line: str, urgency: float, pin_today: Callable[[str], pendulum.Date]
    ) -> None:
        pin_today("2022-01-15")
        task = Task.from_line(line)
        assert task is not None
        assert calculate_urgency(task) == pytest.approx(urgency)
        assert task.urgency == pytest.approx(urgency)


# ---------------------------------------------------------------------------
# Markdown files
# ---------------------------------------------------------------------------


class TestMarkdown:
    def test_tracks_headings_and_skips_code(self) -> None:
        text = (
            "# Project\n"
            "- [ ] first\n"
            "```\n"
            "- [ ] not a task\n"
            "```\n"
            "## Later ##\n"
            "- [x] second\n"
        )
        tasks = parse_tasks(text, path="p.md")
        assert [(t.description, t.heading) for t in tasks] == [
            ("first", "Project"),
            ("second", "Later"),
        ]

    def test_read_tasks_relative_path(self, temp_dir: Path) -> None:
        notes = temp_dir / "notes"
        notes.mkdir()
        (notes / "todo.md").write_text("- [ ] one\n- [ ] two\n", encoding="utf-8")

        tasks = read_tasks(notes / "todo.md", relative_to=temp_dir)
        assert [t.path for t in tasks] == ["notes/todo.md", "notes/todo.md"]
