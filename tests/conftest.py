"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import pendulum
import pytest

from tasks_query.model.task import Task

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""[query]
global_filter = "#task"
global_query = "not done"

[display]
colored_output = false
""")
    return config_path


@pytest.fixture
def pin_today(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], pendulum.Date]:
    """Return a function that fixes "today" for dates, urgency and date parsing."""

    def pin(iso_date: str) -> pendulum.Date:
        date = pendulum.parse(iso_date).date()
        monkeypatch.setattr("tasks_query.model.dates.today", lambda: date)
        return date

    return pin


@pytest.fixture
def make_tasks() -> Callable[..., list[Task]]:
    """Parse markdown task lines into Task objects, all from the same file."""

    def make(*lines: str, path: str = "notes/tasks.md", heading: str | None = None) -> list[Task]:
        tasks = [Task.from_line(line, path=path, heading=heading) for line in lines]
        assert all(task is not None for task in tasks), f"Not a task line in {lines!r}"
        return tasks  # type: ignore[return-value]

    return make
