"""Collect tasks from markdown documents."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from tasks_query.model.line_parser import parse_task_line
from tasks_query.model.task import Task

if TYPE_CHECKING:
    from tasks_query.query.settings import GlobalFilter

logger = logging.getLogger(__name__)

HEADING_RE = re.compile(r"^#{1,6}\s+(.*?)\s*#*\s*$")
FENCE_RE = re.compile(r"^\s*(```|~~~)")


def parse_tasks(text: str, path: str = "", global_filter: GlobalFilter | None = None) -> list[Task]:
    """Parse every task line in a markdown document.

    Each task records the closest preceding heading. Lines inside fenced
    code blocks are ignored.
    """
    tasks: list[Task] = []
    heading: str | None = None
    in_fence = False

    for line in text.splitlines():
        if FENCE_RE.match(line):
            in_fence = not in_fence
            continue
        if in_fence:
            continue

        heading_match = HEADING_RE.match(line)
        if heading_match:
            heading = heading_match.group(1)
            continue

        task = parse_task_line(line, path=path, heading=heading, global_filter=global_filter)
        if task is not None:
            tasks.append(task)

    return tasks


def read_tasks(
    file_path: Path,
    global_filter: GlobalFilter | None = None,
    relative_to: Path | None = None,
) -> list[Task]:
    """Read tasks from a markdown file.

    Args:
        file_path: File to read.
        global_filter: Optional global filter restricting which lines are tasks.
        relative_to: Directory the recorded task path is made relative to.

    Returns:
        Tasks in file order.
    """
    display_path = file_path
    if relative_to is not None:
        try:
            display_path = file_path.resolve().relative_to(relative_to.resolve())
        except ValueError:
            display_path = file_path

    text = file_path.read_text(encoding="utf-8")
    tasks = parse_tasks(text, path=display_path.as_posix(), global_filter=global_filter)
    logger.debug("Read %d tasks from %s", len(tasks), file_path)
    return tasks
