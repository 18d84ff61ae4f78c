"""Rich console output helpers for tasks-query."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

from tasks_query.model.line_parser import HASHTAG_RE
from tasks_query.model.priority import Priority

if TYPE_CHECKING:
    from tasks_query.group.headings import GroupHeading
    from tasks_query.model.task import Task
    from tasks_query.query.layout import LayoutOptions

# Module-level verbosity flags (set by cli.py after argument parsing)
_verbose_enabled: bool = False
_debug_enabled: bool = False

# Module-level pager setting (None = auto, True = forced, False = disabled)
_pager_mode: bool | None = None

THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "path": "blue underline",
        "heading": "bold magenta",
        "task.done": "dim strike",
        "task.date": "green",
        "task.priority": "bold yellow",
        "task.tag": "cyan",
        "task.backlink": "blue",
        "explanation": "italic",
    }
)

console = Console(theme=THEME, stderr=False)
error_console = Console(theme=THEME, stderr=True)

_PRIORITY_MARKERS: dict[Priority, str] = {
    Priority.HIGH: "⏫",
    Priority.MEDIUM: "🔼",
    Priority.LOW: "🔽",
}


def set_verbosity(*, verbose: bool = False, debug: bool = False) -> None:
    """Configure module-level verbosity flags.

    Called from the CLI entry point after argument parsing.
    """
    global _verbose_enabled, _debug_enabled
    _verbose_enabled = verbose or debug  # debug implies verbose
    _debug_enabled = debug


def set_color(enabled: bool) -> None:
    """Enable or disable color on both console instances."""
    console.no_color = not enabled
    error_console.no_color = not enabled


def set_pager(mode: bool | None) -> None:
    """Configure pager mode.

    Args:
        mode: True = always, False = never, None = auto (TTY + content > height).
    """
    global _pager_mode
    _pager_mode = mode


def pager_print(content: str) -> None:
    """Print content through ``$PAGER`` (or ``less``) when it overflows the terminal."""
    use_pager = _pager_mode
    if use_pager is None:
        use_pager = sys.stdout.isatty() and content.count("\n") > shutil.get_terminal_size().lines

    if not use_pager:
        sys.stdout.write(content)
        sys.stdout.flush()
        return

    cmd = os.environ.get("PAGER", "").split() or ["less", "-RFS"]
    try:
        env = os.environ.copy()
        env.setdefault("LESSCHARSET", "utf-8")
        proc = subprocess.Popen(
            cmd, stdin=subprocess.PIPE, encoding="utf-8", errors="replace", env=env
        )
        proc.communicate(input=content)
    except (OSError, subprocess.SubprocessError):
        sys.stdout.write(content)
        sys.stdout.flush()


def info(message: str) -> None:
    console.print(f"[info]{message}[/info]")


def warning(message: str) -> None:
    """Print a warning message to stderr."""
    error_console.print(f"[warning]Warning:[/warning] {escape(message)}")


def error(message: str, hint: str | None = None) -> None:
    """Print an error message to stderr.

    Args:
        message: The error message.
        hint: Optional hint for resolution.
    """
    error_console.print(f"[error]Error:[/error] {escape(message)}")
    if hint:
        error_console.print(f"  [info]Hint:[/info] {hint}")


def success(message: str) -> None:
    console.print(f"[success]{message}[/success]")


def verbose(message: str) -> None:
    """Print a message only when verbose mode is enabled."""
    if _verbose_enabled:
        console.print(f"[info]{message}[/info]")


def debug(message: str) -> None:
    """Print a debug message only when debug mode is enabled."""
    if _debug_enabled:
        error_console.print(f"[warning]\\[DEBUG][/warning] {escape(message)}")


def format_heading(heading: GroupHeading) -> str:
    """Markdown-style heading markup; the outermost level is ``####``."""
    hashes = "#" * min(4 + heading.nesting_level, 6)
    return f"[heading]{hashes} {escape(heading.display_name)}[/heading]"


def format_task(task: Task, layout: LayoutOptions) -> str:
    """Render one task as a single line of console markup.

    Components hidden in ``layout`` are left out. In short mode only the
    priority and date markers are shown, without their values.
    """
    description = task.description
    if layout.hide_tags:
        description = " ".join(HASHTAG_RE.sub("", description).split())
    description = escape(description)
    if task.is_done:
        description = f"[task.done]{description}[/task.done]"
    parts = [f"- \\[{escape(task.status.symbol)}] {description}"]

    if not layout.hide_priority and task.priority in _PRIORITY_MARKERS:
        parts.append(f"[task.priority]{_PRIORITY_MARKERS[task.priority]}[/task.priority]")

    if not layout.hide_recurrence_rule and task.recurrence is not None:
        parts.append("🔁" if layout.short_mode else f"🔁 {escape(task.recurrence.to_text())}")

    date_components = (
        ("➕", task.created_date, layout.hide_created_date),
        ("🛫", task.start_date, layout.hide_start_date),
        ("⏳", task.scheduled_date, layout.hide_scheduled_date),
        ("📅", task.due_date, layout.hide_due_date),
        ("✅", task.done_date, layout.hide_done_date),
    )
    for symbol, value, hidden in date_components:
        if value is None or hidden:
            continue
        if layout.short_mode:
            parts.append(symbol)
        else:
            parts.append(f"[task.date]{symbol} {value.isoformat()}[/task.date]")

    if not layout.hide_urgency:
        parts.append(f"[info]⚡ {task.urgency:.2f}[/info]")

    if not layout.hide_backlinks and task.path:
        backlink = task.filename_without_extension
        if task.heading:
            backlink += f" > {task.heading}"
        parts.append(f"[task.backlink]({escape(backlink)})[/task.backlink]")

    return " ".join(parts)


def format_task_count(count: int) -> str:
    return f"{count} task" if count == 1 else f"{count} tasks"
