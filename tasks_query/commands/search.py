"""Run a query over tasks read from markdown files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click

from tasks_query.cli import Context, pass_context
from tasks_query.model.markdown import read_tasks
from tasks_query.model.task import Task
from tasks_query.query.renderer import explain_results, query_for_renderer
from tasks_query.query.result import QueryResult
from tasks_query.utils.files import collect_markdown_files, query_file_path
from tasks_query.utils.output import (
    console,
    error,
    format_heading,
    format_task,
    format_task_count,
    pager_print,
    verbose,
)

EXIT_SUCCESS = 0
EXIT_QUERY_ERROR = 1
EXIT_NO_INPUT = 2


def _task_to_dict(task: Task) -> dict[str, Any]:
    def iso(value: Any) -> str | None:
        return value.isoformat() if value is not None else None

    return {
        "description": task.description,
        "status": task.status.symbol,
        "status_name": task.status.name,
        "path": task.path,
        "heading": task.heading,
        "priority": task.priority.label,
        "tags": list(task.tags),
        "created": iso(task.created_date),
        "start": iso(task.start_date),
        "scheduled": iso(task.scheduled_date),
        "due": iso(task.due_date),
        "done": iso(task.done_date),
        "recurrence": task.recurrence.to_text() if task.recurrence else None,
        "id": task.id or None,
        "depends_on": list(task.depends_on),
        "urgency": round(task.urgency, 2),
    }


def _result_to_json(result: QueryResult) -> str:
    groups = [
        {
            "names": group.display_names,
            "tasks": [_task_to_dict(task) for task in group.tasks],
        }
        for group in result.groups
    ]
    return json.dumps(
        {
            "groups": groups,
            "total_tasks": result.total_tasks_count,
            "total_tasks_before_limit": result.total_tasks_count_before_limit,
        },
        indent=2,
        ensure_ascii=False,
    )


@click.command("search")
@click.argument(
    "query_file",
    type=click.Path(exists=True, path_type=Path),
    required=False,
)
@click.argument(
    "markdown",
    nargs=-1,
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--query",
    "-Q",
    "query_text",
    default=None,
    help="Query text to run instead of QUERY_FILE (use \\n-separated lines)",
)
@click.option(
    "--path",
    "-p",
    "query_path",
    default=None,
    help="Path placeholders such as {{query.file.folder}} resolve against",
)
@click.option(
    "--explain",
    "-e",
    is_flag=True,
    default=False,
    help="Print the query explanation before the results",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text)",
)
@pass_context
def cli(
    ctx: Context,
    query_file: Path | None,
    markdown: tuple[Path, ...],
    query_text: str | None,
    query_path: str | None,
    explain: bool,
    output_format: str,
) -> None:
    """Search tasks in markdown files.

    QUERY_FILE holds one instruction per line. With --query, every
    positional argument is a markdown file or directory instead.

    \b
    Examples:
      tasks-query search weekly.query notes/
      tasks-query search --query "not done
      due before tomorrow" notes/todo.md
    """
    if query_text is not None:
        if query_file is not None:
            markdown = (query_file, *markdown)
        source = query_text.replace("\\n", "\n")
    elif query_file is not None:
        if not query_file.is_file():
            error(f"Query file is not a file: {query_file}", hint="Use --query to search it")
            raise SystemExit(EXIT_NO_INPUT)
        source = query_file.read_text(encoding="utf-8")
        if query_path is None:
            query_path = query_file_path(query_file)
    else:
        error("No query given", hint="Pass a QUERY_FILE or use --query")
        raise SystemExit(EXIT_NO_INPUT)

    files = collect_markdown_files(markdown)
    if not files:
        error("No markdown files given")
        raise SystemExit(EXIT_NO_INPUT)

    global_filter, global_query = ctx.settings()
    tasks: list[Task] = []
    for file_path in files:
        tasks.extend(read_tasks(file_path, global_filter, relative_to=Path.cwd()))
    verbose(f"Read {len(tasks)} tasks from {len(files)} files")

    query = query_for_renderer(source, global_query, query_path)
    result = query.apply_to_tasks(tasks)

    if result.search_error_message is not None:
        error(result.search_error_message)
        raise SystemExit(EXIT_QUERY_ERROR)

    if output_format == "json":
        click.echo(_result_to_json(result))
        return

    with console.capture() as capture:
        if explain or query.layout_options.explain_query:
            console.print(
                explain_results(source, global_filter, global_query, query_path),
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
            console.print()

        for group in result.groups:
            for heading in group.group_headings:
                console.print(format_heading(heading), highlight=False, soft_wrap=True)
            for task in group.tasks:
                console.print(
                    format_task(task, query.layout_options), highlight=False, soft_wrap=True
                )

        if not query.layout_options.hide_task_count:
            console.print()
            console.print(f"[info]{format_task_count(result.total_tasks_count)}[/info]")

    pager_print(capture.get())
