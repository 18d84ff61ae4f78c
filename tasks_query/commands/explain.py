"""Explain what a query does without running it."""

from __future__ import annotations

from pathlib import Path

import click

from tasks_query.cli import Context, pass_context
from tasks_query.query.query import Query
from tasks_query.query.renderer import explain_results
from tasks_query.utils.files import query_file_path
from tasks_query.utils.output import console, error


@click.command("explain")
@click.argument(
    "query_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=False,
)
@click.option(
    "--query",
    "-Q",
    "query_text",
    default=None,
    help="Query text to explain instead of QUERY_FILE (use \\n-separated lines)",
)
@click.option(
    "--path",
    "-p",
    "query_path",
    default=None,
    help="Path placeholders such as {{query.file.folder}} resolve against",
)
@pass_context
def cli(
    ctx: Context,
    query_file: Path | None,
    query_text: str | None,
    query_path: str | None,
) -> None:
    """Explain a query in plain English.

    The explanation includes the global filter and global query from the
    configuration file. Exits with status 1 when the query has an error.

    \b
    Examples:
      tasks-query explain weekly.query
      tasks-query explain --query "not done\\ngroup by folder"
    """
    if query_text is not None:
        source = query_text.replace("\\n", "\n")
    elif query_file is not None:
        source = query_file.read_text(encoding="utf-8")
        if query_path is None:
            query_path = query_file_path(query_file)
    else:
        error("No query given", hint="Pass a QUERY_FILE or use --query")
        raise SystemExit(2)

    global_filter, global_query = ctx.settings()
    console.print(
        explain_results(source, global_filter, global_query, query_path),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )

    if Query(source, query_path).error is not None:
        raise SystemExit(1)
