"""Helpers for applications that render a query embedded in a document."""

from __future__ import annotations

from tasks_query.query.query import Query
from tasks_query.query.settings import GlobalFilter, GlobalQuery


def query_for_renderer(source: str, global_query: GlobalQuery, path: str | None = None) -> Query:
    """The query to run for a block: the global query followed by the block's own."""
    block_query = Query(source, path)
    if global_query.is_empty() or block_query.ignore_global_query:
        return block_query
    return global_query.query(path).append(block_query)


def explain_results(
    source: str,
    global_filter: GlobalFilter,
    global_query: GlobalQuery,
    path: str | None = None,
) -> str:
    """Explain a block query together with the global settings that affect it."""
    result = ""
    if not global_filter.is_empty():
        result += f"Only tasks containing the global filter '{global_filter.get()}'.\n\n"

    block_query = Query(source, path)
    if not block_query.ignore_global_query and not global_query.is_empty():
        explanation = global_query.query(path).explain_query()
        result += f"Explanation of the global query:\n\n{explanation}\n"

    result += f"Explanation of this Tasks code block query:\n\n{block_query.explain_query()}"
    return result
