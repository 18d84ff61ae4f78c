"""Expand ``{{query.file.path}}`` style placeholders in query lines."""

from __future__ import annotations

import posixpath
from collections.abc import Iterator, Mapping
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateSyntaxError, UndefinedError, nodes

from tasks_query.exceptions import PlaceholderError


def _make_env() -> Environment:
    """Create the Jinja2 environment used for query placeholders."""
    return Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


_env = _make_env()


def make_query_context(path: str) -> dict[str, Any]:
    """Build the read-only values placeholders may refer to."""
    filename = posixpath.basename(path)
    folder = posixpath.dirname(path)
    root = path.lstrip("/").split("/", 1)[0] + "/" if "/" in path.lstrip("/") else "/"
    return {
        "query": {
            "file": {
                "path": path,
                "path_without_extension": posixpath.splitext(path)[0],
                "filename": filename,
                "filename_without_extension": posixpath.splitext(filename)[0],
                "folder": f"{folder}/" if folder else "/",
                "root": root,
            }
        }
    }


def contains_placeholder(text: str) -> bool:
    return "{{" in text and "}}" in text


def _dotted_name(node: nodes.Node) -> str | None:
    if isinstance(node, nodes.Name):
        return node.name
    if isinstance(node, nodes.Getattr):
        parent = _dotted_name(node.node)
        return f"{parent}.{node.attr}" if parent is not None else None
    return None


def _referenced_names(node: nodes.Node) -> Iterator[str]:
    """Yield every outermost dotted name used by a template."""
    if isinstance(node, (nodes.Name, nodes.Getattr)):
        dotted = _dotted_name(node)
        if dotted is not None:
            yield dotted
            return
    for child in node.iter_child_nodes():
        yield from _referenced_names(child)


def _resolves(context: Mapping[str, Any], dotted: str) -> bool:
    value: Any = context
    for part in dotted.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return False
        value = value[part]
    return True


def _expansion_failure(detail: str, text: str) -> PlaceholderError:
    return PlaceholderError(
        "There was an error expanding one or more placeholders.\n\n"
        "The error message was:\n"
        f"    {detail}\n\n"
        "The problem is in:\n"
        f"    {text}"
    )


def expand_placeholders(text: str, query_path: str | None) -> str:
    """Expand placeholders in one query line.

    Args:
        text: The instruction line.
        query_path: Path of the file containing the query, if known.

    Returns:
        The line with placeholders replaced; unchanged if it has none.

    Raises:
        PlaceholderError: If no path was supplied or a name is unknown.
    """
    if not contains_placeholder(text):
        return text

    if query_path is None:
        raise PlaceholderError(
            'The query looks like it contains a placeholder, with "{{" and "}}"\n'
            "but no file path has been supplied, so cannot expand placeholder values.\n"
            "The query is:\n"
            f"{text}"
        )

    context = make_query_context(query_path)
    try:
        template = _env.from_string(text)
        for dotted in _referenced_names(_env.parse(text)):
            if not _resolves(context, dotted):
                raise _expansion_failure(f"Unknown property: {dotted}", text)
        return template.render(context)
    except TemplateSyntaxError as e:
        raise _expansion_failure(str(e), text) from e
    except UndefinedError as e:
        raise _expansion_failure(str(e), text) from e
