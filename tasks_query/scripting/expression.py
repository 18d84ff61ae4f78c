"""Jinja2 expressions evaluated in a sandboxed environment.

Expressions see only the names in their context (``task``, ``query``) plus
the environment's filters and tests, e.g.
``task.description | length > 10`` or ``task.due.moment is none``. The
sandbox refuses private and dunder attributes and unsafe calls.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from functools import lru_cache

from jinja2 import StrictUndefined, TemplateSyntaxError, Undefined
from jinja2.environment import TemplateExpression
from jinja2.sandbox import SandboxedEnvironment

from tasks_query.exceptions import ExpressionSyntaxError

Evaluator = Callable[[str, Mapping[str, object]], object]


def _make_env() -> SandboxedEnvironment:
    """Create the sandboxed Jinja2 environment for ``by function`` expressions."""
    return SandboxedEnvironment(
        autoescape=False,
        undefined=StrictUndefined,
    )


_env = _make_env()


@lru_cache(maxsize=512)
def compile_expression(expression: str) -> TemplateExpression:
    """Compile an expression once.

    Raises:
        ExpressionSyntaxError: If the text is not a valid expression.
    """
    source = expression.strip()
    try:
        return _env.compile_expression(source, undefined_to_none=False)
    except TemplateSyntaxError as e:
        raise ExpressionSyntaxError(source, f"TemplateSyntaxError: {e.message}") from e


def evaluate_expression(expression: str, context: Mapping[str, object]) -> object:
    """Evaluate an expression against a fresh context built from ``context``.

    Unknown names and refused attributes raise ``UndefinedError`` or
    ``SecurityError``; other exceptions raised by the expression propagate
    unchanged.
    """
    result = compile_expression(expression)(**context)
    if isinstance(result, Undefined):
        # Any use of a StrictUndefined raises its error
        str(result)
    return result
