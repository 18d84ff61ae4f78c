"""Evaluation of ``filter/sort/group by function`` expressions."""

from tasks_query.scripting.expression import Evaluator, compile_expression, evaluate_expression
from tasks_query.scripting.properties import QueryProperties, TaskProperties, make_context

__all__ = [
    "Evaluator",
    "QueryProperties",
    "TaskProperties",
    "compile_expression",
    "evaluate_expression",
    "make_context",
]
