"""Boolean combinations of instructions.

A line such as ``(due today) AND NOT (tag includes #waiting)`` is parsed in
two steps. First every sub-instruction (bracketed text that is not itself a
combination, or double-quoted text) is swapped for an identifier ``f1``,
``f2``... Then the simplified line is parsed with a Lark grammar and the
tree folded into one filter, compiling each sub-instruction on the way.
"""

from __future__ import annotations

import logging
import re
from functools import reduce
from importlib import resources
from typing import Any

from lark import Lark, Transformer, UnexpectedInput

from tasks_query.exceptions import BooleanExpressionError, InstructionError
from tasks_query.fields.base import Field
from tasks_query.model.task import Task
from tasks_query.query.explanation import Explanation
from tasks_query.query.filter import Filter, FilterFunction
from tasks_query.query.search_info import SearchInfo

logger = logging.getLogger(__name__)

MALFORMED = "malformed boolean query -- Invalid token (check the documentation for guidelines)"


def _load_grammar() -> str:
    """Load the Lark grammar from the package resources."""
    return resources.files("tasks_query.fields").joinpath("boolean.lark").read_text()


_parser = Lark(
    _load_grammar(),
    parser="earley",
    ambiguity="resolve",
)

_BOOLEAN_LINE_RE = re.compile(r'^(?:\(|"|NOT\s)')
_NESTED_EXPRESSION_RE = re.compile(r'^\s*(?:\(|"|NOT\s*[("])')

Node = tuple[FilterFunction, Explanation]


def _matching_bracket(text: str, start: int) -> int:
    depth = 0
    for index in range(start, len(text)):
        if text[index] == "(":
            depth += 1
        elif text[index] == ")":
            depth -= 1
            if depth == 0:
                return index
    return -1


class _Simplifier:
    """Replaces sub-instructions with identifiers, remembering the originals."""

    def __init__(self, line: str) -> None:
        self.line = line
        self.sub_instructions: dict[str, str] = {}

    def _add(self, text: str) -> str:
        identifier = f"f{len(self.sub_instructions) + 1}"
        self.sub_instructions[identifier] = text.strip()
        return identifier

    def simplify(self, text: str) -> str:
        parts: list[str] = []
        index = 0
        while index < len(text):
            char = text[index]
            if char == '"':
                end = text.find('"', index + 1)
                if end == -1:
                    raise BooleanExpressionError(
                        self.line, "malformed boolean query -- unterminated double quote"
                    )
                parts.append(self._add(text[index + 1 : end]))
                index = end + 1
            elif char == "(":
                end = _matching_bracket(text, index)
                if end == -1:
                    raise BooleanExpressionError(
                        self.line, "malformed boolean query -- unbalanced parentheses"
                    )
                inner = text[index + 1 : end]
                if _NESTED_EXPRESSION_RE.match(inner):
                    parts.append(f"({self.simplify(inner)})")
                else:
                    parts.append(f"({self._add(inner)})")
                index = end + 1
            elif char == ")":
                raise BooleanExpressionError(
                    self.line, "malformed boolean query -- unbalanced parentheses"
                )
            else:
                parts.append(char)
                index += 1
        return "".join(parts)


class _BooleanTransformer(Transformer):
    """Fold the parse tree into a filter function and an explanation."""

    def __init__(self, filters: dict[str, Filter]) -> None:
        super().__init__()
        self._filters = filters

    def leaf(self, items: list[Any]) -> Node:
        sub_filter = self._filters[str(items[0])]
        return sub_filter.filter_function, sub_filter.explanation

    def not_op(self, items: list[Any]) -> Node:
        function, explanation = items[-1]
        return (lambda task, info: not function(task, info)), Explanation.boolean_not([explanation])

    def and_expr(self, items: list[Node]) -> Node:
        functions = [function for function, _ in items]
        return (
            lambda task, info: all(function(task, info) for function in functions),
            Explanation.boolean_and([explanation for _, explanation in items]),
        )

    def or_expr(self, items: list[Node]) -> Node:
        functions = [function for function, _ in items]
        return (
            lambda task, info: any(function(task, info) for function in functions),
            Explanation.boolean_or([explanation for _, explanation in items]),
        )

    def xor_expr(self, items: list[Node]) -> Node:
        def xor(left: Node, right: Node) -> Node:
            left_function, left_explanation = left
            right_function, right_explanation = right
            return (
                lambda task, info: left_function(task, info) != right_function(task, info),
                Explanation.boolean_xor([left_explanation, right_explanation]),
            )

        return reduce(xor, items)


class BooleanField(Field):
    """``AND``/``OR``/``XOR``/``NOT`` combinations of other instructions.

    Operators must be written in upper case.
    """

    def field_name(self) -> str:
        return "boolean query"

    def filter_regexp(self) -> re.Pattern[str]:
        return _BOOLEAN_LINE_RE

    def create_filter(self, line: str) -> Filter:
        from tasks_query.fields.registry import parse_filter

        simplifier = _Simplifier(line)
        simplified = simplifier.simplify(line)
        try:
            tree = _parser.parse(simplified)
        except UnexpectedInput as e:
            logger.debug("Boolean line %r simplified to %r: %s", line, simplified, e)
            raise BooleanExpressionError(line, MALFORMED) from e

        filters: dict[str, Filter] = {}
        for identifier, text in simplifier.sub_instructions.items():
            sub_filter = parse_filter(text)
            if sub_filter is None:
                raise InstructionError(f"couldn't parse sub-expression '{text}'")
            filters[identifier] = sub_filter

        function, explanation = _BooleanTransformer(filters).transform(tree)

        def filter_function(task: Task, search_info: SearchInfo) -> bool:
            return function(task, search_info)

        return Filter(line, filter_function, explanation)
