"""Exception hierarchy for tasks-query."""

from pathlib import Path


class TasksQueryError(Exception):
    """Base exception for all tasks-query errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all tasks-query errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(TasksQueryError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Query Compilation Errors
class QueryError(TasksQueryError):
    """A query instruction could not be compiled.

    The message is user-facing text; ``Query`` appends the offending line.
    """

    pass


class InstructionError(QueryError):
    """A single instruction line was not understood by any field."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class PlaceholderError(QueryError):
    """A ``{{...}}`` placeholder could not be expanded."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BooleanExpressionError(QueryError):
    """A line that looks like a boolean combination could not be parsed."""

    def __init__(self, line: str, detail: str) -> None:
        self.line = line
        self.detail = detail
        super().__init__(
            "Could not interpret the following instruction as a Boolean combination:\n"
            f"    {line}\n\n"
            "The error message is:\n"
            f"    {detail}"
        )


# Expression Errors
class ExpressionError(TasksQueryError):
    """Errors from custom ``by function`` expressions."""

    pass


class ExpressionSyntaxError(ExpressionError, QueryError):
    """The expression text is not a valid expression."""

    def __init__(self, expression: str, detail: str) -> None:
        self.expression = expression
        self.detail = detail
        super().__init__(
            f'Error: Failed parsing expression "{expression}".\n'
            "The error message was:\n"
            f'    "{detail}"'
        )


class ExpressionEvaluationError(ExpressionError):
    """The expression raised while being evaluated against a task."""

    def __init__(self, expression: str, detail: str) -> None:
        self.expression = expression
        self.detail = detail
        super().__init__(f"Failed evaluating expression '{expression}': {detail}")

    @classmethod
    def from_exception(cls, expression: str, exc: BaseException) -> "ExpressionEvaluationError":
        return cls(expression, f"{type(exc).__name__}: {exc}")
