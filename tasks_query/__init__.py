"""tasks-query: filter, sort and group markdown tasks with a line-based query language."""

__version__ = "0.1.0"
