"""Query-language fields and the registry that dispatches to them."""

from tasks_query.fields.base import Field
from tasks_query.fields.registry import FIELDS, parse_filter, parse_grouper, parse_sorter

__all__ = ["FIELDS", "Field", "parse_filter", "parse_grouper", "parse_sorter"]
