"""The ordered catalogue of fields and first-match-wins dispatch.

Order matters: more specific patterns come before general ones, e.g.
``status.name`` and ``status.type`` before ``status``, and the ``done``
status filter before the ``done <date>`` filter.
"""

from __future__ import annotations

import logging

from tasks_query.fields.base import Field
from tasks_query.fields.boolean import BooleanField
from tasks_query.fields.dates import (
    CreatedDateField,
    DoneDateField,
    DueDateField,
    HappensDateField,
    ScheduledDateField,
    StartDateField,
)
from tasks_query.fields.dependencies import BlockedField, BlockingField, ExcludeSubItemsField
from tasks_query.fields.function import FunctionField
from tasks_query.fields.priority import PriorityField
from tasks_query.fields.recurring import RecurringField
from tasks_query.fields.status import StatusField, StatusTypeField
from tasks_query.fields.tags import TagsField
from tasks_query.fields.text import (
    BacklinkField,
    DescriptionField,
    FilenameField,
    FolderField,
    HeadingField,
    PathField,
    RecurrenceField,
    RootField,
    StatusNameField,
)
from tasks_query.fields.urgency import UrgencyField
from tasks_query.query.filter import Filter
from tasks_query.query.grouper import Grouper
from tasks_query.query.sorter import Sorter

logger = logging.getLogger(__name__)

FIELDS: tuple[Field, ...] = (
    StatusNameField(),
    StatusTypeField(),
    StatusField(),
    RecurringField(),
    PriorityField(),
    HappensDateField(),
    StartDateField(),
    ScheduledDateField(),
    DueDateField(),
    CreatedDateField(),
    DoneDateField(),
    PathField(),
    FolderField(),
    FilenameField(),
    RootField(),
    BacklinkField(),
    DescriptionField(),
    TagsField(),
    HeadingField(),
    RecurrenceField(),
    UrgencyField(),
    ExcludeSubItemsField(),
    BlockingField(),
    BlockedField(),
    FunctionField(),
    BooleanField(),
)


def parse_filter(line: str, fields: tuple[Field, ...] = FIELDS) -> Filter | None:
    """Compile a filter line with the first field that recognises it.

    Returns:
        The filter, or None if no field recognises the line.

    Raises:
        QueryError: If a field recognises the line but cannot compile it.
    """
    for field in fields:
        if field.can_create_filter_for_line(line):
            return field.create_filter(line)
    return None


def parse_sorter(line: str, fields: tuple[Field, ...] = FIELDS) -> Sorter | None:
    for field in fields:
        sorter = field.create_sorter_from_line(line)
        if sorter is not None:
            return sorter
    return None


def parse_grouper(line: str, fields: tuple[Field, ...] = FIELDS) -> Grouper | None:
    for field in fields:
        grouper = field.create_grouper_from_line(line)
        if grouper is not None:
            return grouper
    return None
