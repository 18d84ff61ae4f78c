"""Urgency score used by ``sort by urgency`` and ``group by urgency``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tasks_query.model import dates
from tasks_query.model.priority import Priority

if TYPE_CHECKING:
    from tasks_query.model.task import Task

DUE_COEFFICIENT = 12.0
SCHEDULED_COEFFICIENT = 5.0
STARTED_COEFFICIENT = -3.0
PRIORITY_COEFFICIENT = 6.0

_PRIORITY_MULTIPLIER: dict[Priority, float] = {
    Priority.HIGH: 1.0,
    Priority.MEDIUM: 0.65,
    Priority.NONE: 0.325,
    Priority.LOW: 0.0,
}


def _due_multiplier(days_overdue: int) -> float:
    if days_overdue >= 7:
        return 1.0
    if days_overdue >= -14:
        return ((days_overdue + 14.0) * 0.8) / 21.0 + 0.2
    return 0.2


def calculate_urgency(task: Task) -> float:
    """Score a task; higher means more urgent."""
    current = dates.today()
    urgency = 0.0

    if task.due_date is not None:
        days_overdue = current.toordinal() - task.due_date.toordinal()
        urgency += _due_multiplier(days_overdue) * DUE_COEFFICIENT

    if task.scheduled_date is not None and current >= task.scheduled_date:
        urgency += SCHEDULED_COEFFICIENT

    if task.start_date is not None and current < task.start_date:
        urgency += STARTED_COEFFICIENT

    urgency += _PRIORITY_MULTIPLIER[task.priority] * PRIORITY_COEFFICIENT
    return urgency
