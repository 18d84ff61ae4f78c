"""Task data model consumed by the query engine."""

from tasks_query.model.dates import TasksDate, TasksDateCategory
from tasks_query.model.priority import Priority
from tasks_query.model.status import Status, StatusRegistry, StatusType
from tasks_query.model.task import Recurrence, Task

__all__ = [
    "Priority",
    "Recurrence",
    "Status",
    "StatusRegistry",
    "StatusType",
    "Task",
    "TasksDate",
    "TasksDateCategory",
]
