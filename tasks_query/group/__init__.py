"""Multi-level grouping of search results."""

from tasks_query.group.headings import GroupHeading, display_name
from tasks_query.group.task_groups import TaskGroup, TaskGroups
from tasks_query.group.tree import GroupingTreeNode, TaskGroupingTree

__all__ = [
    "GroupHeading",
    "GroupingTreeNode",
    "TaskGroup",
    "TaskGroupingTree",
    "TaskGroups",
    "display_name",
]
