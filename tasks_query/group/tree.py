"""Tree of group names built one grouper at a time."""

from __future__ import annotations

import re
from collections.abc import Sequence
from functools import cmp_to_key

from tasks_query.model.task import Task
from tasks_query.query.grouper import Grouper
from tasks_query.query.search_info import SearchInfo

_DIGITS_RE = re.compile(r"(\d+)")


def natural_sort_key(name: str) -> tuple[tuple[int, int, str], ...]:
    """Key comparing digit runs numerically, so ``%%2%%`` sorts before ``%%10%%``."""
    return tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part.casefold())
        for part in _DIGITS_RE.split(name)
        if part
    )


class GroupingTreeNode:
    """Tasks at one position in the tree, and child nodes keyed by group name."""

    def __init__(self, values: list[Task] | None = None) -> None:
        self.values: list[Task] = values if values is not None else []
        self.children: dict[str, GroupingTreeNode] = {}


class TaskGroupingTree:
    """Fan tasks out level by level, one level per grouper.

    A task for which a grouper returns several names is placed under each of
    them; a task for which it returns none is placed under ``""``.
    """

    def __init__(
        self,
        groupers: Sequence[Grouper],
        tasks: Sequence[Task],
        search_info: SearchInfo | None = None,
    ) -> None:
        self.groupers = list(groupers)
        self.root = GroupingTreeNode(list(tasks))
        search_info = search_info if search_info is not None else SearchInfo.from_tasks(tasks)

        level = [self.root]
        for grouper in self.groupers:
            next_level: list[GroupingTreeNode] = []
            for node in level:
                for task in node.values:
                    names = grouper.group_names(task, search_info) or [""]
                    for name in dict.fromkeys(names):
                        child = node.children.get(name)
                        if child is None:
                            child = GroupingTreeNode()
                            node.children[name] = child
                            next_level.append(child)
                        child.values.append(task)
            level = next_level

    def leaf_paths(self) -> list[tuple[list[str], list[Task]]]:
        """Every root-to-leaf path with its tasks, in insertion order."""
        depth = len(self.groupers)
        paths: list[tuple[list[str], list[Task]]] = []

        def walk(node: GroupingTreeNode, names: list[str]) -> None:
            if len(names) == depth:
                paths.append((names, node.values))
                return
            for name, child in node.children.items():
                walk(child, [*names, name])

        walk(self.root, [])
        return paths

    def sorted_paths(self) -> list[tuple[list[str], list[Task]]]:
        """Leaf paths ordered by name, level by level, honouring ``reverse``."""

        def compare(
            a: tuple[list[str], list[Task]],
            b: tuple[list[str], list[Task]],
        ) -> int:
            for level, grouper in enumerate(self.groupers):
                key_a = natural_sort_key(a[0][level])
                key_b = natural_sort_key(b[0][level])
                if key_a == key_b:
                    continue
                result = -1 if key_a < key_b else 1
                return -result if grouper.reverse else result
            return 0

        return sorted(self.leaf_paths(), key=cmp_to_key(compare))
