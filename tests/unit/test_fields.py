"""Unit tests for text, tag, status, priority and dependency fields."""

from __future__ import annotations

from collections.abc import Callable

import pendulum
import pytest

from tasks_query.fields.dates import DateField
from tasks_query.fields.registry import FIELDS, parse_filter, parse_grouper, parse_sorter
from tasks_query.fields.text import REGEX_INSTRUCTIONS_HELP, RegexMatcher, TextField
from tasks_query.model.task import Task
from tasks_query.query.query import Query


def matching(source: str, tasks: list[Task], path: str | None = None) -> list[str]:
    query = Query(source, path)
    assert query.error is None, query.error
    return [task.description for task in query.apply_to_tasks(tasks).groups[0].tasks]


class TestRegistry:
    def test_status_name_is_checked_before_status(self) -> None:
        names = [field.field_name() for field in FIELDS]
        assert names.index("status.name") < names.index("status")
        assert names.index("status") < names.index("done")
        assert names[-1] == "boolean query"

    def test_unrecognised_lines(self) -> None:
        assert parse_filter("wibble") is None
        assert parse_sorter("sort by wibble") is None
        assert parse_grouper("group by wibble") is None

    def test_text_and_date_base_fields_are_abstract(self) -> None:
        with pytest.raises(TypeError):
            TextField()  # type: ignore[abstract]
        with pytest.raises(TypeError):
            DateField()  # type: ignore[abstract]


# ---------------------------------------------------------------------------
# Text fields
# ---------------------------------------------------------------------------


class TestTextFields:
    @pytest.fixture
    def tasks(self, make_tasks: Callable[..., list[Task]]) -> list[Task]:
        return [
            *make_tasks(
                "- [ ] Buy milk", "- [ ] Call Bob", path="home/errands.md", heading="Today"
            ),
            *make_tasks("- [ ] Write report", path="work/projects/report.md"),
        ]

    def test_description_includes_ignores_case(self, tasks: list[Task]) -> None:
        assert matching("description includes MILK", tasks) == ["Buy milk"]
        assert matching("description does not include milk", tasks) == ["Call Bob", "Write report"]

    def test_regex_matches(self, tasks: list[Task]) -> None:
        assert matching("description regex matches /^call/i", tasks) == ["Call Bob"]
        assert matching("description regex matches /^call/", tasks) == []
        assert matching("description regex does not match /o/", tasks) == ["Buy milk"]

    def test_path_folder_filename_root(self, tasks: list[Task]) -> None:
        assert matching("path includes projects", tasks) == ["Write report"]
        assert matching("folder includes work/projects/", tasks) == ["Write report"]
        assert matching("filename includes errands.md", tasks) == ["Buy milk", "Call Bob"]
        assert matching("root includes home/", tasks) == ["Buy milk", "Call Bob"]

    def test_heading(self, tasks: list[Task]) -> None:
        assert matching("heading includes today", tasks) == ["Buy milk", "Call Bob"]

    def test_status_name(self, make_tasks: Callable[..., list[Task]]) -> None:
        tasks = make_tasks("- [/] started", "- [ ] waiting", "- [-] dropped")
        assert matching("status.name includes progress", tasks) == ["started"]
        assert matching("status.name does not include todo", tasks) == ["started", "dropped"]

    def test_invalid_regex_message(self) -> None:
        query = Query("description regex matches missing-slashes")
        assert query.error == (
            "Invalid instruction: 'description regex matches missing-slashes'\n\n"
            f"{REGEX_INSTRUCTIONS_HELP}\n"
            'Problem line: "description regex matches missing-slashes"'
        )

    def test_invalid_regex_pattern(self) -> None:
        assert RegexMatcher.from_source("/[unclosed/") is None
        assert RegexMatcher.from_source("/ok/x") is None

    def test_regex_explanation(self) -> None:
        assert Query("description regex matches /^Log/i").explain_query() == (
            "description regex matches /^Log/i =>\n  using regex: '^Log' with flag 'i'\n"
        )

    def test_group_by_location_fallbacks(self, make_tasks: Callable[..., list[Task]]) -> None:
        tasks = make_tasks("- [ ] nowhere", path="")
        for line, name in [
            ("group by path", "Unknown Location"),
            ("group by folder", "Unknown Location"),
            ("group by filename", "Unknown Location"),
            ("group by backlink", "Unknown Location"),
            ("group by heading", "(No heading)"),
            ("group by recurrence", "None"),
        ]:
            result = Query(line).apply_to_tasks(tasks)
            assert result.groups[0].group_names == [name], line

    def test_group_by_backlink(self, tasks: list[Task]) -> None:
        result = Query("group by backlink").apply_to_tasks(tasks)
        assert [group.group_names for group in result.groups] == [
            ["errands > Today"],
            ["report"],
        ]

    def test_sort_by_description_ignores_markup(
        self, make_tasks: Callable[..., list[Task]]
    ) -> None:
        tasks = make_tasks("- [ ] zebra", "- [ ] **apple**", "- [ ] [[mango]]")
        assert matching("sort by description", tasks) == ["**apple**", "[[mango]]", "zebra"]


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


class TestTags:
    @pytest.fixture
    def tasks(self, make_tasks: Callable[..., list[Task]]) -> list[Task]:
        return make_tasks(
            "- [ ] plain",
            "- [ ] one #work",
            "- [ ] two #home #work/urgent",
        )

    def test_tag_filters(self, tasks: list[Task]) -> None:
        assert matching("tag includes #work", tasks) == ["one #work", "two #home #work/urgent"]
        assert matching("tags do not include #work", tasks) == ["plain"]
        assert matching("tags regex matches /^#home$/", tasks) == ["two #home #work/urgent"]
        assert matching("has tags", tasks) == ["one #work", "two #home #work/urgent"]
        assert matching("no tags", tasks) == ["plain"]
        assert matching("has tag", tasks) == ["one #work", "two #home #work/urgent"]
        assert matching("NO TAG", tasks) == ["plain"]

    def test_sort_by_nth_tag(self, tasks: list[Task]) -> None:
        assert matching("sort by tag", tasks) == ["two #home #work/urgent", "one #work", "plain"]
        assert matching("sort by tag 2", tasks) == ["two #home #work/urgent", "plain", "one #work"]

    def test_group_by_tags_fans_out(self, tasks: list[Task]) -> None:
        result = Query("group by tags").apply_to_tasks(tasks)
        assert [(g.group_names, [t.description for t in g.tasks]) for g in result.groups] == [
            (["#home"], ["two #home #work/urgent"]),
            (["#work"], ["one #work"]),
            (["#work/urgent"], ["two #home #work/urgent"]),
            (["(No tags)"], ["plain"]),
        ]
        assert result.total_tasks_count == 3


# ---------------------------------------------------------------------------
# Status and priority
# ---------------------------------------------------------------------------


class TestStatusFields:
    @pytest.fixture
    def tasks(self, make_tasks: Callable[..., list[Task]]) -> list[Task]:
        return make_tasks("- [x] finished", "- [ ] open", "- [/] started", "- [-] dropped")

    def test_done_counts_cancelled(self, tasks: list[Task]) -> None:
        assert matching("done", tasks) == ["finished", "dropped"]
        assert matching("not done", tasks) == ["open", "started"]

    def test_status_type(self, tasks: list[Task]) -> None:
        assert matching("status.type is IN_PROGRESS", tasks) == ["started"]
        assert matching("status.type is not todo", tasks) == ["finished", "started", "dropped"]

    def test_invalid_status_type(self) -> None:
        query = Query("status.type is WIBBLE")
        assert query.error is not None
        assert query.error.startswith("Invalid status.type instruction: 'status.type is WIBBLE'.")

    def test_group_by_status_type_order(self, tasks: list[Task]) -> None:
        result = Query("group by status.type").apply_to_tasks(tasks)
        assert [group.display_names for group in result.groups] == [
            ["IN_PROGRESS"],
            ["TODO"],
            ["DONE"],
            ["CANCELLED"],
        ]

    def test_sort_by_status_puts_open_first(self, tasks: list[Task]) -> None:
        assert matching("sort by status", tasks) == ["open", "started", "finished", "dropped"]


class TestPriorityField:
    @pytest.fixture
    def tasks(self, make_tasks: Callable[..., list[Task]]) -> list[Task]:
        return make_tasks("- [ ] high ⏫", "- [ ] medium 🔼", "- [ ] normal", "- [ ] low 🔽")

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("priority is high", ["high"]),
            ("priority is none", ["normal"]),
            ("priority medium", ["medium"]),
            ("priority is above none", ["high", "medium"]),
            ("priority is below none", ["low"]),
            ("priority is not low", ["high", "medium", "normal"]),
        ],
    )
    def test_filters(self, line: str, expected: list[str], tasks: list[Task]) -> None:
        assert matching(line, tasks) == expected

    def test_explanation(self) -> None:
        assert Query("priority above medium").explain_query() == (
            "priority above medium =>\n  priority is above medium\n"
        )

    def test_group_labels_in_priority_order(self, tasks: list[Task]) -> None:
        result = Query("group by priority").apply_to_tasks(list(reversed(tasks)))
        assert [group.display_names for group in result.groups] == [
            ["High priority"],
            ["Medium priority"],
            ["Normal priority"],
            ["Low priority"],
        ]


# ---------------------------------------------------------------------------
# Recurrence, dependencies, sub-items
# ---------------------------------------------------------------------------


class TestOtherFields:
    def test_recurring(self, make_tasks: Callable[..., list[Task]]) -> None:
        tasks = make_tasks("- [ ] water plants 🔁 every week", "- [ ] once")
        assert matching("is recurring", tasks) == ["water plants"]
        assert matching("is not recurring", tasks) == ["once"]
        assert matching("recurrence includes week", tasks) == ["water plants"]

    def test_blocking_and_blocked(self, make_tasks: Callable[..., list[Task]]) -> None:
        tasks = make_tasks(
            "- [ ] design 🆔 abc",
            "- [ ] build ⛔ abc",
            "- [x] old 🆔 old1",
            "- [ ] after old ⛔ old1",
        )
        assert matching("is blocking", tasks) == ["design", "old"]
        assert matching("is not blocking", tasks) == ["build", "after old"]
        assert matching("is blocked", tasks) == ["build"]
        assert matching("is not blocked", tasks) == ["design", "old", "after old"]

    def test_done_tasks_can_block_and_be_blocked(
        self, make_tasks: Callable[..., list[Task]]
    ) -> None:
        tasks = make_tasks(
            "- [x] parent 🆔 p1",
            "- [x] child ⛔ p1",
            "- [x] done-child ⛔ p2",
            "- [ ] open 🆔 p2",
            "- [ ] orphan ⛔ missing",
        )
        assert matching("is blocking", tasks) == ["parent", "open"]
        assert matching("is blocked", tasks) == ["done-child"]
        assert matching("is not blocked", tasks) == ["parent", "child", "open", "orphan"]

    def test_blocking_sees_tasks_removed_by_earlier_filters(
        self, make_tasks: Callable[..., list[Task]]
    ) -> None:
        tasks = make_tasks("- [ ] design 🆔 abc #a", "- [ ] build ⛔ abc")
        assert matching("tags include #a\nis blocking", tasks) == ["design #a"]

    def test_exclude_sub_items(self, make_tasks: Callable[..., list[Task]]) -> None:
        tasks = make_tasks("- [ ] parent", "    - [ ] child", "> - [ ] quoted")
        assert matching("exclude sub-items", tasks) == ["parent", "quoted"]

    def test_group_by_urgency_is_descending(
        self,
        make_tasks: Callable[..., list[Task]],
        pin_today: Callable[[str], pendulum.Date],
    ) -> None:
        pin_today("2022-01-15")
        tasks = make_tasks("- [ ] calm", "- [ ] urgent 📅 2022-01-15 ⏫")
        result = Query("group by urgency").apply_to_tasks(tasks)
        assert [group.group_names for group in result.groups] == [["14.80"], ["1.95"]]
        assert matching("sort by urgency", tasks) == ["urgent", "calm"]
