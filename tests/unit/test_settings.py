"""Unit tests for global filter/query settings and explain_results."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from tasks_query.model.task import Task
from tasks_query.query.renderer import explain_results, query_for_renderer
from tasks_query.query.settings import GlobalFilter, GlobalQuery


class TestGlobalFilter:
    def test_lifecycle(self) -> None:
        global_filter = GlobalFilter()
        assert global_filter.is_empty()
        global_filter.set("#task")
        assert global_filter.get() == "#task"
        assert not global_filter.is_empty()
        global_filter.reset()
        assert global_filter.get() == ""

    def test_includes(self) -> None:
        assert GlobalFilter().includes_global_filter("anything")
        assert GlobalFilter("#task").includes_global_filter("do #task now")
        assert not GlobalFilter("#task").includes_global_filter("do now")

    @pytest.mark.parametrize(
        ("description", "expected"),
        [
            ("#task do it", "do it"),
            ("do #task it", "do it"),
            ("do it #task", "do it"),
            ("do #tasks it", "do #tasks it"),
            ("a  b #task c", "a  b c"),
            ("#task #task  spaced", "spaced"),
        ],
    )
    def test_remove_as_word(self, description: str, expected: str) -> None:
        assert GlobalFilter("#task").remove_as_word_from(description) == expected


class TestGlobalQuery:
    def test_lifecycle(self) -> None:
        global_query = GlobalQuery("not done")
        assert not global_query.is_empty()
        assert global_query.query().filters[0].instruction == "not done"
        global_query.reset()
        assert global_query.is_empty()

    def test_has_error(self) -> None:
        assert GlobalQuery("wibble").has_error()
        assert not GlobalQuery("not done").has_error()


class TestQueryForRenderer:
    def test_global_query_is_prepended(self, make_tasks: Callable[..., list[Task]]) -> None:
        tasks = make_tasks("- [ ] open a", "- [x] done a", "- [ ] open b")
        query = query_for_renderer("description includes a", GlobalQuery("not done"))
        result = query.apply_to_tasks(tasks)
        assert [t.description for t in result.groups[0].tasks] == ["open a"]

    def test_block_can_ignore_global_query(self) -> None:
        query = query_for_renderer("ignore global query\ndone", GlobalQuery("not done"))
        assert [f.instruction for f in query.filters] == ["done"]

    def test_empty_global_query(self) -> None:
        query = query_for_renderer("done", GlobalQuery())
        assert query.source == "done"


class TestExplainResults:
    def test_block_only(self) -> None:
        assert explain_results("not done", GlobalFilter(), GlobalQuery()) == (
            "Explanation of this Tasks code block query:\n\nnot done\n"
        )

    def test_with_global_filter_and_query(self) -> None:
        text = explain_results("not done", GlobalFilter("#task"), GlobalQuery("limit 10"))
        assert text == (
            "Only tasks containing the global filter '#task'.\n\n"
            "Explanation of the global query:\n\n"
            "No filters supplied. All tasks will match the query.\n\n"
            "At most 10 tasks.\n\n"
            "Explanation of this Tasks code block query:\n\n"
            "not done\n"
        )

    def test_ignored_global_query_is_not_explained(self) -> None:
        text = explain_results("ignore global query", GlobalFilter(), GlobalQuery("done"))
        assert text == (
            "Explanation of this Tasks code block query:\n\n"
            "No filters supplied. All tasks will match the query."
        )
