"""Integration tests for the search and explain commands over markdown files."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from tasks_query.cli import cli

pytestmark = pytest.mark.integration


def run(config_file: Path, *args: str) -> tuple[int, str]:
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_file), "--no-pager", *args])
    return result.exit_code, result.output


# ---------------------------------------------------------------------------
# search
# ---------------------------------------------------------------------------


class TestSearchCommand:
    def test_inline_query_over_directory(self, config_file: Path, vault: Path) -> None:
        code, output = run(config_file, "search", "--query", "not done", str(vault))
        assert code == 0
        assert "Buy milk" in output
        assert "Mow lawn" in output
        assert "Collect figures" in output
        assert "Post letter" not in output
        assert "Not tracked" not in output
        assert "Example inside a code block" not in output
        assert "hidden" not in output
        assert "5 tasks" in output

    def test_global_filter_is_removed_from_description(
        self, config_file: Path, vault: Path
    ) -> None:
        code, output = run(
            config_file,
            "search",
            "--format",
            "json",
            "--query",
            "tags include #outside",
            str(vault),
        )
        assert code == 0
        data = json.loads(output)
        tasks = [task for group in data["groups"] for task in group["tasks"]]
        assert [task["description"] for task in tasks] == [
            "Mow lawn #outside",
            "Collect figures #outside",
        ]
        assert tasks[0]["tags"] == ["#outside"]
        assert tasks[0]["heading"] == "Garden"
        assert tasks[0]["priority"] == "High"

    def test_query_file_with_groups(self, config_file: Path, vault: Path, temp_dir: Path) -> None:
        query_file = temp_dir / "weekly.query"
        query_file.write_text("not done\ngroup by root\nsort by description\nhide task count\n")

        code, output = run(config_file, "search", str(query_file), str(vault))
        assert code == 0
        lines = output.splitlines()
        assert "#### home/" in lines
        assert "#### work/" in lines
        assert lines.index("#### home/") < lines.index("#### work/")
        assert "tasks" not in lines[-1]

    def test_blocked_tasks(self, config_file: Path, vault: Path) -> None:
        code, output = run(
            config_file, "search", "--format", "json", "--query", "is blocked", str(vault)
        )
        assert code == 0
        data = json.loads(output)
        assert [t["description"] for g in data["groups"] for t in g["tasks"]] == ["Write chapters"]

    def test_limit_reports_count_before_limit(self, config_file: Path, vault: Path) -> None:
        code, output = run(
            config_file, "search", "--format", "json", "--query", "limit 1", str(vault)
        )
        assert code == 0
        data = json.loads(output)
        assert data["total_tasks"] == 1
        assert data["total_tasks_before_limit"] == 6

    def test_query_error_exits_1(self, config_file: Path, vault: Path) -> None:
        code, output = run(config_file, "search", "--query", "wibble", str(vault))
        assert code == 1
        assert "do not understand query" in output

    def test_search_error_exits_1(self, config_file: Path, vault: Path) -> None:
        code, output = run(
            config_file, "search", "--query", "filter by function wibble", str(vault)
        )
        assert code == 1
        assert "Search failed" in output

    def test_explain_flag(self, config_file: Path, vault: Path) -> None:
        code, output = run(config_file, "search", "--explain", "--query", "not done", str(vault))
        assert code == 0
        assert "Only tasks containing the global filter '#task'." in output
        assert "Explanation of this Tasks code block query:" in output

    def test_global_query_from_config(self, temp_dir: Path, vault: Path) -> None:
        config_file = temp_dir / "global.toml"
        config_file.write_text('[query]\nglobal_filter = "#task"\nglobal_query = "done"\n')

        code, output = run(config_file, "search", "--query", "path includes home", str(vault))
        assert code == 0
        assert "Post letter" in output
        assert "Buy milk" not in output

        code, output = run(
            config_file,
            "search",
            "--query",
            "ignore global query\\npath includes home",
            str(vault),
        )
        assert code == 0
        assert "Buy milk" in output

    def test_placeholder_uses_query_file_path(self, config_file: Path, vault: Path) -> None:
        query_file = vault / "work" / "tasks.query"
        query_file.write_text("folder includes {{query.file.folder}}\n")

        code, output = run(config_file, "search", str(query_file), ".")
        assert code == 0
        assert "Draft outline" in output
        assert "Buy milk" not in output

    def test_query_option_accepts_directory_first(self, config_file: Path, vault: Path) -> None:
        code, output = run(config_file, "search", "--query", "is blocked", "work")
        assert code == 0
        assert "Write chapters" in output
        assert "Buy milk" not in output

    def test_directory_is_not_a_query_file(self, config_file: Path, vault: Path) -> None:
        code, output = run(config_file, "search", "work", "home")
        assert code == 2
        assert "Query file is not a file" in output

    def test_no_query(self, config_file: Path) -> None:
        code, output = run(config_file, "search")
        assert code == 2
        assert "No query given" in output


# ---------------------------------------------------------------------------
# explain
# ---------------------------------------------------------------------------


class TestExplainCommand:
    def test_explains_boolean_query(self, config_file: Path) -> None:
        code, output = run(
            config_file, "explain", "--query", "(not done) OR (due before 2022-01-01)"
        )
        assert code == 0
        assert "OR (At least one of):" in output
        assert "due date is before 2022-01-01 (Saturday 1st January 2022)" in output

    def test_error_exits_1(self, config_file: Path) -> None:
        code, output = run(config_file, "explain", "--query", "group by xxxx")
        assert code == 1
        assert 'Problem line: "group by xxxx"' in output


class TestCli:
    def test_version(self) -> None:
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "tasks-query" in result.output

    def test_help_lists_commands(self, config_file: Path) -> None:
        code, output = run(config_file, "help")
        assert code == 0
        for command in ("search", "explain", "init-config"):
            assert command in output

    def test_invalid_config_exits_1(self, temp_dir: Path) -> None:
        bad = temp_dir / "bad.toml"
        bad.write_text("not [ toml")
        code, output = run(bad, "explain", "--query", "done")
        assert code == 1
        assert "Invalid config" in output
