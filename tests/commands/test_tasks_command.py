"""Tests for the task commands, driven through the top-level app.

Commands run against a real SQLite board in the per-test data dir; storage
failures are simulated by patching ``task_service_scope``.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from eisenboard.main import app
from eisenboard.models import StorageError

runner = CliRunner()


def _board():
    result = runner.invoke(app, ["board", "--all", "--json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


def _add(title, bucket=None):
    args = ["tasks", "add", title] + ([bucket] if bucket else []) + ["--json"]
    result = runner.invoke(app, args)
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestAdd:
    def test_add_defaults_to_urgent_important(self):
        task = _add("Buy milk")
        assert task["bucket"] == "UrgentImportant"
        assert task["category"] == "UrgentImportant"
        assert task["position"] == 1
        assert task["completed"] is False

    @pytest.mark.parametrize(
        "alias, bucket",
        [
            ("ui", "UrgentImportant"),
            ("uni", "UrgentNotImportant"),
            ("nui", "NotUrgentImportant"),
            ("NUN", "NotUrgentNotImportant"),
            ("today", "Today"),
            ("Today", "Today"),
            ("NotUrgentImportant", "NotUrgentImportant"),
        ],
    )
    def test_bucket_aliases(self, alias, bucket):
        assert _add("Task", alias)["bucket"] == bucket

    def test_top_level_add_shortcut(self):
        result = runner.invoke(app, ["add", "Call mom", "today"])
        assert result.exit_code == 0, result.output
        assert "Added #1 to Today" in result.output
        assert [t["title"] for t in _board()["Today"]] == ["Call mom"]

    def test_blank_title_exit_code(self):
        result = runner.invoke(app, ["add", "   ", "today"])
        assert result.exit_code == 2
        assert "Title required" in result.output
        assert all(tasks == [] for tasks in _board().values())

    def test_unknown_bucket_exit_code(self):
        result = runner.invoke(app, ["add", "Task", "someday"])
        assert result.exit_code == 2
        assert "Unknown bucket" in result.output

    def test_unknown_bucket_with_fallback_config(self):
        runner.invoke(app, ["config", "set", "board.unknown_bucket", "fallback"])
        assert _add("Task", "someday")["bucket"] == "UrgentImportant"


class TestBoard:
    def test_board_json_has_every_bucket_in_order(self):
        board = _board()
        assert list(board) == [
            "UrgentImportant",
            "UrgentNotImportant",
            "Today",
            "NotUrgentImportant",
            "NotUrgentNotImportant",
        ]

    def test_board_pretty(self):
        _add("Buy milk")
        result = runner.invoke(app, ["board"])
        assert result.exit_code == 0, result.output
        assert "Today" in result.output

    def test_board_yaml(self):
        _add("Buy milk")
        result = runner.invoke(app, ["tasks", "board", "-o", "yaml"])
        assert result.exit_code == 0, result.output
        assert "title: Buy milk" in result.output

    def test_unknown_output_format(self):
        result = runner.invoke(app, ["board", "--output", "xml"])
        assert result.exit_code == 2
        assert "Unknown output format" in result.output

    def test_completed_hidden_without_all(self):
        task = _add("Done")
        runner.invoke(app, ["tasks", "toggle", str(task["id"])])

        result = runner.invoke(app, ["board", "--json"])

        assert json.loads(result.output)["UrgentImportant"] == []


class TestLifecycle:
    def test_toggle(self):
        task = _add("Water plants", "nui")

        result = runner.invoke(app, ["tasks", "toggle", str(task["id"]), "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["completed"] is True

    def test_toggle_missing_exit_code(self):
        result = runner.invoke(app, ["tasks", "toggle", "99"])
        assert result.exit_code == 5
        assert "Task not found: 99" in result.output

    def test_edit(self):
        task = _add("Old")
        result = runner.invoke(app, ["tasks", "edit", str(task["id"]), "New"])
        assert result.exit_code == 0, result.output
        assert _board()["UrgentImportant"][0]["title"] == "New"

    def test_edit_blank_and_missing(self):
        task = _add("Keep")
        assert runner.invoke(app, ["tasks", "edit", str(task["id"]), " "]).exit_code == 2
        assert runner.invoke(app, ["tasks", "edit", "99", "Title"]).exit_code == 5

    def test_delete_is_idempotent(self):
        task = _add("Gone")
        assert runner.invoke(app, ["tasks", "delete", str(task["id"])]).exit_code == 0
        assert runner.invoke(app, ["tasks", "delete", str(task["id"])]).exit_code == 0
        assert runner.invoke(app, ["tasks", "toggle", str(task["id"])]).exit_code == 5

    def test_ids_outside_integer_range(self):
        huge = str(2**63)
        assert runner.invoke(app, ["tasks", "delete", huge]).exit_code == 0

        result = runner.invoke(app, ["tasks", "toggle", huge])
        assert result.exit_code == 5
        assert f"Task not found: {huge}" in result.output

    def test_completed_list(self):
        first = _add("first")
        second = _add("second")
        runner.invoke(app, ["tasks", "toggle", str(first["id"])])
        runner.invoke(app, ["tasks", "toggle", str(second["id"])])

        result = runner.invoke(app, ["tasks", "completed", "--json"])

        assert result.exit_code == 0, result.output
        assert [t["title"] for t in json.loads(result.output)] == ["second", "first"]

        limited = runner.invoke(app, ["tasks", "completed", "-n", "1", "--json"])
        assert len(json.loads(limited.output)) == 1

    def test_completed_pretty_empty(self):
        result = runner.invoke(app, ["tasks", "completed"])
        assert result.exit_code == 0
        assert "No completed tasks" in result.output


class TestMoveAndReorder:
    def test_move_then_reorder(self):
        a = _add("A", "ui")
        b = _add("B", "ui")
        x = _add("X", "nun")

        moved = runner.invoke(app, ["tasks", "move", str(x["id"]), "ui", "--index", "1", "--json"])
        assert moved.exit_code == 0, moved.output
        assert json.loads(moved.output)["category"] == "UrgentImportant"

        result = runner.invoke(
            app, ["tasks", "reorder", "ui", str(a["id"]), str(x["id"]), str(b["id"])]
        )
        assert result.exit_code == 0, result.output

        column = _board()["UrgentImportant"]
        assert [(t["title"], t["position"]) for t in column] == [("A", 1), ("X", 2), ("B", 3)]

    def test_move_to_today_keeps_category(self):
        task = _add("Gym", "nui")
        result = runner.invoke(app, ["tasks", "move", str(task["id"]), "today", "--json"])
        moved = json.loads(result.output)
        assert moved["bucket"] == "Today"
        assert moved["category"] == "NotUrgentImportant"

    def test_move_errors(self):
        task = _add("A")
        assert runner.invoke(app, ["tasks", "move", "99", "today"]).exit_code == 5
        assert runner.invoke(app, ["tasks", "move", str(task["id"]), "later"]).exit_code == 2
        negative = runner.invoke(app, ["tasks", "move", str(task["id"]), "today", "--index=-1"])
        assert negative.exit_code == 2
        huge = runner.invoke(
            app, ["tasks", "move", str(task["id"]), "today", "--index", str(2**63)]
        )
        assert huge.exit_code == 2
        assert "Target index must be" in huge.output

    def test_reorder_unknown_bucket(self):
        assert runner.invoke(app, ["tasks", "reorder", "later", "1"]).exit_code == 2


class TestErrorMapping:
    def _scope_raising(self, error):
        service = MagicMock()
        service.list_board = AsyncMock(side_effect=error)
        scope = MagicMock()
        scope.return_value.__enter__.return_value = service
        scope.return_value.__exit__.return_value = False
        return scope

    def test_storage_error_exit_code(self):
        scope = self._scope_raising(StorageError("database is locked"))
        with patch("eisenboard.commands.tasks_command.task_service_scope", scope):
            result = runner.invoke(app, ["board"])
        assert result.exit_code == 3
        assert "database is locked" in result.output

    def test_unexpected_error_exit_code(self):
        scope = self._scope_raising(RuntimeError("kaboom"))
        with patch("eisenboard.commands.tasks_command.task_service_scope", scope):
            result = runner.invoke(app, ["board"])
        assert result.exit_code == 1
        assert "An unexpected error occurred: kaboom" in result.output


class TestApp:
    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "eisenboard" in result.output

    def test_typo_suggests_command(self):
        result = runner.invoke(app, ["bord"])
        assert result.exit_code == 2
        assert "board" in result.output

    def test_commands_are_logged(self, isolated_dirs):
        _add("Logged")
        log_file = isolated_dirs / "logs" / "eisenboard.log"
        contents = log_file.read_text()
        assert "command started: add_task" in contents
        assert "command completed: add_task" in contents

    def test_failures_log_exit_code_name(self, isolated_dirs):
        runner.invoke(app, ["tasks", "toggle", "99"])
        contents = (isolated_dirs / "logs" / "eisenboard.log").read_text()
        assert "command failed: toggle_task" in contents
        assert "ERROR_NOT_FOUND - Task not found: 99" in contents

    def test_unopenable_database_exit_code(self, isolated_dirs, monkeypatch):
        blocker = isolated_dirs / "not-a-dir"
        blocker.write_text("")
        monkeypatch.setenv("EISENBOARD_DB", str(blocker / "board.db"))

        result = runner.invoke(app, ["board"])

        assert result.exit_code == 3
        assert "cannot open database" in result.output
