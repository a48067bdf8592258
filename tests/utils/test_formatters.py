"""Tests for output formatters."""

import json
from datetime import UTC, datetime

from eisenboard.models import BOARD_ORDER, Bucket, Category, Task
from eisenboard.utils.ui.formatters import (
    CATEGORY_COLORS,
    board_to_dict,
    format_board,
    format_output,
    format_task_list,
)

NOW = datetime(2026, 2, 2, 8, 0, tzinfo=UTC)


def _task(task_id, title, bucket, category, completed=False):
    return Task(
        id=task_id,
        title=title,
        category=category,
        bucket=bucket,
        completed=completed,
        position=task_id,
        created_at=NOW,
        updated_at=NOW,
    )


def _board():
    board = {bucket: [] for bucket in BOARD_ORDER}
    board[Bucket.TODAY].append(_task(1, "Milk", Bucket.TODAY, Category.NOT_URGENT_IMPORTANT))
    board[Bucket.URGENT_IMPORTANT].append(
        _task(2, "Taxes", Bucket.URGENT_IMPORTANT, Category.URGENT_IMPORTANT)
    )
    return board


def test_every_category_has_a_colour():
    assert set(CATEGORY_COLORS) == set(Category)


def test_board_to_dict_uses_tokens():
    data = board_to_dict(_board())
    assert list(data) == [b.value for b in BOARD_ORDER]
    assert data["Today"][0]["category"] == "NotUrgentImportant"
    assert data["Today"][0]["updated_at"].startswith("2026-02-02T08:00:00")


def test_format_output_json(capsys):
    format_output({"a": 1}, "json")
    assert json.loads(capsys.readouterr().out) == {"a": 1}


def test_format_output_yaml(capsys):
    format_output({"a": [1, 2]}, "yaml")
    assert capsys.readouterr().out.startswith("a:\n- 1\n- 2")


def test_format_board_renders_titles(capsys):
    format_board(_board(), color=False)
    out = capsys.readouterr().out
    assert "Milk" in out
    assert "Taxes" in out


def test_format_task_list_empty(capsys):
    format_task_list([], "Completed Tasks")
    assert "No completed tasks" in capsys.readouterr().out
