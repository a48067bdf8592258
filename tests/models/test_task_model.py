"""Tests for the Task pydantic models."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError as PydanticValidationError

from eisenboard.models import Bucket, Category, Task, TaskUpdate

NOW = datetime(2026, 1, 5, 12, 0, tzinfo=UTC)


def _task(**overrides):
    data = {
        "id": 1,
        "title": "Buy milk",
        "category": Category.URGENT_IMPORTANT,
        "bucket": Bucket.URGENT_IMPORTANT,
        "position": 1,
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return Task(**data)


def test_valid_task():
    task = _task()
    assert task.completed is False
    assert task.bucket is Bucket.URGENT_IMPORTANT


def test_quadrant_bucket_requires_matching_category():
    with pytest.raises(PydanticValidationError):
        _task(bucket=Bucket.NOT_URGENT_IMPORTANT, category=Category.URGENT_IMPORTANT)


@pytest.mark.parametrize("category", list(Category))
def test_today_accepts_any_category(category):
    assert _task(bucket=Bucket.TODAY, category=category).category is category


def test_position_must_be_positive():
    with pytest.raises(PydanticValidationError):
        _task(position=0)


def test_empty_title_rejected():
    with pytest.raises(PydanticValidationError):
        _task(title="")


def test_tokens_are_coerced_to_enums():
    task = _task(bucket="Today", category="NotUrgentNotImportant")
    assert task.bucket is Bucket.TODAY
    assert task.category is Category.NOT_URGENT_NOT_IMPORTANT


def test_task_update_dump_skips_unset_fields():
    updates = TaskUpdate(bucket=Bucket.TODAY, position=3)
    assert updates.model_dump(exclude_none=True, mode="json") == {
        "bucket": "Today",
        "position": 3,
    }
