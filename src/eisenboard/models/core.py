"""Task data models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from .taxonomy import Bucket, Category, category_for_bucket


class Task(BaseModel):
    """Task model representing a complete board entry.

    Attributes:
        id: Store-assigned unique identifier
        title: Task text, never blank
        category: Quadrant the task belongs to (drives its colour)
        bucket: Column the task currently sits in
        completed: Completion status
        position: Ordering key within the bucket (ascending = display order)
        created_at: Creation timestamp (UTC, immutable)
        updated_at: Last mutation timestamp (UTC)
    """

    id: int
    title: str = Field(min_length=1)
    category: Category
    bucket: Bucket
    completed: bool = False
    position: int = Field(ge=1)
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="after")
    def _quadrant_category_matches_bucket(self) -> Task:
        expected = category_for_bucket(self.bucket)
        if expected is not None and self.category != expected:
            raise ValueError(
                f"category {self.category.value} does not match bucket {self.bucket.value}"
            )
        return self


class TaskCreate(BaseModel):
    """Model for inserting a new task row.

    The service fills in category and position; the repository assigns the id.
    """

    title: str = Field(min_length=1)
    category: Category
    bucket: Bucket
    position: int = Field(ge=1)


class TaskUpdate(BaseModel):
    """Model for updating an existing task.

    All fields are optional - only provided fields will be updated.
    """

    title: str | None = Field(default=None, min_length=1)
    category: Category | None = None
    bucket: Bucket | None = None
    completed: bool | None = None
    position: int | None = Field(default=None, ge=1)
