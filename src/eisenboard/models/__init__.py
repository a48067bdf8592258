"""eisenboard domain models.

Pydantic models for tasks, the bucket/category taxonomy and the domain
exceptions raised by the services.
"""

from .core import Task, TaskCreate, TaskUpdate
from .exceptions import BoardError, InvalidBucket, NotFound, StorageError, ValidationError
from .taxonomy import (
    BOARD_ORDER,
    QUADRANTS,
    Bucket,
    Category,
    category_for_bucket,
    default_category_for,
    parse_bucket,
    parse_category,
    resolve_bucket,
)

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    # Taxonomy
    "Bucket",
    "Category",
    "BOARD_ORDER",
    "QUADRANTS",
    "category_for_bucket",
    "default_category_for",
    "parse_bucket",
    "parse_category",
    "resolve_bucket",
    # Errors
    "BoardError",
    "ValidationError",
    "InvalidBucket",
    "NotFound",
    "StorageError",
]
