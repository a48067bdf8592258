"""Domain exceptions for the eisenboard core."""

from __future__ import annotations


class BoardError(Exception):
    """Base exception for all board errors."""


class ValidationError(BoardError):
    """Raised when user input fails a domain rule (e.g. a blank title)."""

    def __init__(self, message: str, value: object = None):
        super().__init__(message)
        self.value = value


class InvalidBucket(BoardError):
    """Raised when a token does not name a known bucket or category."""

    def __init__(self, token: object, kind: str = "bucket"):
        super().__init__(f"Unknown {kind}: {token!r}")
        self.token = token
        self.kind = kind


class NotFound(BoardError):
    """Raised when an operation references a task id absent from the store."""

    def __init__(self, task_id: int):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class StorageError(BoardError):
    """Raised when the record store fails; the operation has been rolled back."""
