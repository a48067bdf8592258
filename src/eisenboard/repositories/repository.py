"""Repository abstraction layer for eisenboard.

This module defines the abstract base class (interface) for task persistence,
following the hexagonal architecture (Ports & Adapters) pattern.

The ordering engine only ever talks to this interface: point reads and
writes, filtered scans, and a transaction scope that groups several writes
into one atomic unit.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from contextlib import AbstractAsyncContextManager
from datetime import datetime

from eisenboard.models import Bucket, Task, TaskCreate, TaskUpdate


class TaskRepository(ABC):
    """Abstract base class for task persistence operations.

    Implementations must make ``transaction()`` re-entrant: a scope opened
    inside another scope joins it, and only the outermost scope commits or
    rolls back. Any store failure surfaces as ``StorageError``.
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open (or join) an atomic unit of work.

        Usage:
            async with repository.transaction():
                ...

        Raises:
            StorageError: If the transaction cannot be started or committed
        """
        raise NotImplementedError(
            "TaskRepository.transaction() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, task_id: int) -> Task | None:
        """Get a task by ID.

        Args:
            task_id: Unique identifier for the task

        Returns:
            Task object, or None if no row has that id
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def add(self, task_data: TaskCreate, now: datetime) -> Task:
        """Insert a new task row.

        Args:
            task_data: Fully resolved task fields (title, category, bucket, position)
            now: Timestamp used for both created_at and updated_at

        Returns:
            Created Task object with its store-assigned id
        """
        raise NotImplementedError("TaskRepository.add() must be implemented by adapter")

    @abstractmethod
    async def update(self, task_id: int, updates: TaskUpdate, now: datetime) -> bool:
        """Update the provided fields of a task and stamp updated_at.

        Returns:
            True if a row was updated, False if the id does not exist
        """
        raise NotImplementedError(
            "TaskRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, task_id: int) -> bool:
        """Delete a task row.

        Returns:
            True if a row was removed, False if the id did not exist
        """
        raise NotImplementedError(
            "TaskRepository.delete() must be implemented by adapter"
        )

    @abstractmethod
    async def max_position(self, bucket: Bucket) -> int:
        """Return the highest position in ``bucket``, or 0 if it is empty."""
        raise NotImplementedError(
            "TaskRepository.max_position() must be implemented by adapter"
        )

    @abstractmethod
    async def set_positions(
        self, assignments: Iterable[tuple[int, int]], now: datetime
    ) -> int:
        """Assign positions by id.

        Args:
            assignments: (task_id, position) pairs
            now: Timestamp stamped on every updated row

        Returns:
            Number of rows actually updated (unknown ids are skipped)
        """
        raise NotImplementedError(
            "TaskRepository.set_positions() must be implemented by adapter"
        )

    @abstractmethod
    async def list_all(self, *, include_completed: bool = True) -> list[Task]:
        """List tasks ordered by bucket, then position, then id."""
        raise NotImplementedError(
            "TaskRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def list_completed(self, limit: int = 100) -> list[Task]:
        """List completed tasks, most recently updated first."""
        raise NotImplementedError(
            "TaskRepository.list_completed() must be implemented by adapter"
        )

    def close(self) -> None:
        """Release any resources held by the repository."""
