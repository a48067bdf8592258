"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import AsyncIterator, Iterable, Iterator
from contextlib import asynccontextmanager, contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

import pydantic

from eisenboard.adapters.sqlite.connection import open_connection
from eisenboard.adapters.sqlite.utils import (
    SQLITE_INT_MAX,
    fits_integer,
    format_timestamp,
    parse_datetime,
    row_to_dict,
)
from eisenboard.models import (
    Bucket,
    InvalidBucket,
    StorageError,
    Task,
    TaskCreate,
    TaskUpdate,
    ValidationError,
    parse_bucket,
    parse_category,
)
from eisenboard.repositories import TaskRepository

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(action: str) -> Iterator[None]:
    """Re-raise sqlite3 failures as StorageError."""
    try:
        yield
    except sqlite3.Error as e:
        raise StorageError(f"{action} failed: {e}") from e


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of task repository.

    The repository owns one connection. ``transaction()`` issues
    ``BEGIN IMMEDIATE`` so the write lock is held from the first read, which
    keeps a max(position)+1 read and the following insert atomic against
    other writers.
    """

    def __init__(self, connection: sqlite3.Connection):
        """Initialize SQLite task repository.

        Args:
            connection: Autocommit-mode connection (see ``open_connection``)
        """
        self.connection = connection
        self._depth = 0

    @classmethod
    def open(
        cls, db_path: str | Path | None = None, *, timeout: float = 30.0
    ) -> SqliteTaskRepository:
        """Open a connection at ``db_path`` (migrating it) and wrap it.

        Raises:
            StorageError: If the database cannot be opened or migrated
        """
        return cls(open_connection(db_path, timeout=timeout))

    def close(self) -> None:
        """Close the underlying connection."""
        self.connection.close()

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Open a transaction, or join the one already open."""
        if self._depth:
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
            return

        with _storage_errors("begin transaction"):
            self.connection.execute("BEGIN IMMEDIATE")
        self._depth = 1
        try:
            yield
        except BaseException:
            self._rollback()
            raise
        else:
            try:
                self.connection.execute("COMMIT")
            except sqlite3.Error as e:
                self._rollback()
                raise StorageError(f"commit failed: {e}") from e
        finally:
            self._depth = 0

    def _rollback(self) -> None:
        if not self.connection.in_transaction:
            return
        # The caller re-raises the error that triggered the rollback.
        try:
            self.connection.execute("ROLLBACK")
        except sqlite3.Error:
            logger.exception("rollback failed")

    def _row_to_task(self, row: sqlite3.Row) -> Task:
        data = row_to_dict(row)
        try:
            return Task(
                id=int(data["id"]),
                title=data["title"],
                category=parse_category(data["category"]),
                bucket=parse_bucket(data["bucket"]),
                completed=bool(data["completed"]),
                position=int(data["position"]),
                created_at=parse_datetime(data["created_at"]),
                updated_at=parse_datetime(data["updated_at"]),
            )
        except (InvalidBucket, pydantic.ValidationError) as e:
            raise StorageError(f"corrupt task row {data.get('id')}: {e}") from e

    async def get(self, task_id: int) -> Task | None:
        """Get a specific task by ID."""
        if not fits_integer(task_id):
            return None
        with _storage_errors("get task"):
            row = self.connection.execute(
                "SELECT * FROM tasks WHERE id = ?", (int(task_id),)
            ).fetchone()
        return self._row_to_task(row) if row else None

    async def add(self, task_data: TaskCreate, now: datetime) -> Task:
        """Create a new task."""
        stamp = format_timestamp(now)
        with _storage_errors("insert task"):
            cursor = self.connection.execute(
                """INSERT INTO tasks (
                    title, category, bucket, completed, position, created_at, updated_at
                ) VALUES (?, ?, ?, 0, ?, ?, ?)""",
                (
                    task_data.title,
                    task_data.category.value,
                    task_data.bucket.value,
                    task_data.position,
                    stamp,
                    stamp,
                ),
            )
        task_id = cursor.lastrowid
        if task_id is None:
            raise StorageError("SQLite did not return lastrowid for task insert")

        return Task(
            id=int(task_id),
            title=task_data.title,
            category=task_data.category,
            bucket=task_data.bucket,
            completed=False,
            position=task_data.position,
            created_at=parse_datetime(stamp),
            updated_at=parse_datetime(stamp),
        )

    async def update(self, task_id: int, updates: TaskUpdate, now: datetime) -> bool:
        """Update an existing task."""
        if not fits_integer(task_id):
            return False
        if updates.position is not None and not fits_integer(updates.position):
            raise ValidationError(f"Position out of range: {updates.position}", updates.position)
        # json mode turns Bucket/Category members into their tokens
        update_dict = updates.model_dump(exclude_none=True, mode="json")

        set_parts = []
        params: list[Any] = []
        for key, value in update_dict.items():
            if isinstance(value, bool):
                value = int(value)
            set_parts.append(f"{key} = ?")
            params.append(value)

        # Always update updated_at
        set_parts.append("updated_at = ?")
        params.append(format_timestamp(now))

        query = f"UPDATE tasks SET {', '.join(set_parts)} WHERE id = ?"
        params.append(int(task_id))

        with _storage_errors("update task"):
            cursor = self.connection.execute(query, params)
        return cursor.rowcount > 0

    async def delete(self, task_id: int) -> bool:
        """Delete a task (hard delete, no position compaction)."""
        if not fits_integer(task_id):
            return False
        with _storage_errors("delete task"):
            cursor = self.connection.execute(
                "DELETE FROM tasks WHERE id = ?", (int(task_id),)
            )
        return cursor.rowcount > 0

    async def max_position(self, bucket: Bucket) -> int:
        """Return the highest position in a bucket (0 when empty)."""
        with _storage_errors("read max position"):
            row = self.connection.execute(
                "SELECT COALESCE(MAX(position), 0) FROM tasks WHERE bucket = ?",
                (bucket.value,),
            ).fetchone()
        return int(row[0])

    async def set_positions(
        self, assignments: Iterable[tuple[int, int]], now: datetime
    ) -> int:
        """Assign positions by id, skipping ids that no longer exist."""
        stamp = format_timestamp(now)
        updated = 0
        with _storage_errors("set positions"):
            for task_id, position in assignments:
                if not fits_integer(task_id):
                    continue
                cursor = self.connection.execute(
                    "UPDATE tasks SET position = ?, updated_at = ? WHERE id = ?",
                    (int(position), stamp, int(task_id)),
                )
                updated += cursor.rowcount
        return updated

    async def list_all(self, *, include_completed: bool = True) -> list[Task]:
        """List tasks ordered by bucket, position and id."""
        query = "SELECT * FROM tasks"
        if not include_completed:
            query += " WHERE completed = 0"
        query += " ORDER BY bucket, position ASC, id ASC"

        with _storage_errors("list tasks"):
            rows = self.connection.execute(query).fetchall()
        return [self._row_to_task(row) for row in rows]

    async def list_completed(self, limit: int = 100) -> list[Task]:
        """List completed tasks, most recently updated first."""
        with _storage_errors("list completed tasks"):
            rows = self.connection.execute(
                """SELECT * FROM tasks
                   WHERE completed = 1
                   ORDER BY updated_at DESC, id DESC
                   LIMIT ?""",
                (min(int(limit), SQLITE_INT_MAX),),
            ).fetchall()
        return [self._row_to_task(row) for row in rows]
