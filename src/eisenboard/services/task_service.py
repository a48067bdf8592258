"""Task service - Business logic for task operations.

This service layer sits between commands and the repository. It owns the
task lifecycle (create, toggle, edit, delete, list) and delegates all
position bookkeeping to the OrderingEngine. Every public operation is one
transaction against the store.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from eisenboard.config import Config, get_config_manager
from eisenboard.models import (
    BOARD_ORDER,
    Bucket,
    NotFound,
    Task,
    TaskCreate,
    TaskUpdate,
    ValidationError,
    default_category_for,
)
from eisenboard.repositories import TaskRepository
from eisenboard.services.ordering_service import OrderingEngine
from eisenboard.utils.timestamps import next_timestamp, now_utc

logger = logging.getLogger(__name__)


def _clean_title(title: str | None) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationError("Title required", title)
    return cleaned


class TaskService:
    """Service for task business logic.

    This service encapsulates the board's lifecycle rules and orchestrates
    task operations using the task repository and the ordering engine.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        *,
        fallback_bucket: Bucket | None = None,
    ):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
            fallback_bucket: Bucket substituted for unknown tokens (None = reject)
        """
        self.repository = task_repository
        self.ordering = OrderingEngine(task_repository, fallback_bucket=fallback_bucket)

    async def create_task(self, title: str, bucket: Bucket | str) -> Task:
        """Create a task at the end of ``bucket``.

        Quadrant buckets set the category to the bucket itself; Today starts
        tasks as UrgentImportant.

        Raises:
            ValidationError: If the title is blank (nothing is written)
            InvalidBucket: If the bucket is unknown under the strict policy
        """
        cleaned = _clean_title(title)
        target = self.ordering.resolve(bucket)

        async with self.repository.transaction():
            position = await self.ordering.append(target)
            task = await self.repository.add(
                TaskCreate(
                    title=cleaned,
                    category=default_category_for(target),
                    bucket=target,
                    position=position,
                ),
                now_utc(),
            )

        logger.info("created task %s in %s at position %d", task.id, target.value, position)
        return task

    async def get_task(self, task_id: int) -> Task:
        """Get a specific task by ID.

        Raises:
            NotFound: If the task does not exist
        """
        task = await self.repository.get(task_id)
        if task is None:
            raise NotFound(task_id)
        return task

    async def toggle_task(self, task_id: int) -> Task:
        """Flip a task's completion state; bucket and position are unchanged.

        Raises:
            NotFound: If the task does not exist
        """
        async with self.repository.transaction():
            task = await self.get_task(task_id)
            now = next_timestamp(task.updated_at)
            completed = not task.completed
            await self.repository.update(task_id, TaskUpdate(completed=completed), now)

        logger.info("task %s marked %s", task_id, "done" if completed else "open")
        return task.model_copy(update={"completed": completed, "updated_at": now})

    async def edit_task_title(self, task_id: int, title: str) -> None:
        """Replace a task's title.

        Raises:
            ValidationError: If the new title is blank
            NotFound: If the task does not exist
        """
        cleaned = _clean_title(title)

        async with self.repository.transaction():
            task = await self.get_task(task_id)
            await self.repository.update(
                task_id, TaskUpdate(title=cleaned), next_timestamp(task.updated_at)
            )

        logger.info("task %s retitled", task_id)

    async def delete_task(self, task_id: int) -> None:
        """Delete a task. Deleting a missing id is not an error.

        Positions of the remaining tasks are left as they are.
        """
        async with self.repository.transaction():
            removed = await self.repository.delete(task_id)

        if removed:
            logger.info("deleted task %s", task_id)
        else:
            logger.debug("delete of missing task %s ignored", task_id)

    async def reorder_bucket(self, bucket: Bucket | str, ordered_ids: Sequence[int]) -> None:
        """Renumber ``ordered_ids`` as 1..N (see OrderingEngine.reorder)."""
        await self.ordering.reorder(bucket, ordered_ids)

    async def move_task(
        self,
        task_id: int,
        target_bucket: Bucket | str,
        target_index: int | None = None,
    ) -> Task:
        """Move a task between buckets (see OrderingEngine.move).

        Clients should follow this with ``reorder_bucket`` on the destination
        to re-densify its positions.
        """
        task = await self.ordering.move(task_id, target_bucket, target_index)
        logger.info(
            "moved task %s to %s at position %d", task_id, task.bucket.value, task.position
        )
        return task

    async def list_grouped(self, include_completed: bool = True) -> dict[Bucket, list[Task]]:
        """Return every bucket (in board order) with its tasks sorted by position.

        Ties left behind by a move are broken by id.
        """
        tasks = await self.repository.list_all(include_completed=include_completed)

        board: dict[Bucket, list[Task]] = {bucket: [] for bucket in BOARD_ORDER}
        for task in tasks:
            board[task.bucket].append(task)
        for bucket_tasks in board.values():
            bucket_tasks.sort(key=lambda t: (t.position, t.id))
        return board

    async def list_board(self, include_completed: bool = False) -> dict[Bucket, list[Task]]:
        """Board view for rendering; completed tasks are hidden unless asked for."""
        return await self.list_grouped(include_completed=include_completed)

    async def list_completed(self, limit: int = 100) -> list[Task]:
        """Completed tasks, most recently updated first."""
        return await self.repository.list_completed(limit)


@contextmanager
def task_service_scope(config: Config | None = None) -> Iterator[TaskService]:
    """Open the board database, yield a TaskService, and close it afterwards.

    Args:
        config: Configuration to use; defaults to the active profile's config
    """
    from eisenboard.adapters.sqlite import SqliteTaskRepository

    manager = get_config_manager()
    if config is None:
        config = manager.config
        db_path = manager.db_path()
    else:
        db_path = config.storage.db_path or manager.db_path()

    repository = SqliteTaskRepository.open(db_path, timeout=config.storage.timeout)
    try:
        yield TaskService(repository, fallback_bucket=config.fallback)
    finally:
        repository.close()
