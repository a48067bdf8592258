"""Ordering engine - position bookkeeping for board buckets.

Positions are a sparse, bucket-scoped sort key. Only ``reorder`` guarantees a
dense 1..N run; ``append`` leaves gaps alone and ``move`` may collide with an
existing position in the destination bucket.

Drag-and-drop clients are expected to follow a move with a reorder of the
destination bucket (two independent calls). The engine does not fuse them,
so a bucket may hold duplicate positions until that reorder
arrives. Listings break such ties by id.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from eisenboard.models import (
    Bucket,
    NotFound,
    Task,
    TaskUpdate,
    ValidationError,
    category_for_bucket,
    resolve_bucket,
)
from eisenboard.repositories import TaskRepository
from eisenboard.utils.timestamps import next_timestamp, now_utc

logger = logging.getLogger(__name__)

# Positions are stored as signed 64-bit integers.
MAX_POSITION = 2**63 - 1


class OrderingEngine:
    """Maintains per-bucket position sequences.

    Every method runs inside ``repository.transaction()``. When the caller
    already holds a transaction the engine joins it and leaves the commit to
    the caller.
    """

    def __init__(
        self, repository: TaskRepository, *, fallback_bucket: Bucket | None = None
    ):
        """Initialize the ordering engine.

        Args:
            repository: TaskRepository implementation for data access
            fallback_bucket: Bucket to use for unknown tokens; None rejects them
        """
        self.repository = repository
        self.fallback_bucket = fallback_bucket

    def resolve(self, bucket: Bucket | str) -> Bucket:
        """Resolve external bucket input under the configured policy."""
        return resolve_bucket(bucket, fallback=self.fallback_bucket)

    async def append(self, bucket: Bucket | str) -> int:
        """Return the next free position at the end of ``bucket``.

        Call this inside the same transaction as the insert that uses it.
        """
        target = self.resolve(bucket)
        async with self.repository.transaction():
            return await self.repository.max_position(target) + 1

    async def reorder(self, bucket: Bucket | str, ordered_ids: Sequence[int]) -> int:
        """Renumber the given ids as 1..N in list order.

        Ids missing from the store are skipped. The list is not checked
        against the bucket's full membership: a partial list renumbers only
        the supplied subset and may collide with untouched siblings.

        Returns:
            Number of rows updated
        """
        target = self.resolve(bucket)
        assignments = [
            (task_id, position) for position, task_id in enumerate(ordered_ids, start=1)
        ]

        async with self.repository.transaction():
            updated = await self.repository.set_positions(assignments, now_utc())

        logger.debug(
            "reordered %s: %d id(s) supplied, %d updated",
            target.value,
            len(assignments),
            updated,
        )
        return updated

    async def move(
        self,
        task_id: int,
        target_bucket: Bucket | str,
        target_index: int | None = None,
    ) -> Task:
        """Move a task to ``target_bucket`` at ``target_index`` (0-based).

        Moving into a quadrant recolours the task to that quadrant; moving
        into Today keeps its current category. Sibling positions are not
        shifted.

        Raises:
            InvalidBucket: If the target bucket is unknown (strict policy)
            ValidationError: If target_index is negative or past MAX_POSITION
            NotFound: If the task does not exist
        """
        target = self.resolve(target_bucket)
        if target_index is not None and target_index < 0:
            raise ValidationError(
                f"Target index must be >= 0, got {target_index}", target_index
            )
        if target_index is not None and target_index >= MAX_POSITION:
            raise ValidationError(
                f"Target index must be < {MAX_POSITION}, got {target_index}", target_index
            )
        position = (target_index or 0) + 1

        async with self.repository.transaction():
            task = await self.repository.get(task_id)
            if task is None:
                raise NotFound(task_id)

            # Quadrants recolour the task; Today (category None) keeps the old one
            category = category_for_bucket(target)
            updates = TaskUpdate(bucket=target, category=category, position=position)

            now = next_timestamp(task.updated_at)
            await self.repository.update(task_id, updates, now)

        logger.debug(
            "moved task %s: %s -> %s at position %d (category %s)",
            task_id,
            task.bucket.value,
            target.value,
            position,
            (category or task.category).value,
        )
        return task.model_copy(
            update={
                "bucket": target,
                "category": category or task.category,
                "position": position,
                "updated_at": now,
            }
        )
