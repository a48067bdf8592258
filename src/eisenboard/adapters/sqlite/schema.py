"""Database schema definitions for the local SQLite board.

``bucket`` and ``category`` are stored as their canonical string tokens so
that the taxonomy's parse functions stay the single source of truth; the
CHECK constraints only mirror that closed set at the storage level.
"""

from __future__ import annotations

from eisenboard.models.taxonomy import Bucket, Category

# Schema version tracking
SCHEMA_VERSION = 1


def _token_list(values) -> str:
    return ",".join(f"'{v.value}'" for v in values)


# Tasks table - the only entity
CREATE_TASKS_TABLE = f"""
CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL CHECK(length(trim(title)) > 0),
    category TEXT NOT NULL CHECK(category IN ({_token_list(Category)})),
    bucket TEXT NOT NULL CHECK(bucket IN ({_token_list(Bucket)})),
    completed INTEGER NOT NULL DEFAULT 0,
    position INTEGER NOT NULL CHECK(position >= 1),
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

# Indexes
CREATE_INDEX_TASKS_BUCKET_POSITION = (
    "CREATE INDEX IF NOT EXISTS idx_tasks_bucket_position ON tasks(bucket, position)"
)
CREATE_INDEX_TASKS_COMPLETED = (
    "CREATE INDEX IF NOT EXISTS idx_tasks_completed ON tasks(completed, updated_at)"
)

ALL_INDEXES = [
    CREATE_INDEX_TASKS_BUCKET_POSITION,
    CREATE_INDEX_TASKS_COMPLETED,
]
