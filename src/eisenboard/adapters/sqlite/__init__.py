"""SQLite adapter module - Local database storage implementation."""

from eisenboard.adapters.sqlite.connection import default_db_path, open_connection
from eisenboard.adapters.sqlite.task_repository import SqliteTaskRepository

__all__ = [
    "SqliteTaskRepository",
    "default_db_path",
    "open_connection",
]
