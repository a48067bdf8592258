"""Adapters module - Repository implementations for storage backends.

This package contains the concrete implementation (adapter) of the
repository interface:
- sqlite: Local SQLite database storage
"""

from .sqlite import SqliteTaskRepository

__all__ = [
    "SqliteTaskRepository",
]
