"""Database connection management for the SQLite board.

Connections are opened explicitly and handed to the repository that owns
them; there is no process-wide connection. Each connection runs in
autocommit mode so that transactions are delimited only by the explicit
BEGIN/COMMIT issued from ``SqliteTaskRepository.transaction()``.
"""

from __future__ import annotations

import logging
import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from eisenboard.adapters.sqlite.migrations.m001_initial_schema import ALL_MIGRATIONS
from eisenboard.adapters.sqlite.migrations.runner import MigrationRunner
from eisenboard.models import StorageError

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"
DEFAULT_DB_NAME = "board.db"


def default_db_path() -> Path:
    """Return the default database location under the user data dir."""
    return Path(user_data_dir("eisenboard")) / DEFAULT_DB_NAME


def open_connection(
    db_path: str | Path | None = None,
    *,
    timeout: float = 30.0,
    migrate: bool = True,
) -> sqlite3.Connection:
    """Open a configured connection to the board database.

    Provides:
    - Automatic directory creation
    - Owner-only file permissions on a new database
    - WAL mode for concurrent readers alongside one writer
    - Autocommit mode (explicit transactions only)
    - Schema migrations applied on open

    Args:
        db_path: Path to database file, ":memory:", or None for the default location
        timeout: Seconds to wait for another writer's lock before failing
        migrate: Whether to run pending migrations

    Returns:
        sqlite3.Connection object configured for board usage

    Raises:
        StorageError: If the file cannot be created, configured or migrated
    """
    if db_path is None:
        db_path = default_db_path()

    is_memory = str(db_path) == MEMORY_DB
    is_new_database = False

    try:
        if not is_memory:
            db_path = Path(db_path)
            db_path.parent.mkdir(parents=True, exist_ok=True)
            is_new_database = not db_path.exists()

        connection = sqlite3.connect(
            str(db_path),
            timeout=timeout,
            isolation_level=None,
            check_same_thread=False,
        )
    except (sqlite3.Error, OSError) as e:
        raise StorageError(f"cannot open database {db_path}: {e}") from e
    connection.row_factory = sqlite3.Row

    try:
        if not is_memory:
            connection.execute("PRAGMA journal_mode = WAL")
            if is_new_database:
                os.chmod(db_path, 0o600)

        if migrate:
            applied = MigrationRunner(connection).migrate(ALL_MIGRATIONS)
            if applied:
                logger.info("database %s migrated (%d migration(s))", db_path, applied)
    except (sqlite3.Error, OSError) as e:
        connection.close()
        raise StorageError(f"cannot prepare database {db_path}: {e}") from e
    except BaseException:
        connection.close()
        raise

    return connection
