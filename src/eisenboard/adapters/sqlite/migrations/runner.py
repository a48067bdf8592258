"""Forward-only schema migrations for the board database.

Applied versions are recorded in ``schema_version``. A migration and its
version row commit together, so a failed step leaves the board at the
previous version.
"""

from __future__ import annotations

import logging
import sqlite3
from abc import ABC, abstractmethod
from collections.abc import Iterable

from eisenboard.models import StorageError
from eisenboard.utils.timestamps import now_utc

logger = logging.getLogger(__name__)

CREATE_SCHEMA_VERSION_TABLE = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    description TEXT NOT NULL,
    applied_at TEXT NOT NULL
)
"""


class Migration(ABC):
    """One forward step of the board schema.

    Subclasses set ``version`` (sequential, starting at 1) and
    ``description`` and implement ``up``.
    """

    version: int
    description: str

    @abstractmethod
    def up(self, connection: sqlite3.Connection) -> None:
        """Apply the step. Runs inside the runner's transaction."""


class MigrationRunner:
    """Brings a board database up to the latest schema version.

    The connection must be in autocommit mode. Every step runs in its own
    ``BEGIN IMMEDIATE``, and the version is re-read under that lock, so two
    processes opening the same fresh database apply each step once.
    """

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        try:
            connection.execute(CREATE_SCHEMA_VERSION_TABLE)
        except sqlite3.Error as e:
            raise StorageError(f"cannot prepare schema_version: {e}") from e

    @property
    def version(self) -> int:
        """Highest applied version (0 for a fresh database)."""
        row = self.connection.execute(
            "SELECT COALESCE(MAX(version), 0) FROM schema_version"
        ).fetchone()
        return int(row[0])

    def apply(self, migration: Migration) -> bool:
        """Apply one migration unless the database already has it.

        Returns:
            True if the migration ran, False if it was already applied

        Raises:
            StorageError: If the migration fails (nothing is applied)
        """
        try:
            self.connection.execute("BEGIN IMMEDIATE")
            if migration.version <= self.version:
                self.connection.execute("ROLLBACK")
                return False

            migration.up(self.connection)
            self.connection.execute(
                "INSERT INTO schema_version (version, description, applied_at) VALUES (?, ?, ?)",
                (
                    migration.version,
                    migration.description,
                    now_utc().isoformat(timespec="microseconds"),
                ),
            )
            self.connection.execute("COMMIT")
        except Exception as e:
            if self.connection.in_transaction:
                self.connection.execute("ROLLBACK")
            raise StorageError(
                f"migration {migration.version:03d} ({migration.description}) failed: {e}"
            ) from e

        logger.info("applied migration %03d: %s", migration.version, migration.description)
        return True

    def migrate(self, migrations: Iterable[Migration]) -> int:
        """Apply every pending migration in version order.

        Returns:
            Number of migrations applied
        """
        current = self.version
        pending = sorted(
            (m for m in migrations if m.version > current), key=lambda m: m.version
        )
        return sum(1 for migration in pending if self.apply(migration))
