"""Migration 001: the tasks table and its indexes."""

import sqlite3

from eisenboard.adapters.sqlite import schema

from .runner import Migration


class InitialSchemaMigration(Migration):
    version = 1
    description = "Initial database schema"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute(schema.CREATE_TASKS_TABLE)
        for index_sql in schema.ALL_INDEXES:
            connection.execute(index_sql)


ALL_MIGRATIONS: list[Migration] = [InitialSchemaMigration()]
