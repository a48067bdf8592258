"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real config, data and log
directories. Every test gets its own board database under *tmp_path*.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

import eisenboard.config as config_module
import eisenboard.utils.logger as logger_module
from eisenboard.adapters.sqlite import SqliteTaskRepository
from eisenboard.config import DB_ENV_VAR
from eisenboard.services import TaskService


def _drop_log_handlers() -> None:
    app_logger = logging.getLogger("eisenboard")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.setLevel(logging.NOTSET)
    app_logger.propagate = True


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point platformdirs lookups at *tmp_path* and reset module singletons."""
    config_dir = str(tmp_path / "config")
    data_dir = str(tmp_path / "data")
    log_dir = str(tmp_path / "logs")

    monkeypatch.delenv(DB_ENV_VAR, raising=False)
    config_module._config_manager = None
    logger_module._logger = None
    _drop_log_handlers()

    with (
        patch("eisenboard.config.user_config_dir", return_value=config_dir),
        patch("eisenboard.config.user_data_dir", return_value=data_dir),
        patch("eisenboard.utils.logger.user_log_dir", return_value=log_dir),
    ):
        yield tmp_path

    config_module._config_manager = None
    logger_module._logger = None
    _drop_log_handlers()


@pytest.fixture()
def db_path(tmp_path):
    return tmp_path / "board.db"


@pytest.fixture()
def repository(db_path):
    """A migrated SQLite repository on a temp file."""
    repo = SqliteTaskRepository.open(db_path)
    yield repo
    repo.close()


@pytest.fixture()
def service(repository):
    """A strict TaskService (unknown buckets are rejected)."""
    return TaskService(repository)
