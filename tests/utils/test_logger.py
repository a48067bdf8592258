"""Tests for the application logger."""

import logging
import logging.handlers

from eisenboard.utils.logger import get_logger


def test_logger_is_singleton():
    assert get_logger() is get_logger()


def test_logger_writes_rotating_file(isolated_dirs):
    logger = get_logger()

    logger.info("hello board")
    for handler in logger.handlers:
        handler.flush()

    handlers = [h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
    assert len(handlers) == 1
    assert handlers[0].maxBytes == 5 * 1024 * 1024
    assert handlers[0].backupCount == 3
    assert "hello board" in (isolated_dirs / "logs" / "eisenboard.log").read_text()


def test_logger_does_not_propagate():
    assert get_logger().propagate is False


def test_child_loggers_reach_the_file(isolated_dirs):
    get_logger()
    logging.getLogger("eisenboard.services.task_service").info("from a module")
    assert "from a module" in (isolated_dirs / "logs" / "eisenboard.log").read_text()


def test_level_applies_to_existing_logger():
    get_logger()
    assert get_logger("WARNING").level == logging.WARNING
    assert get_logger().level == logging.WARNING
