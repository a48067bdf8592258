"""Decorators and argument helpers for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer

from eisenboard.config import get_config_manager
from eisenboard.models import BoardError, Bucket, InvalidBucket, parse_bucket
from eisenboard.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    exit_code_for,
    get_exit_code_name,
)
from eisenboard.utils.logger import get_logger
from eisenboard.utils.ui.formatters import OUTPUT_FORMATS, format_error

# Short column ids accepted wherever a bucket is expected.
BUCKET_ALIASES = {
    "ui": Bucket.URGENT_IMPORTANT,
    "uni": Bucket.URGENT_NOT_IMPORTANT,
    "nui": Bucket.NOT_URGENT_IMPORTANT,
    "nun": Bucket.NOT_URGENT_NOT_IMPORTANT,
    "today": Bucket.TODAY,
}


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def bucket_arg(value: str) -> Bucket | str:
    """Expand a short alias to its bucket; other tokens pass through untouched.

    Unknown tokens are left for the service, which rejects them or applies the
    configured fallback.
    """
    alias = BUCKET_ALIASES.get(value.strip().lower())
    if alias is not None:
        return alias
    try:
        return parse_bucket(value)
    except InvalidBucket:
        return value


def resolve_output(output: str | None, json_opt: bool = False) -> str:
    """Pick the output format from --json, --output, then the config default."""
    if json_opt:
        return "json"
    if output is None:
        output = get_config_manager().config.output.format
    if output not in OUTPUT_FORMATS:
        raise AppError(
            f"Unknown output format {output!r} (choose from {', '.join(OUTPUT_FORMATS)})",
            exit_code=ERROR_INVALID_ARGS,
        )
    return output


def command_wrapper(_func: Callable | None = None):
    """Decorator to wrap command functions with common functionality.

    Runs coroutine commands on a fresh event loop, logs start, completion and
    failure with elapsed time, and turns domain errors into exit codes.
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger(get_config_manager().config.logging.level)
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)
            try:
                if inspect.iscoroutinefunction(func):
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)

                elapsed = time.monotonic() - start
                logger.info("command completed: %s (%.3fs)", cmd, elapsed)
                return result

            except (AppError, BoardError) as e:
                elapsed = time.monotonic() - start
                code = e.exit_code if isinstance(e, AppError) else exit_code_for(e)
                logger.error(
                    "command failed: %s (%.3fs) %s - %s",
                    cmd,
                    elapsed,
                    get_exit_code_name(code),
                    str(e),
                )
                format_error(str(e))
                raise typer.Exit(code=code) from e

            except typer.Exit:
                # Re-raise Typer's own exits (like --help or explicit Exit(0))
                raise

            except Exception as e:
                elapsed = time.monotonic() - start
                logger.error(
                    "command failed: %s (%.3fs) %s - %s\n%s",
                    cmd,
                    elapsed,
                    get_exit_code_name(ERROR_GENERAL),
                    str(e),
                    traceback.format_exc(),
                )
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=ERROR_GENERAL) from e

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
