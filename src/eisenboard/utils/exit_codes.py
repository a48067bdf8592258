"""
Exit codes for the eisenboard CLI.

Semantic exit codes so scripts driving the board can tell what went wrong.
"""

from eisenboard.models import InvalidBucket, NotFound, StorageError, ValidationError

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Storage failure (database locked, I/O error, constraint violation)
ERROR_STORAGE = 3

# Resource not found
ERROR_NOT_FOUND = 5


def get_exit_code_name(code: int) -> str:
    """Get the symbolic name of an exit code for log lines."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_STORAGE: "ERROR_STORAGE",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def exit_code_for(error: BaseException) -> int:
    """Map a domain error to its exit code."""
    if isinstance(error, (ValidationError, InvalidBucket)):
        return ERROR_INVALID_ARGS
    if isinstance(error, NotFound):
        return ERROR_NOT_FOUND
    if isinstance(error, StorageError):
        return ERROR_STORAGE
    return ERROR_GENERAL
