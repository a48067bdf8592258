"""Bucket taxonomy: the five board buckets and the four quadrant categories.

A bucket is where a task lives; a category is the quadrant colour it carries.
The four quadrant buckets share their names with the categories, so a task in
a quadrant bucket always has ``category == bucket``. ``Today`` has no category
of its own and keeps whatever the task had before it moved there.

The enum values are the canonical tokens persisted in the store and accepted
from the outside world. ``parse_bucket``/``parse_category`` are the only way
in, ``.value`` the only way out.
"""

from __future__ import annotations

import logging
from enum import StrEnum

from .exceptions import InvalidBucket

logger = logging.getLogger(__name__)


class Category(StrEnum):
    """Quadrant classification, used for colour coding."""

    URGENT_IMPORTANT = "UrgentImportant"
    URGENT_NOT_IMPORTANT = "UrgentNotImportant"
    NOT_URGENT_IMPORTANT = "NotUrgentImportant"
    NOT_URGENT_NOT_IMPORTANT = "NotUrgentNotImportant"


class Bucket(StrEnum):
    """Container a task currently resides in."""

    URGENT_IMPORTANT = "UrgentImportant"
    URGENT_NOT_IMPORTANT = "UrgentNotImportant"
    NOT_URGENT_IMPORTANT = "NotUrgentImportant"
    NOT_URGENT_NOT_IMPORTANT = "NotUrgentNotImportant"
    TODAY = "Today"

    @property
    def is_quadrant(self) -> bool:
        return self is not Bucket.TODAY


# Board order used for listing and rendering (Today sits in the middle column).
BOARD_ORDER: tuple[Bucket, ...] = (
    Bucket.URGENT_IMPORTANT,
    Bucket.URGENT_NOT_IMPORTANT,
    Bucket.TODAY,
    Bucket.NOT_URGENT_IMPORTANT,
    Bucket.NOT_URGENT_NOT_IMPORTANT,
)

QUADRANTS: tuple[Bucket, ...] = tuple(b for b in Bucket if b.is_quadrant)

_BUCKET_TO_CATEGORY: dict[Bucket, Category | None] = {
    Bucket.URGENT_IMPORTANT: Category.URGENT_IMPORTANT,
    Bucket.URGENT_NOT_IMPORTANT: Category.URGENT_NOT_IMPORTANT,
    Bucket.NOT_URGENT_IMPORTANT: Category.NOT_URGENT_IMPORTANT,
    Bucket.NOT_URGENT_NOT_IMPORTANT: Category.NOT_URGENT_NOT_IMPORTANT,
    Bucket.TODAY: None,
}

# Today has no intrinsic quadrant; tasks created directly there get this one.
TODAY_DEFAULT_CATEGORY = Category.URGENT_IMPORTANT


def category_for_bucket(bucket: Bucket) -> Category | None:
    """Return the category matching a quadrant bucket, or None for Today."""
    return _BUCKET_TO_CATEGORY[bucket]


def default_category_for(bucket: Bucket) -> Category:
    """Return the category a newly created task in ``bucket`` starts with."""
    return category_for_bucket(bucket) or TODAY_DEFAULT_CATEGORY


def parse_bucket(name: str) -> Bucket:
    """Parse a canonical bucket token.

    Args:
        name: One of the five bucket names (surrounding whitespace ignored)

    Returns:
        The matching Bucket

    Raises:
        InvalidBucket: If the token names no bucket
    """
    if isinstance(name, str):
        try:
            return Bucket(name.strip())
        except ValueError:
            pass
    raise InvalidBucket(name)


def parse_category(name: str) -> Category:
    """Parse a canonical category token, raising InvalidBucket on failure."""
    if isinstance(name, str):
        try:
            return Category(name.strip())
        except ValueError:
            pass
    raise InvalidBucket(name, kind="category")


def resolve_bucket(value: Bucket | str, *, fallback: Bucket | None = None) -> Bucket:
    """Turn external input into a Bucket.

    With ``fallback`` unset an unknown token raises InvalidBucket. With a
    fallback bucket configured the legacy lenient behaviour applies: the
    token is logged and the fallback is returned instead.
    """
    if isinstance(value, Bucket):
        return value
    try:
        return parse_bucket(value)
    except InvalidBucket:
        if fallback is None:
            raise
        logger.warning("unknown bucket %r, falling back to %s", value, fallback.value)
        return fallback
