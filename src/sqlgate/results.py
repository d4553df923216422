"""Folding a list of rows (or affected-row counts) into a single result."""

from typing import TypeVar

from sqlgate.errors import MultipleResultsError, NoResultError

T = TypeVar("T")


def exactly_one(items: list[T]) -> T:
    """Return the only item. Raises NoResultError or MultipleResultsError otherwise."""
    if not items:
        raise NoResultError()
    if len(items) > 1:
        raise MultipleResultsError(len(items))
    return items[0]


def maybe_one(items: list[T]) -> T | None:
    """Return the only item, or None when there are zero or several.

    Several rows are treated the same as none, unlike :func:`exactly_one`.
    """
    if len(items) == 1:
        return items[0]
    return None
