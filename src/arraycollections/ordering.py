"""Natural ordering and the key sort used by sorted collections."""

from __future__ import annotations

import datetime
import numbers
import re
from functools import cmp_to_key
from typing import TYPE_CHECKING, Any, TypeVar

from arraycollections.capabilities import Comparable

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

T = TypeVar("T")

_DIGITS = re.compile(r"(\d+)")

# Rank of each naturally comparable group; lower ranks sort first
_NUMBER_RANK = 0
_STRING_RANK = 1
_TEMPORAL_RANK = 2
_COMPARABLE_RANK = 3


def _rank(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    # Decimal registers only as numbers.Number; complex numbers have no order
    if isinstance(value, numbers.Real) or (
        isinstance(value, numbers.Number) and not isinstance(value, numbers.Complex)
    ):
        return _NUMBER_RANK
    if isinstance(value, str):
        return _STRING_RANK
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return _TEMPORAL_RANK
    if isinstance(value, Comparable):
        return _COMPARABLE_RANK
    return None


def is_naturally_comparable(value: object) -> bool:
    """Return True if value takes part in natural ordering.

    Real numbers and other non-complex numbers such as ``Decimal`` (not
    booleans), strings, dates and times, and
    :class:`~arraycollections.capabilities.Comparable` instances do.
    """
    return _rank(value) is not None


def natural_string_key(text: str) -> tuple[tuple[tuple[int, Any], ...], str]:
    """Return a sort key that orders runs of digits by numeric value.

    ``"item2"`` sorts before ``"item10"``. The raw text breaks ties such as
    ``"01"`` and ``"1"``.
    """
    # \d matches decimal digits only; isdigit() also accepts "²", which int() rejects
    chunks = tuple((0, int(chunk)) if chunk.isdecimal() else (1, chunk) for chunk in _DIGITS.split(text) if chunk)
    return chunks, text


def _is_aware(value: object) -> bool:
    # date has no utcoffset; datetime and time return None when naive
    utcoffset = getattr(value, "utcoffset", None)
    return utcoffset is not None and utcoffset() is not None


def _three_way(first: Any, second: Any) -> int:
    if first < second:
        return -1
    if first > second:
        return 1
    return 0


def natural_compare(first: object, second: object) -> int:
    """Three-way compare two naturally comparable values.

    Numbers sort before strings, strings before temporal values and
    temporal values before ``Comparable`` instances. Within a group values
    compare by their own order. Strings compare numeric-aware.

    Raises:
        TypeError: If either value is not naturally comparable
    """
    first_rank = _rank(first)
    second_rank = _rank(second)
    if first_rank is None or second_rank is None:
        raise TypeError(
            f"natural ordering not supported between instances of "
            f"{type(first).__name__!r} and {type(second).__name__!r}"
        )

    if first_rank != second_rank:
        return -1 if first_rank < second_rank else 1

    if first_rank == _STRING_RANK:
        return _three_way(natural_string_key(first), natural_string_key(second))  # type: ignore[arg-type]
    if first_rank == _TEMPORAL_RANK and (type(first) is not type(second) or _is_aware(first) != _is_aware(second)):
        # Mixed temporal types, or naive against aware values, do not compare with each other
        return _three_way(first.isoformat(), second.isoformat())  # type: ignore[attr-defined]
    if first_rank == _COMPARABLE_RANK:
        return first.compare_to(second)  # type: ignore[attr-defined]
    return _three_way(first, second)


def sort_keys(
    items: Iterable[T],
    comparator: Callable[[Any, Any], int] | None = None,
    key: Callable[[T], Any] | None = None,
) -> list[T]:
    """Return items in sorted-collection order.

    Args:
        items: Keys, or records holding keys
        comparator: Three-way compare applied to every key. When given it
            decides the whole order.
        key: Extracts the key from each item (default: the item itself)

    Returns:
        With a comparator, all items sorted by it. Without one, the
        naturally comparable keys in natural order, followed by all other
        keys in their original relative order.
    """
    items = list(items)
    get_key = key if key is not None else (lambda item: item)

    if comparator is not None:
        return sorted(items, key=cmp_to_key(lambda a, b: comparator(get_key(a), get_key(b))))

    comparable = [item for item in items if is_naturally_comparable(get_key(item))]
    other = [item for item in items if not is_naturally_comparable(get_key(item))]
    comparable.sort(key=cmp_to_key(lambda a, b: natural_compare(get_key(a), get_key(b))))
    return comparable + other
