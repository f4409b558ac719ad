from __future__ import annotations

import copy
import logging
from operator import itemgetter
from typing import TYPE_CHECKING, Any, TypeVar

from arraycollections.capabilities import Sortable
from arraycollections.errors import UnderflowError
from arraycollections.hashing import hash_key
from arraycollections.hashmap import HashMap
from arraycollections.ordering import sort_keys

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

K = TypeVar("K")
V = TypeVar("V")

logger = logging.getLogger(__name__)


class TreeMap(HashMap[K, V], Sortable[K]):
    """A map that keeps its keys sorted.

    Without a comparator the naturally comparable keys (numbers, strings,
    dates and times, ``Comparable`` instances) come first in natural order,
    followed by all other keys in the order they were first put. With a
    comparator, every key is ordered by it alone.

    The whole order is re-derived after each :meth:`put`.
    """

    _comparator: Callable[[K, K], int] | None

    def __init__(
        self,
        data: Mapping[K, V] | Iterable[tuple[K, V]] | None = None,
        comparator: Callable[[K, K], int] | None = None,
    ) -> None:
        """Initialize a sorted map from data.

        Args:
            data: Initial entries, as accepted by :class:`HashMap`
            comparator: Three-way compare ``(a, b) -> int`` for keys
                (optional, defaults to natural ordering)
        """
        self._comparator = comparator
        super().__init__()
        if data is not None:
            self.put_all(data)

    def comparator(self) -> Callable[[K, K], int] | None:
        """Return the comparator, or None for natural ordering."""
        return self._comparator

    def put(self, key: K, value: V) -> None:
        """Associate value with key and re-sort the keys.

        The new order is worked out before anything is stored, so a
        comparator that raises leaves the map unchanged.
        """
        token = hash_key(key)
        keys = dict(self._keys)
        keys[token] = key

        ordered = sort_keys(keys.items(), self._comparator, key=itemgetter(1))

        values = dict(self._values)
        values[token] = value
        self._keys = dict(ordered)
        self._values = {entry_token: values[entry_token] for entry_token, _ in ordered}

        logger.debug(
            "Reordered %d keys by %s",
            len(ordered),
            "comparator" if self._comparator is not None else "natural order",
        )

    def first_key(self) -> K:
        """Return the lowest key.

        Raises:
            UnderflowError: If the map is empty
        """
        if not self._keys:
            raise UnderflowError("first_key() on empty map")
        return next(iter(self._keys.values()))

    def last_key(self) -> K:
        """Return the highest key.

        Raises:
            UnderflowError: If the map is empty
        """
        if not self._keys:
            raise UnderflowError("last_key() on empty map")
        return next(reversed(self._keys.values()))

    def copy(self) -> TreeMap[K, V]:
        """Return an independent copy using the same comparator."""
        return TreeMap(self, self._comparator)

    def __deepcopy__(self, memo: dict[int, Any]) -> TreeMap[K, V]:
        return TreeMap(copy.deepcopy(self._pairs(), memo), self._comparator)

    def __reduce__(self) -> tuple[Any, ...]:
        """Pickle as key/value pairs plus the comparator, which must itself be picklable."""
        return TreeMap, (self._pairs(), self._comparator)

    def __repr__(self) -> str:
        body = ", ".join(f"{key!r}: {self._values[token]!r}" for token, key in self._keys.items())
        if self._comparator is None:
            return f"TreeMap({{{body}}})"
        return f"TreeMap({{{body}}}, comparator={self._comparator!r})"
