from __future__ import annotations

from collections.abc import MutableSet
from typing import TYPE_CHECKING, TypeVar

from arraycollections.capabilities import Clearable, Growable, Sortable
from arraycollections.hashmap import HashMap
from arraycollections.treemap import TreeMap

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

T = TypeVar("T")


class HashSet(MutableSet[T], Growable[T], Clearable):
    """A set that accepts elements of any type, hashable or not.

    Elements are stored as the keys of a :class:`HashMap` whose values are
    the elements themselves, so two elements are the same when their tokens
    are.
    """

    _map: HashMap[T, T]

    def __init__(self, elements: Iterable[T] | None = None) -> None:
        self._map = self._new_map()
        if elements is not None:
            self.add_all(elements)

    def _new_map(self) -> HashMap[T, T]:
        return HashMap()

    def add(self, element: T) -> None:
        """Add element, replacing an element with the same token."""
        self._map.put(element, element)

    def discard(self, element: object) -> None:
        self._map.remove(element)

    def remove(self, element: object) -> None:
        """Remove element if present. Unlike ``set.remove`` a missing element is not an error."""
        self._map.remove(element)

    def remove_all(self, elements: Iterable[object]) -> None:
        self._map.remove_all(elements)

    def retain_all(self, elements: Iterable[object]) -> None:
        """Remove every element that is not one of elements."""
        keep = HashSet(elements)
        for element in list(self._map):
            if not keep.contains(element):
                self._map.remove(element)

    def contains(self, element: object) -> bool:
        return self._map.contains_key(element)

    def contains_all(self, elements: Iterable[object]) -> bool:
        return self._map.contains_keys(elements)

    def clear(self) -> None:
        self._map.clear()

    def to_list(self) -> list[T]:
        """Return the elements as a new ``list``, in set order."""
        return list(self._map)

    def copy(self) -> HashSet[T]:
        return HashSet(self)

    def __contains__(self, element: object) -> bool:
        return self._map.contains_key(element)

    def __iter__(self) -> Iterator[T]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_list()!r})"

    def __copy__(self) -> HashSet[T]:
        return self.copy()


class TreeSet(HashSet[T], Sortable[T]):
    """A set that keeps its elements sorted.

    The elements are the keys of a :class:`TreeMap`, so they follow its
    ordering rules.
    """

    _map: TreeMap[T, T]

    def __init__(self, elements: Iterable[T] | None = None, comparator: Callable[[T, T], int] | None = None) -> None:
        self._initial_comparator = comparator
        super().__init__(elements)

    def _new_map(self) -> TreeMap[T, T]:
        return TreeMap(comparator=self._initial_comparator)

    def comparator(self) -> Callable[[T, T], int] | None:
        """Return the comparator, or None for natural ordering."""
        return self._map.comparator()

    def first(self) -> T:
        """Return the lowest element.

        Raises:
            UnderflowError: If the set is empty
        """
        return self._map.first_key()

    def last(self) -> T:
        """Return the highest element.

        Raises:
            UnderflowError: If the set is empty
        """
        return self._map.last_key()

    def copy(self) -> TreeSet[T]:
        return TreeSet(self, self.comparator())
