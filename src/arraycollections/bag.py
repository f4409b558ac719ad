from __future__ import annotations

from collections.abc import Collection
from typing import TYPE_CHECKING, TypeVar

from arraycollections.capabilities import Clearable, Growable
from arraycollections.hashmap import HashMap
from arraycollections.sets import HashSet

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

T = TypeVar("T")


class HashBag(Collection[T], Growable[T], Clearable):
    """A collection that counts how many copies of each element it holds.

    Copy counts are kept in a :class:`HashMap`, so elements of any type can
    be counted. ``len()`` is the total number of copies.
    """

    _counts: HashMap[T, int]

    def __init__(self, elements: Iterable[T] | None = None) -> None:
        self._counts = HashMap()
        if elements is not None:
            self.add_all(elements)

    def add(self, element: T) -> None:
        """Add one copy of element."""
        self.add_copies(element, 1)

    def add_copies(self, element: T, copies: int) -> None:
        """Add copies more copies of element.

        Raises:
            ValueError: If copies is negative
        """
        if copies < 0:
            raise ValueError("copies must be non-negative")
        if copies == 0:
            return
        self._counts.put(element, self._counts.get(element, 0) + copies)

    def set_copies(self, element: T, copies: int) -> None:
        """Set the number of copies of element, removing it when copies is 0.

        Raises:
            ValueError: If copies is negative
        """
        if copies < 0:
            raise ValueError("copies must be non-negative")
        if copies == 0:
            self._counts.remove(element)
        else:
            self._counts.put(element, copies)

    def get_copies(self, element: object) -> int:
        """Return the number of copies of element held (0 if none)."""
        return self._counts.get(element, 0)

    def remove(self, element: object) -> None:
        """Remove one copy of element, if there is one."""
        self.remove_copies(element, 1)

    def remove_copies(self, element: object, copies: int) -> None:
        """Remove up to copies copies of element.

        Raises:
            ValueError: If copies is negative
        """
        if copies < 0:
            raise ValueError("copies must be non-negative")
        held = self._counts.get(element, 0)
        if copies < held:
            self._counts.put(element, held - copies)  # type: ignore[arg-type]
        else:
            self._counts.remove(element)

    def remove_all_copies(self, element: object) -> None:
        """Remove every copy of element."""
        self._counts.remove(element)

    def remove_all(self, elements: Iterable[object]) -> None:
        """Remove every copy of each of elements."""
        self._counts.remove_all(elements)

    def retain_all(self, elements: Iterable[object]) -> None:
        """Remove every copy of the elements that are not among elements."""
        keep = HashSet(elements)
        for element in list(self._counts):
            if not keep.contains(element):
                self._counts.remove(element)

    def contains(self, element: object) -> bool:
        return self._counts.contains_key(element)

    def contains_all(self, elements: Iterable[object]) -> bool:
        return self._counts.contains_keys(elements)

    def clear(self) -> None:
        self._counts.clear()

    def unique(self) -> HashSet[T]:
        """Return a new set of the distinct elements."""
        return self._counts.key_set()

    def to_list(self) -> list[T]:
        """Return every copy of every element as a new ``list``, copies grouped together."""
        return list(self)

    def __contains__(self, element: object) -> bool:
        return self._counts.contains_key(element)

    def __iter__(self) -> Iterator[T]:
        for entry in self._counts.entries():
            for _ in range(entry.value):
                yield entry.key

    def __len__(self) -> int:
        return sum(entry.value for entry in self._counts.entries())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HashBag):
            return NotImplemented
        return self._counts == other._counts

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"HashBag({self.to_list()!r})"
