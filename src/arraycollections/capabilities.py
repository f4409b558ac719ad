"""Capability traits composed by the concrete collection types.

Optional operations are grouped by capability instead of living on one wide
interface. A type supports an operation because it mixes in the trait that
declares it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

T = TypeVar("T")


class Comparable(ABC):
    """A type with a natural ordering among its own instances."""

    @abstractmethod
    def compare_to(self, other: Any) -> int:
        """Return a negative, zero or positive number as self is less than, equal to or greater than other."""


class Comparator(ABC, Generic[T]):
    """A three-way comparison that can be handed to a sorted collection.

    Instances are callable, so a plain ``(a, b) -> int`` function can be used
    anywhere a comparator is expected.
    """

    @abstractmethod
    def compare(self, first: T, second: T) -> int:
        """Return a negative, zero or positive number as first sorts before, with or after second."""

    def __call__(self, first: T, second: T) -> int:
        return self.compare(first, second)


class Growable(ABC, Generic[T]):
    """Elements can be appended."""

    @abstractmethod
    def add(self, element: T) -> None:
        """Add element to the collection."""

    def add_all(self, elements: Iterable[T]) -> None:
        """Add every element of elements, in iteration order.

        Args:
            elements: Elements to add. Materialized first, so passing the
                collection itself is safe.
        """
        for element in list(elements):
            self.add(element)


class Indexable(ABC, Generic[T]):
    """Elements are addressed by contiguous integer positions."""

    @abstractmethod
    def __len__(self) -> int: ...

    @abstractmethod
    def get(self, index: int) -> T:
        """Return the element at index."""

    @abstractmethod
    def set(self, index: int, element: T) -> None:
        """Replace the element at index."""

    @abstractmethod
    def insert(self, index: int, element: T) -> None:
        """Insert element before index."""

    @abstractmethod
    def drop(self, index: int) -> None:
        """Remove the element at index."""

    def index_of(self, element: object) -> int | None:
        """Return the position of the first element matching element, or None."""
        for i in range(len(self)):
            if matches(self.get(i), element):
                return i
        return None

    def last_index_of(self, element: object) -> int | None:
        """Return the position of the last element matching element, or None."""
        for i in range(len(self) - 1, -1, -1):
            if matches(self.get(i), element):
                return i
        return None


class Clearable(ABC):
    """All elements can be removed at once."""

    @abstractmethod
    def __len__(self) -> int: ...

    @abstractmethod
    def clear(self) -> None:
        """Remove every element."""

    def is_empty(self) -> bool:
        """Return True if the collection holds no elements."""
        return len(self) == 0


class Sortable(ABC, Generic[T]):
    """Keys or elements are kept in a total order."""

    @abstractmethod
    def comparator(self) -> Callable[[T, T], int] | None:
        """Return the comparator in use, or None for natural ordering."""


def matches(candidate: object, element: object) -> bool:
    """Return True if candidate and element are the same element.

    Values of the same type compare by value. Types that keep the default
    ``object.__eq__`` therefore compare by identity, and values of different
    types (``1``, ``1.0``, ``True``) never match.
    """
    return candidate is element or (type(candidate) is type(element) and candidate == element)
