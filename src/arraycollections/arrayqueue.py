from __future__ import annotations

from collections.abc import Collection
from typing import TYPE_CHECKING, TypeVar

from arraycollections.arraylist import ArrayList
from arraycollections.capabilities import Clearable, Growable

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

T = TypeVar("T")


class ArrayQueue(Collection[T], Growable[T], Clearable):
    """A first-in, first-out queue backed by an :class:`ArrayList`."""

    _list: ArrayList[T]

    def __init__(self, elements: Iterable[T] | None = None) -> None:
        self._list = ArrayList(elements)

    def add(self, element: T) -> None:
        """Add element to the tail of the queue."""
        self._list.add(element)

    def peek(self) -> T | None:
        """Return the head of the queue without removing it, or None if empty."""
        if not self._list:
            return None
        return self._list.get(0)

    def poll(self) -> T | None:
        """Remove and return the head of the queue, or None if empty."""
        if not self._list:
            return None
        head = self._list.get(0)
        self._list.drop(0)
        return head

    def remove(self, element: object) -> None:
        """Remove the first element matching element, if there is one."""
        self._list.remove(element)

    def remove_all(self, elements: Iterable[object]) -> None:
        self._list.remove_all(elements)

    def retain_all(self, elements: Iterable[object]) -> None:
        self._list.retain_all(elements)

    def contains(self, element: object) -> bool:
        return self._list.contains(element)

    def contains_all(self, elements: Iterable[object]) -> bool:
        return self._list.contains_all(elements)

    def clear(self) -> None:
        self._list.clear()

    def to_list(self) -> list[T]:
        """Return the elements, head first, as a new ``list``."""
        return self._list.to_list()

    def __contains__(self, element: object) -> bool:
        return element in self._list

    def __iter__(self) -> Iterator[T]:
        return iter(self._list)

    def __len__(self) -> int:
        return len(self._list)

    def __repr__(self) -> str:
        return f"ArrayQueue({self.to_list()!r})"
