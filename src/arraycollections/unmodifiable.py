"""Read-only proxy over a list."""

from __future__ import annotations

from collections.abc import Sequence
from operator import index as op_index
from typing import TYPE_CHECKING, NoReturn, TypeVar, overload

from arraycollections.capabilities import Clearable, Growable, Indexable
from arraycollections.errors import UnsupportedOperationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from typing import SupportsIndex

    from arraycollections.arraylist import ArrayList

T = TypeVar("T")


class UnmodifiableList(Sequence[T], Growable[T], Indexable[T], Clearable):
    """A live, read-only proxy over a list.

    Reads go to the source list, so later changes to the source show
    through. Every mutating operation raises :class:`UnsupportedOperationError`.
    """

    def __init__(self, source: ArrayList[T]) -> None:
        self._source = source

    def get(self, index: SupportsIndex) -> T:
        return self._source.get(index)

    def __len__(self) -> int:
        return len(self._source)

    def __iter__(self) -> Iterator[T]:
        return iter(self._source)

    def __contains__(self, element: object) -> bool:
        return element in self._source

    @overload
    def __getitem__(self, key: SupportsIndex) -> T: ...

    @overload
    def __getitem__(self, key: slice) -> ArrayList[T]: ...

    def __getitem__(self, key: SupportsIndex | slice) -> T | ArrayList[T]:
        if isinstance(key, slice):
            return self._source[key]
        return self._source[op_index(key)]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, UnmodifiableList):
            return self._source == other._source
        return self._source == other

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"UnmodifiableList({self._source.to_list()!r})"

    def to_list(self) -> list[T]:
        return self._source.to_list()

    def sub_view(self, from_index: SupportsIndex, to_index: SupportsIndex) -> UnmodifiableList[T]:
        """Return a read-only live view over a range of the source."""
        return UnmodifiableList(self._source.sub_view(from_index, to_index))

    def _unsupported(self, *args: object) -> NoReturn:
        raise UnsupportedOperationError("list is unmodifiable")

    def add(self, element: T) -> None:
        self._unsupported(element)

    def add_all(self, elements: Iterable[T]) -> None:
        self._unsupported(elements)

    def set(self, index: int, element: T) -> None:
        self._unsupported(index, element)

    def insert(self, index: int, element: T) -> None:
        self._unsupported(index, element)

    def drop(self, index: int) -> None:
        self._unsupported(index)

    def remove(self, element: object) -> None:
        self._unsupported(element)

    def remove_all(self, elements: Iterable[object]) -> None:
        self._unsupported(elements)

    def retain_all(self, elements: Iterable[object]) -> None:
        self._unsupported(elements)

    def clear(self) -> None:
        self._unsupported()
