from __future__ import annotations

import copy
import logging
import weakref
from collections.abc import MutableSequence, Sequence
from operator import index as op_index
from typing import TYPE_CHECKING, TypeVar, overload

from arraycollections.capabilities import Clearable, Growable, Indexable, matches
from arraycollections.errors import OutOfRangeError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from typing import Any, SupportsIndex

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ArrayList(MutableSequence[T], Growable[T], Indexable[T], Clearable):
    """Resizable-array list whose sub-ranges can be taken as live views.

    Every structural change made to the list is replayed into the views
    registered on it before the mutating call returns. See :meth:`sub_view`.
    """

    _elements: list[T]
    _views: list[weakref.ref[SubList[T]]]

    def __init__(self, elements: Iterable[T] | None = None) -> None:
        """Initialize a list from elements.

        Args:
            elements: Initial elements (optional, defaults to empty). Always
                copied, so the new list never aliases its source.
        """
        self._elements = list(elements) if elements is not None else []
        self._views = []

    # ---------------------
    # Core primitives
    # ---------------------
    def get(self, index: SupportsIndex) -> T:
        """Return the element at index.

        Raises:
            OutOfRangeError: If index is not in ``[0, len)``
        """
        idx = self._checked_index(index, len(self._elements))
        return self._elements[idx]

    def set(self, index: SupportsIndex, element: T) -> None:
        """Replace the element at index.

        Raises:
            OutOfRangeError: If index is not in ``[0, len)``
        """
        idx = self._checked_index(index, len(self._elements), "list assignment index out of range")
        self._set_at(idx, element)

    def insert(self, index: SupportsIndex, element: T) -> None:
        """Insert element before index, shifting later elements right.

        Args:
            index: Position in ``[0, len]``; ``len`` appends
            element: Element to insert

        Raises:
            OutOfRangeError: If index is not in ``[0, len]``
        """
        idx = self._checked_index(index, len(self._elements) + 1)
        self._insert_at(idx, element)

    def insert_all(self, index: SupportsIndex, elements: Iterable[T]) -> None:
        """Insert elements before index, keeping their iteration order.

        Raises:
            OutOfRangeError: If index is not in ``[0, len]``
        """
        idx = self._checked_index(index, len(self._elements) + 1)
        for offset, element in enumerate(list(elements)):
            self._insert_at(idx + offset, element)

    def drop(self, index: SupportsIndex) -> None:
        """Remove the element at index, shifting later elements left.

        Raises:
            OutOfRangeError: If index is not in ``[0, len)``
        """
        idx = self._checked_index(index, len(self._elements))
        self._drop_at(idx)

    def add(self, element: T) -> None:
        """Append element to the end of the list."""
        self._insert_at(len(self._elements), element)

    def remove(self, element: object) -> None:
        """Remove the first element matching element, if there is one.

        Unlike ``list.remove`` a missing element is not an error.
        """
        idx = self.index_of(element)
        if idx is not None:
            self._drop_at(idx)

    def remove_all(self, elements: Iterable[object]) -> None:
        """Remove every element that matches one of elements."""
        targets = list(elements)
        # Descending, so earlier positions stay valid as removals cascade
        for i in range(len(self._elements) - 1, -1, -1):
            if any(matches(self._elements[i], target) for target in targets):
                self._drop_at(i)

    def retain_all(self, elements: Iterable[object]) -> None:
        """Remove every element that matches none of elements."""
        targets = list(elements)
        for i in range(len(self._elements) - 1, -1, -1):
            if not any(matches(self._elements[i], target) for target in targets):
                self._drop_at(i)

    def clear(self) -> None:
        """Remove all elements, emptying every registered view."""
        self._apply_clear()

    def sub_view(self, from_index: SupportsIndex, to_index: SupportsIndex) -> SubList[T]:
        """Return a live view of the elements between from_index and to_index.

        The view is itself a complete list. Changes made through it are
        applied to this list, and changes made to this list (or any of its
        ancestors) are replayed into it, re-indexed to its own positions.
        Views can be nested to any depth.

        Args:
            from_index: Low endpoint (inclusive)
            to_index: High endpoint (exclusive)

        Returns:
            The registered view

        Raises:
            OutOfRangeError: If ``0 <= from_index <= to_index <= len`` does not hold
        """
        start = op_index(from_index)
        stop = op_index(to_index)
        if not 0 <= start <= stop <= len(self._elements):
            raise OutOfRangeError(f"view range [{start}, {stop}) out of range for list of size {len(self._elements)}")

        view = SubList(self, start, stop)
        self._views.append(weakref.ref(view, self._views.remove))
        logger.debug("Registered view [%d, %d) on %s at %#x", start, stop, type(self).__name__, id(self))
        return view

    # ---------------------
    # Collection helpers
    # ---------------------
    def contains(self, element: object) -> bool:
        """Return True if an element is, or equals, element."""
        return element in self._elements

    def contains_all(self, elements: Iterable[object]) -> bool:
        """Return True if every one of elements is contained."""
        return all(self.contains(element) for element in elements)

    def to_list(self) -> list[T]:
        """Return the elements as a new ``list``."""
        return list(self._elements)

    def copy(self) -> ArrayList[T]:
        """Return an independent shallow copy.

        Copies of views are plain lists with no link to the view's parent.
        """
        return self.__copy__()

    # ---------------------
    # Mutation seams
    # ---------------------
    def _checked_index(self, index: SupportsIndex, upper: int, message: str = "list index out of range") -> int:
        idx = op_index(index)
        if not 0 <= idx < upper:
            raise OutOfRangeError(message)
        return idx

    # A root list applies a validated mutation itself; SubList forwards it to its parent
    def _insert_at(self, index: int, element: T) -> None:
        self._apply_insert(index, element)

    def _set_at(self, index: int, element: T) -> None:
        self._apply_set(index, element)

    def _drop_at(self, index: int) -> None:
        self._apply_drop(index)

    def _live_views(self) -> list[SubList[T]]:
        return [view for view in (ref() for ref in list(self._views)) if view is not None]

    def _apply_insert(self, index: int, element: T) -> None:
        self._elements.insert(index, element)
        for view in self._live_views():
            view._replay_insert(index, element)

    def _apply_set(self, index: int, element: T) -> None:
        self._elements[index] = element
        for view in self._live_views():
            view._replay_set(index, element)

    def _apply_drop(self, index: int) -> None:
        del self._elements[index]
        for view in self._live_views():
            view._replay_drop(index)

    def _apply_clear(self) -> None:
        self._elements.clear()
        for view in self._live_views():
            view._replay_clear()

    # ---------------------
    # Sequence protocol
    # ---------------------
    def __len__(self) -> int:
        """Return the number of elements."""
        return len(self._elements)

    def __iter__(self) -> Iterator[T]:
        """Return an iterator over the elements."""
        return iter(self._elements)

    def __contains__(self, element: object) -> bool:
        return element in self._elements

    @overload
    def __getitem__(self, key: SupportsIndex) -> T: ...

    @overload
    def __getitem__(self, key: slice) -> ArrayList[T]: ...

    def __getitem__(self, key: SupportsIndex | slice) -> T | ArrayList[T]:
        """Get item(s) by index or slice.

        Args:
            key: Integer index (negative counts from the end) or slice

        Returns:
            Single element for an index, new independent ArrayList for a slice

        Raises:
            TypeError: If key is not an integer or slice
            OutOfRangeError: If index is out of range
        """
        if isinstance(key, slice):
            return ArrayList(self._elements[key])

        idx = op_index(key)
        if idx < 0:
            idx += len(self._elements)
        return self.get(idx)

    @overload
    def __setitem__(self, key: SupportsIndex, value: T) -> None: ...

    @overload
    def __setitem__(self, key: slice, value: Iterable[T]) -> None: ...

    def __setitem__(self, key: SupportsIndex | slice, value: T | Iterable[T]) -> None:
        """Set item(s) by index or slice.

        Slice assignment is carried out as drops and inserts, so registered
        views follow it like any other change.

        Raises:
            TypeError: If a slice is assigned a non-iterable
            OutOfRangeError: If index is out of range
            ValueError: If an extended slice is assigned a sequence of another length
        """
        if isinstance(key, slice):
            start, stop, step = key.indices(len(self._elements))

            try:
                values = list(value)  # type: ignore[arg-type]
            except TypeError:
                raise TypeError("can only assign an iterable") from None

            if step != 1:
                indices = range(start, stop, step)
                if len(values) != len(indices):
                    raise ValueError(
                        f"attempt to assign sequence of size {len(values)} to extended slice of size {len(indices)}"
                    )
                for idx, val in zip(indices, values, strict=True):
                    self._set_at(idx, val)
                return

            for _ in range(max(start, stop) - start):
                self._drop_at(start)
            for offset, val in enumerate(values):
                self._insert_at(start + offset, val)
            return

        idx = op_index(key)
        if idx < 0:
            idx += len(self._elements)
        self.set(idx, value)  # type: ignore[arg-type]

    @overload
    def __delitem__(self, key: SupportsIndex) -> None: ...

    @overload
    def __delitem__(self, key: slice) -> None: ...

    def __delitem__(self, key: SupportsIndex | slice) -> None:
        """Delete item(s) by index or slice.

        Raises:
            TypeError: If key is not an integer or slice
            OutOfRangeError: If index is out of range
        """
        if isinstance(key, slice):
            for idx in sorted(range(*key.indices(len(self._elements))), reverse=True):
                self._drop_at(idx)
            return

        idx = op_index(key)
        if idx < 0:
            idx += len(self._elements)
        self.drop(idx)

    def __eq__(self, other: object) -> bool:
        """Return True if other is a sequence with equal elements in the same order."""
        if self is other:
            return True
        if isinstance(other, ArrayList):
            return self._elements == other._elements
        if isinstance(other, Sequence) and not isinstance(other, (str, bytes)):
            return self._elements == list(other)
        return NotImplemented

    def __hash__(self) -> None:  # type: ignore[override]
        """Raise TypeError as lists are mutable."""
        raise TypeError(f"unhashable type: {type(self).__name__!r}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._elements!r})"

    def __copy__(self) -> ArrayList[T]:
        return ArrayList(self._elements)

    def __deepcopy__(self, memo: dict[int, Any]) -> ArrayList[T]:
        return ArrayList(copy.deepcopy(self._elements, memo))

    def __reduce__(self) -> tuple[type[ArrayList[Any]], tuple[list[T]]]:
        """Pickle as an independent list; view registrations are not kept."""
        return ArrayList, (list(self._elements),)


class SubList(ArrayList[T]):
    """A live view over ``[from_index, to_index)`` of a parent list.

    Create views with :meth:`ArrayList.sub_view`, never directly.

    The view keeps its own copy of its elements. Mutations issued on the view
    are translated to parent positions and applied to the parent, which
    replays them back into every registered view whose range they touch,
    this one included. Index errors are reported against the view's own size.
    """

    _parent: ArrayList[T]
    _from: int

    def __init__(self, parent: ArrayList[T], from_index: int, to_index: int) -> None:
        super().__init__(parent._elements[from_index:to_index])
        self._parent = parent
        self._from = from_index

    @property
    def parent(self) -> ArrayList[T]:
        """The list or view this view was taken from."""
        return self._parent

    @property
    def from_index(self) -> int:
        """Current low endpoint (inclusive) in parent positions."""
        return self._from

    @property
    def to_index(self) -> int:
        """Current high endpoint (exclusive) in parent positions."""
        return self._from + len(self._elements)

    def clear(self) -> None:
        """Remove this view's elements from the parent one at a time."""
        for _ in range(len(self._elements)):
            self._parent._drop_at(self._from)

    # Local mutations are forwarded up; the replay from the parent updates this view
    def _insert_at(self, index: int, element: T) -> None:
        self._parent._insert_at(self._from + index, element)

    def _set_at(self, index: int, element: T) -> None:
        self._parent._set_at(self._from + index, element)

    def _drop_at(self, index: int) -> None:
        self._parent._drop_at(self._from + index)

    def _replay_insert(self, index: int, element: T) -> None:
        # Upper bound is inclusive: an insert right at the end of the view joins it
        if self._from <= index <= self.to_index:
            self._apply_insert(index - self._from, element)
        elif index < self._from:
            self._from += 1
            logger.debug("View shifted to [%d, %d) by insert at %d", self._from, self.to_index, index)

    def _replay_set(self, index: int, element: T) -> None:
        if self._from <= index < self.to_index:
            self._apply_set(index - self._from, element)

    def _replay_drop(self, index: int) -> None:
        if self._from <= index < self.to_index:
            self._apply_drop(index - self._from)
        elif index < self._from:
            self._from -= 1
            logger.debug("View shifted to [%d, %d) by drop at %d", self._from, self.to_index, index)

    def _replay_clear(self) -> None:
        self._from = 0
        self._apply_clear()
        logger.debug("View at %#x cleared by ancestor", id(self))
