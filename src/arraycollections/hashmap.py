from __future__ import annotations

import copy
from collections.abc import Mapping, MutableMapping
from typing import TYPE_CHECKING, Any, NamedTuple, TypeVar

from arraycollections.capabilities import Clearable
from arraycollections.errors import KeyNotFoundError
from arraycollections.hashing import Token, hash_key

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from arraycollections.arraylist import ArrayList
    from arraycollections.sets import HashSet

K = TypeVar("K")
V = TypeVar("V")


class MapEntry(NamedTuple):
    """One stored entry: the token it is filed under, its original key and its value."""

    token: Token
    key: Any
    value: Any


class HashMap(MutableMapping[K, V], Clearable):
    """A map that accepts keys of any type, hashable or not.

    Keys are filed under the token :func:`~arraycollections.hashing.hash_key`
    gives them; the original key is kept alongside the value so it can be
    recovered with :meth:`key`. Entries keep their insertion order.
    """

    _keys: dict[Token, K]
    _values: dict[Token, V]

    def __init__(self, data: Mapping[K, V] | Iterable[tuple[K, V]] | None = None) -> None:
        """Initialize a map from data.

        Args:
            data: Initial entries (optional, defaults to empty)
                  - None: creates an empty map
                  - HashMap: entries are copied with their tokens
                  - mapping: each key/value pair is put
                  - iterable: ``(key, value)`` pairs are put in order
        """
        self._keys = {}
        self._values = {}

        if isinstance(data, HashMap):
            self._keys = dict(data._keys)
            self._values = dict(data._values)
        elif data is not None:
            self.put_all(data)

    def put(self, key: K, value: V) -> None:
        """Associate value with key, replacing any value already held for it."""
        token = hash_key(key)
        self._keys[token] = key
        self._values[token] = value

    def put_all(self, data: Mapping[K, V] | Iterable[tuple[K, V]]) -> None:
        """Put every entry of data, in its iteration order."""
        items = list(data.items()) if isinstance(data, Mapping) else list(data)
        for key, value in items:
            self.put(key, value)

    def get(self, key: object, default: Any = None) -> Any:
        """Return the value held for key, or default if there is none."""
        return self._values.get(hash_key(key), default)

    def remove(self, key: object) -> None:
        """Remove the entry for key, if there is one."""
        token = hash_key(key)
        self._keys.pop(token, None)
        self._values.pop(token, None)

    def remove_all(self, keys: Iterable[object]) -> None:
        """Remove the entries for all of keys."""
        for key in list(keys):
            self.remove(key)

    def clear(self) -> None:
        """Remove every entry."""
        self._keys = {}
        self._values = {}

    def contains_key(self, key: object) -> bool:
        """Return True if an entry is held for key."""
        return hash_key(key) in self._values

    def contains_keys(self, keys: Iterable[object]) -> bool:
        """Return True if entries are held for all of keys."""
        return all(self.contains_key(key) for key in keys)

    def contains_value(self, value: object) -> bool:
        """Return True if some entry's value is, or equals, value."""
        return value in self._values.values()

    def contains_values(self, values: Iterable[object]) -> bool:
        """Return True if every one of values is held by some entry."""
        return all(self.contains_value(value) for value in values)

    def key(self, token: Token) -> K:
        """Return the original key filed under token.

        Raises:
            KeyNotFoundError: If no entry is filed under token
        """
        try:
            return self._keys[token]
        except KeyError:
            raise KeyNotFoundError(token) from None

    def tokens(self) -> list[Token]:
        """Return the tokens of all entries, in entry order."""
        return list(self._keys)

    def entries(self) -> list[MapEntry]:
        """Return all entries, in entry order."""
        return [MapEntry(token, key, self._values[token]) for token, key in self._keys.items()]

    def key_set(self) -> HashSet[K]:
        """Return a new set holding the keys."""
        from arraycollections.sets import HashSet

        return HashSet(self._keys.values())

    def value_list(self) -> ArrayList[V]:
        """Return a new list holding the values, in entry order."""
        from arraycollections.arraylist import ArrayList

        return ArrayList(self._values.values())

    def copy(self) -> HashMap[K, V]:
        """Return an independent copy."""
        return HashMap(self)

    # ---------------------
    # Mapping protocol
    # ---------------------
    def __getitem__(self, key: K) -> V:
        token = hash_key(key)
        if token not in self._values:
            raise KeyError(key)
        return self._values[token]

    def __setitem__(self, key: K, value: V) -> None:
        self.put(key, value)

    def __delitem__(self, key: K) -> None:
        if not self.contains_key(key):
            raise KeyError(key)
        self.remove(key)

    def __contains__(self, key: object) -> bool:
        return self.contains_key(key)

    def __iter__(self) -> Iterator[K]:
        """Return an iterator over the original keys, in entry order."""
        return iter(self._keys.values())

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        """Return True if other holds the same keys, by token, with equal values.

        Entry order is not compared.
        """
        if self is other:
            return True
        if isinstance(other, HashMap):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == HashMap(other)._values
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        body = ", ".join(f"{key!r}: {self._values[token]!r}" for token, key in self._keys.items())
        return f"{type(self).__name__}({{{body}}})"

    def __copy__(self) -> HashMap[K, V]:
        return self.copy()

    # Deep copies and pickles rebuild from pairs: identity tokens name the old key objects
    def __deepcopy__(self, memo: dict[int, Any]) -> HashMap[K, V]:
        return HashMap(copy.deepcopy(self._pairs(), memo))

    def __reduce__(self) -> tuple[Any, ...]:
        """Pickle as key/value pairs; tokens are recomputed on load."""
        return HashMap, (self._pairs(),)

    def _pairs(self) -> list[tuple[K, V]]:
        return [(key, self._values[token]) for token, key in self._keys.items()]
