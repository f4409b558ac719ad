"""Lists, sets, maps, bags and queues over an array-backed store.

Lists hand out live sub-range views, and the hash-based collections accept
keys of any type. See README.md for usage examples.
"""

from arraycollections.arraylist import ArrayList, SubList
from arraycollections.arrayqueue import ArrayQueue
from arraycollections.bag import HashBag
from arraycollections.capabilities import Clearable, Comparable, Comparator, Growable, Indexable, Sortable
from arraycollections.errors import (
    CollectionError,
    KeyNotFoundError,
    OutOfRangeError,
    UnderflowError,
    UnsupportedOperationError,
)
from arraycollections.hashing import KeyKind, classify, hash_key
from arraycollections.hashmap import HashMap, MapEntry
from arraycollections.sets import HashSet, TreeSet
from arraycollections.treemap import TreeMap
from arraycollections.unmodifiable import UnmodifiableList

__all__ = [
    "ArrayList",
    "ArrayQueue",
    "Clearable",
    "CollectionError",
    "Comparable",
    "Comparator",
    "Growable",
    "HashBag",
    "HashMap",
    "HashSet",
    "Indexable",
    "KeyKind",
    "KeyNotFoundError",
    "MapEntry",
    "OutOfRangeError",
    "Sortable",
    "SubList",
    "TreeMap",
    "TreeSet",
    "UnderflowError",
    "UnmodifiableList",
    "UnsupportedOperationError",
    "classify",
    "hash_key",
]
