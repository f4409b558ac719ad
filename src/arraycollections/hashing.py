"""Key Hashing Engine.

Maps any key to a canonical token that hash-based collections use as their
storage key. The token is deterministic for the life of the process, and the
map that stores a key keeps the original so it can be recovered from the
token.

Keys are classified once into a :class:`KeyKind` and canonicalized by kind,
in priority order:

1. temporal values become their ISO-8601 string
2. objects without value equality become a per-instance identity token
3. ``True``, ``False`` and ``None`` become fixed constants
4. composite values (sequences other than text, sets, mappings, bags and
   dataclasses) are canonicalized, serialized and digested
5. integral numbers are their own token
6. anything else becomes its string form

Tokens of different kinds can coincide (``True`` and the string ``"_true"``,
``1.5`` and ``"1.5"``). Such keys are treated as the same key.
"""

from __future__ import annotations

import dataclasses
import datetime
import hashlib
import json
import numbers
from collections.abc import Mapping, Sequence, Set
from enum import Enum
from typing import Any, Union

Token = Union[int, str]

# Prefix marking tokens that were derived rather than taken from the key itself
TOKEN_PREFIX = "_"
TRUE_TOKEN = TOKEN_PREFIX + "true"
FALSE_TOKEN = TOKEN_PREFIX + "false"
NULL_TOKEN = TOKEN_PREFIX + "null"

# Digest used for composite keys
COMPOSITE_DIGEST = "md5"

_TEMPORAL_TYPES = (datetime.datetime, datetime.date, datetime.time)
_COMPOSITE_TYPES = (Sequence, Set, Mapping)
# Sequences that are hashed by their text, not their contents
_TEXT_TYPES = (str, bytes, bytearray)


class KeyKind(Enum):
    """The canonicalization rule a key falls under."""

    TEMPORAL = "temporal"
    IDENTITY = "identity"
    BOOLEAN = "boolean"
    NULL = "null"
    COMPOSITE = "composite"
    INTEGRAL = "integral"
    SCALAR = "scalar"


def classify(key: object) -> KeyKind:
    """Return the kind of key, which decides how it is canonicalized."""
    if isinstance(key, _TEMPORAL_TYPES):
        return KeyKind.TEMPORAL
    if _has_identity_equality(key):
        return KeyKind.IDENTITY
    if key is True or key is False:
        return KeyKind.BOOLEAN
    if key is None:
        return KeyKind.NULL
    if _is_composite(key):
        return KeyKind.COMPOSITE
    if isinstance(key, numbers.Integral):
        return KeyKind.INTEGRAL
    return KeyKind.SCALAR


def hash_key(key: object) -> Token:
    """Return the canonical token for key.

    Args:
        key: Any value

    Returns:
        An ``int`` for integral numbers, otherwise a ``str``
    """
    kind = classify(key)

    if kind is KeyKind.TEMPORAL:
        return TOKEN_PREFIX + key.isoformat()  # type: ignore[attr-defined]
    if kind is KeyKind.IDENTITY:
        return f"{TOKEN_PREFIX}{id(key):x}"
    if kind is KeyKind.BOOLEAN:
        return TRUE_TOKEN if key else FALSE_TOKEN
    if kind is KeyKind.NULL:
        return NULL_TOKEN
    if kind is KeyKind.COMPOSITE:
        serialized = json.dumps(_canonical(key), separators=(",", ":"))
        digest = hashlib.new(COMPOSITE_DIGEST, serialized.encode("utf-8"), usedforsecurity=False)
        return TOKEN_PREFIX + digest.hexdigest()
    if kind is KeyKind.INTEGRAL:
        return int(key)  # type: ignore[call-overload]
    return str(key)


def _has_identity_equality(key: object) -> bool:
    # None and dataclasses with eq=False share object.__eq__ but are handled elsewhere
    if key is None or (_is_dataclass_instance(key) and type(key).__eq__ is not object.__eq__):
        return False
    return type(key).__eq__ is object.__eq__


def _is_composite(key: object) -> bool:
    if isinstance(key, _TEXT_TYPES):
        return False
    return isinstance(key, _COMPOSITE_TYPES) or _is_bag(key) or _is_dataclass_instance(key)


def _is_bag(key: object) -> bool:
    from arraycollections.bag import HashBag

    return isinstance(key, HashBag)


def _is_dataclass_instance(key: object) -> bool:
    return dataclasses.is_dataclass(key) and not isinstance(key, type)


def _canonical(value: object) -> Any:
    """Return a JSON-serializable form of value with contents in sorted order."""
    if classify(value) is not KeyKind.COMPOSITE:
        return hash_key(value)

    if _is_dataclass_instance(value):
        value = {field.name: getattr(value, field.name) for field in dataclasses.fields(value)}  # type: ignore[arg-type]

    if isinstance(value, Mapping):
        pairs = [[_canonical(k), _canonical(v)] for k, v in value.items()]
        return {"map": sorted(pairs, key=_sort_key)}

    if _is_bag(value):
        counts = [
            [_canonical(element), value.get_copies(element)]  # type: ignore[attr-defined]
            for element in value.unique()  # type: ignore[attr-defined]
        ]
        return {"bag": sorted(counts, key=_sort_key)}

    return sorted((_canonical(item) for item in value), key=_sort_key)  # type: ignore[attr-defined]


def _sort_key(canonical: Any) -> str:
    # Canonical forms mix ints, strings and nested lists; their JSON text orders them all
    return json.dumps(canonical, separators=(",", ":"))
