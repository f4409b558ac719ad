"""Failure types raised by the collections.

Each failure also derives from the builtin exception Python code would
normally catch for the same mistake, so ``except IndexError`` keeps working
around an ``ArrayList`` the way it does around a ``list``.
"""

from __future__ import annotations


class CollectionError(Exception):
    """Base class for every failure raised by this package."""


class OutOfRangeError(CollectionError, IndexError):
    """An index argument lies outside the valid bound of a list or view."""


class UnderflowError(CollectionError, LookupError):
    """The head or tail of an empty ordered structure was requested."""


class KeyNotFoundError(CollectionError, KeyError):
    """A reverse lookup was made with a token the map does not hold."""


class UnsupportedOperationError(CollectionError, NotImplementedError):
    """A mutating operation was invoked on a structure that does not allow it."""
