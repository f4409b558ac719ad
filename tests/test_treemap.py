# tests/test_treemap.py
import copy
import datetime
import pickle
from decimal import Decimal
from fractions import Fraction

import pytest

from arraycollections import Comparable, Comparator, TreeMap, UnderflowError
from arraycollections.ordering import is_naturally_comparable, natural_compare, sort_keys


class Version(Comparable):
    """Comparable key ordered by its number."""

    def __init__(self, number):
        self.number = number

    def compare_to(self, other):
        return self.number - other.number

    def __repr__(self):
        return f"Version({self.number})"


class Opaque:
    """Key with no natural ordering."""


class Descending(Comparator):
    def compare(self, first, second):
        return second - first


def descending(first, second):
    return second - first


# ---------------------
# Natural ordering tests
# ---------------------
@pytest.mark.parametrize(
    "keys, expected_order",
    [
        ([3, 1, 2], [1, 2, 3]),
        (["b", "a"], ["a", "b"]),
        (["alpha", "last", 1], [1, "alpha", "last"]),
        (["item10", "item2", "item1"], ["item1", "item2", "item10"]),
        ([2.5, 1, 2], [1, 2, 2.5]),
        (["b", 10, "a", -1], [-1, 10, "a", "b"]),
        (
            [datetime.date(2024, 3, 1), "z", 7, datetime.datetime(2023, 1, 1, 12)],
            [7, "z", datetime.datetime(2023, 1, 1, 12), datetime.date(2024, 3, 1)],
        ),
        ([Decimal(3), Decimal(1), Decimal(2)], [Decimal(1), Decimal(2), Decimal(3)]),
        ([Decimal("2.5"), 3, Fraction(1, 2), 1.0], [Fraction(1, 2), 1.0, Decimal("2.5"), 3]),
        (["²", "x10", "a", "x٣"], ["a", "x٣", "x10", "²"]),
        (
            [datetime.datetime(2020, 1, 2, tzinfo=datetime.timezone.utc), datetime.datetime(2020, 1, 1)],
            [datetime.datetime(2020, 1, 1), datetime.datetime(2020, 1, 2, tzinfo=datetime.timezone.utc)],
        ),
    ],
    ids=[
        "ints",
        "strings",
        "mixed_numbers_and_strings",
        "natural_strings",
        "int_and_float",
        "negative",
        "temporal",
        "decimals",
        "mixed_number_types",
        "non_decimal_digits",
        "naive_and_aware",
    ],
)
def test_natural_order(keys, expected_order):
    """Test keys without a comparator follow natural ordering."""
    m = TreeMap((key, str(key)) for key in keys)
    assert list(m) == expected_order
    assert m.first_key() == expected_order[0]
    assert m.last_key() == expected_order[-1]


def test_first_and_last():
    """Test the lowest and highest keys of a small map."""
    m = TreeMap({"b": 2, "a": 1})
    assert m.first_key() == "a"
    assert m.last_key() == "b"

    numbers = TreeMap({3: "c", 1: "a", 2: "b"})
    assert numbers.first_key() == 1
    assert numbers.last_key() == 3


def test_comparable_keys():
    """Test Comparable instances sort by compare_to, after the other natural keys."""
    v1, v2, v3 = Version(1), Version(2), Version(3)
    m = TreeMap()
    for key in (v3, "s", v1, 0, v2):
        m.put(key, None)
    assert list(m) == [0, "s", v1, v2, v3]


def test_other_keys_follow_in_put_order():
    """Test keys without natural ordering come last, in the order they were first put."""
    opaque = Opaque()
    m = TreeMap()
    m.put([1], "list")
    m.put(5, "five")
    m.put(opaque, "opaque")
    m.put(True, "bool")
    m.put(1, "one")
    m.put([1], "list again")

    assert list(m) == [1, 5, [1], opaque, True]
    assert m.get([1]) == "list again"


def test_values_follow_keys():
    """Test values are re-associated with their keys after each re-sort."""
    m = TreeMap()
    m.put("c", 3)
    m.put("a", 1)
    m.put("b", 2)
    assert list(m.values()) == [1, 2, 3]
    assert [entry.value for entry in m.entries()] == [1, 2, 3]
    assert m.value_list() == [1, 2, 3]


# ---------------------
# Comparator tests
# ---------------------
@pytest.mark.parametrize(
    "comparator",
    [descending, Descending(), lambda a, b: (a < b) - (a > b)],
    ids=["function", "comparator_instance", "lambda"],
)
def test_comparator_order(comparator):
    """Test a comparator decides the whole key order."""
    m = TreeMap({1: "a", 5: "e", 3: "c"}, comparator=comparator)
    assert list(m) == [5, 3, 1]
    assert m.first_key() == 5
    assert m.last_key() == 1
    assert m.comparator() is comparator


def test_no_comparator():
    """Test comparator() is None for natural ordering."""
    assert TreeMap().comparator() is None


def test_raising_comparator_leaves_map_unchanged():
    """Test an exception from the comparator propagates and nothing is stored."""

    def ints_only(first, second):
        if not isinstance(first, int) or not isinstance(second, int):
            raise TypeError("ints only")
        return first - second

    m = TreeMap({2: "b", 1: "a"}, comparator=ints_only)
    with pytest.raises(TypeError, match="ints only"):
        m.put("x", "bad")

    assert list(m) == [1, 2]
    assert not m.contains_key("x")
    assert len(m.tokens()) == len(m)


# ---------------------
# Underflow tests
# ---------------------
@pytest.mark.parametrize("method", ["first_key", "last_key"], ids=["first", "last"])
def test_empty_map_underflow(method):
    """Test first and last keys of an empty map raise UnderflowError."""
    m = TreeMap()
    with pytest.raises(UnderflowError):
        getattr(m, method)()
    with pytest.raises(LookupError):
        getattr(m, method)()


def test_underflow_after_removal():
    """Test a map emptied by removal underflows again."""
    m = TreeMap({"a": 1})
    m.remove("a")
    with pytest.raises(UnderflowError):
        m.first_key()


# ---------------------
# Removal and copy tests
# ---------------------
def test_removal_keeps_order():
    """Test removing keys keeps the remaining keys sorted."""
    m = TreeMap({5: "e", 1: "a", 3: "c", 4: "d"})
    m.remove(3)
    del m[5]
    assert list(m) == [1, 4]
    m.put(2, "b")
    assert list(m) == [1, 2, 4]


def test_copy_keeps_comparator():
    """Test a copy is independent and keeps the comparator."""
    m = TreeMap({1: "a", 2: "b"}, comparator=descending)
    duplicate = m.copy()

    assert isinstance(duplicate, TreeMap)
    assert duplicate.comparator() is descending
    duplicate.put(3, "c")
    assert list(duplicate) == [3, 2, 1]
    assert list(m) == [2, 1]


@pytest.mark.parametrize("copy_method", ["deepcopy", "pickle"])
def test_deep_copy_finds_identity_keys(copy_method):
    """Test deep copies find identity keys, and composites holding them, under new tokens."""
    m = TreeMap()
    m.put(2, "two")
    m.put(Opaque(), "opaque")
    m.put([Opaque()], "holder")
    m.put(1, "one")

    if copy_method == "deepcopy":
        duplicate = copy.deepcopy(m)
    else:
        duplicate = pickle.loads(pickle.dumps(m))

    assert type(duplicate) is TreeMap
    keys = list(duplicate)
    assert keys[:2] == [1, 2]
    assert [duplicate.get(key) for key in keys] == ["one", "two", "opaque", "holder"]
    assert all(duplicate.contains_key(key) for key in keys)
    assert not duplicate.contains_key(list(m)[2])


@pytest.mark.parametrize("protocol", range(pickle.HIGHEST_PROTOCOL + 1))
def test_pickle_keeps_comparator(protocol):
    """Test sorted maps survive pickling with their comparator."""
    m = TreeMap({1: "a", 3: "c", 2: "b"}, comparator=descending)
    restored = pickle.loads(pickle.dumps(m, protocol=protocol))

    assert restored.comparator() is descending
    assert list(restored) == [3, 2, 1]
    assert restored == m
    restored.put(4, "d")
    assert restored.first_key() == 4


def test_repr():
    """Test repr shows the keys in sorted order."""
    assert repr(TreeMap({"b": 2, "a": 1})) == "TreeMap({'a': 1, 'b': 2})"


# ---------------------
# Ordering helper tests
# ---------------------
@pytest.mark.parametrize(
    "value, expected",
    [
        (1, True),
        (1.5, True),
        ("s", True),
        (datetime.time(1, 2), True),
        (Version(1), True),
        (Decimal("1.5"), True),
        (Fraction(1, 3), True),
        (True, False),
        (None, False),
        ([1], False),
        (Opaque(), False),
        (1j, False),
    ],
    ids=[
        "int",
        "float",
        "string",
        "time",
        "comparable",
        "decimal",
        "fraction",
        "bool",
        "none",
        "list",
        "opaque",
        "complex",
    ],
)
def test_is_naturally_comparable(value, expected):
    """Test which values take part in natural ordering."""
    assert is_naturally_comparable(value) is expected


@pytest.mark.parametrize(
    "first, second, expected",
    [
        (1, 2, -1),
        (2, 1, 1),
        (2, 2.0, 0),
        (100, "1", -1),
        ("file10", "file9", 1),
        ("01", "1", -1),
        ("a", datetime.date(2000, 1, 1), -1),
        (datetime.date(2024, 1, 2), datetime.datetime(2024, 1, 1, 23), 1),
        (Version(2), Version(2), 0),
        (Decimal("1.5"), 2, -1),
        ("²", "2", 1),
        (datetime.datetime(2020, 1, 1), datetime.datetime(2020, 1, 1, tzinfo=datetime.timezone.utc), -1),
        (datetime.time(12, tzinfo=datetime.timezone.utc), datetime.time(11), 1),
    ],
    ids=[
        "less",
        "greater",
        "equal_numbers",
        "number_before_string",
        "natural_digits",
        "leading_zero_tie",
        "string_before_temporal",
        "mixed_temporal",
        "comparable",
        "decimal_vs_int",
        "superscript_vs_digit",
        "naive_vs_aware_datetime",
        "aware_vs_naive_time",
    ],
)
def test_natural_compare(first, second, expected):
    """Test three-way comparison under natural ordering."""
    assert natural_compare(first, second) == expected


def test_natural_compare_rejects_other_values():
    """Test values without a natural ordering cannot be compared."""
    with pytest.raises(TypeError):
        natural_compare(1, None)


def test_sort_keys_with_key_function():
    """Test sort_keys orders records by an extracted key."""
    records = [("x", [2]), ("y", 3), ("z", 1)]
    assert sort_keys(records, key=lambda record: record[1]) == [("z", 1), ("y", 3), ("x", [2])]
    assert sort_keys([3, 1, 2], comparator=descending) == [3, 2, 1]
