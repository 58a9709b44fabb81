"""Tests for the equality policy."""

from decimal import Decimal

import pytest

from scopewatch import UNSET, are_equal, deep_equal, is_nan

NAN = float("nan")


class _Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y


class _Slotted:
    __slots__ = ("x",)

    def __init__(self, x):
        self.x = x


class _SlottedChild(_Slotted):
    __slots__ = ("__tag",)

    def __init__(self, x, tag):
        super().__init__(x)
        self.__tag = tag


class _Explosive:
    def __eq__(self, other):
        raise TypeError("no comparing")

    __hash__ = object.__hash__


class TestIsNan:
    @pytest.mark.parametrize("value", [NAN, complex(NAN, 0), Decimal("NaN"), Decimal("sNaN")])
    def test_nan_values(self, value):
        assert is_nan(value)

    @pytest.mark.parametrize("value", [0.0, 1, "nan", None, [NAN]])
    def test_non_nan_values(self, value):
        assert not is_nan(value)


class TestReferenceMode:
    def test_identity(self):
        obj = object()
        assert are_equal(obj, obj)
        assert not are_equal(object(), object())

    def test_containers_compare_by_identity(self):
        a = [1, 2]
        assert are_equal(a, a)
        assert not are_equal([1, 2], [1, 2])
        assert not are_equal({"a": 1}, {"a": 1})

    def test_scalars_compare_by_value(self):
        assert are_equal("ab", "".join(["a", "b"]))
        assert are_equal(10**20, 10**20 + 0)
        assert are_equal(1, 1.0)
        assert not are_equal("a", "b")

    def test_bool_is_not_int(self):
        assert not are_equal(True, 1)
        assert not are_equal(0, False)
        assert are_equal(True, True)

    def test_str_is_not_bytes(self):
        assert not are_equal("a", b"a")

    def test_nan_equals_nan(self):
        assert are_equal(NAN, float("nan"))
        assert are_equal(Decimal("sNaN"), Decimal("NaN"))
        assert not are_equal(NAN, 1.0)
        assert not are_equal(NAN, "nan")

    def test_none(self):
        assert are_equal(None, None)
        assert not are_equal(None, 0)

    def test_unset_never_equals_a_value(self):
        for value in (None, 0, "", [], NAN, False):
            assert not are_equal(value, UNSET)
            assert not are_equal(value, UNSET, deep=True)


class TestDeepMode:
    def test_lists(self):
        assert deep_equal([1, [2, 3]], [1, [2, 3]])
        assert not deep_equal([1, 2], [1, 2, 3])
        assert not deep_equal([1, 2], (1, 2))

    def test_dicts(self):
        assert deep_equal({"a": {"b": [1]}}, {"a": {"b": [1]}})
        assert not deep_equal({"a": 1}, {"b": 1})
        assert not deep_equal({"a": 1}, {"a": 1, "b": 2})

    def test_nested_nan(self):
        assert are_equal([NAN, {"x": float("nan")}], [float("nan"), {"x": NAN}], deep=True)

    def test_sets(self):
        assert deep_equal({1, 2}, {2, 1})
        assert not deep_equal({1}, frozenset({1}))

    def test_plain_objects_by_fields(self):
        assert deep_equal(_Point(1, [2]), _Point(1, [2]))
        assert not deep_equal(_Point(1, 2), _Point(1, 3))

    def test_cycles(self):
        a = [1]
        a.append(a)
        b = [1]
        b.append(b)
        assert deep_equal(a, b)

    def test_raising_eq_is_not_equal(self):
        assert not deep_equal(_Explosive(), _Explosive())
        assert not are_equal(_Explosive(), _Explosive())

    def test_slotted_objects_by_fields(self):
        assert deep_equal(_Slotted(1), _Slotted(1))
        assert not deep_equal(_Slotted(1), _Slotted(2))
        assert deep_equal(_SlottedChild(1, "a"), _SlottedChild(1, "a"))
        assert not deep_equal(_SlottedChild(1, "a"), _SlottedChild(1, "b"))
        assert not deep_equal(_SlottedChild(1, "a"), _SlottedChild(2, "a"))

    def test_unset_slot(self):
        empty = _Slotted.__new__(_Slotted)
        assert deep_equal(empty, _Slotted.__new__(_Slotted))
        assert not deep_equal(empty, _Slotted(None))

    def test_fieldless_objects_are_equal(self):
        assert deep_equal(object(), object())
        assert deep_equal([object()], [object()])

    def test_bool_keys_distinct_from_int_keys(self):
        assert not deep_equal({1: "a"}, {True: "a"})
        assert not deep_equal({True: "a"}, {1: "a"})
        assert deep_equal({True: "a", 2: "b"}, {True: "a", 2: "b"})

    def test_functions_and_classes_use_own_equality(self):
        assert not deep_equal(lambda: 1, lambda: 1)
        assert not deep_equal([_Point], [_Slotted])
        assert deep_equal([len], [len])

    def test_bound_methods_compare_by_target(self):
        point = _Point(1, 2)
        other = _Point(1, 2)
        assert deep_equal(point.__init__, point.__init__)
        assert not deep_equal(point.__init__, other.__init__)
