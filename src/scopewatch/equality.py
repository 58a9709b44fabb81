"""Equality policy — decides whether a watched value changed.

Two modes:
- reference mode (default): identity for mutable values, value equality for
  immutable scalars, and NaN equal to itself so a probe that stably returns
  NaN does not keep the scope dirty.
- deep mode: full structural comparison, NaN-aware at every depth.

Both are total: no pair of values makes them raise.
"""

from __future__ import annotations

import cmath
import inspect
import math
import numbers
from collections.abc import Mapping, Set
from decimal import Decimal
from typing import Any

# Immutable values compared by value even in reference mode.
_SCALARS = (str, bytes, numbers.Number)

_MISSING = object()


def is_nan(value: Any) -> bool:
    """True for float, complex and Decimal NaN (quiet or signalling)."""
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, complex):
        return cmath.isnan(value)
    if isinstance(value, Decimal):
        return value.is_nan()
    return False


def _safe_eq(a: Any, b: Any) -> bool:
    try:
        return bool(a == b)
    except Exception:
        return False


def _scalar_equal(a: Any, b: Any) -> bool:
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    if isinstance(a, (str, bytes)) or isinstance(b, (str, bytes)):
        return type(a) is type(b) and a == b
    return _safe_eq(a, b)


def same_value(new: Any, old: Any) -> bool:
    """Reference-mode equality."""
    if new is old:
        return True
    if is_nan(new) and is_nan(old):
        return True
    if isinstance(new, _SCALARS) and isinstance(old, _SCALARS):
        if is_nan(new) or is_nan(old):
            return False
        return _scalar_equal(new, old)
    return False


def deep_equal(a: Any, b: Any) -> bool:
    """Structural equality, recursing through containers and plain objects.

    Usage:
        deep_equal([1, {"a": float("nan")}], [1, {"a": float("nan")}])  # True
        deep_equal([1, 2], (1, 2))  # False — container types must match
    """
    return _deep_equal(a, b, set())


def _deep_equal(a: Any, b: Any, seen: set[tuple[int, int]]) -> bool:
    if a is b:
        return True
    if is_nan(a) or is_nan(b):
        return is_nan(a) and is_nan(b)
    if isinstance(a, _SCALARS) and isinstance(b, _SCALARS):
        return _scalar_equal(a, b)

    # Cycle guard: a pair already under comparison is assumed equal.
    key = (id(a), id(b))
    if key in seen:
        return True
    seen.add(key)
    try:
        return _compare_composite(a, b, seen)
    finally:
        seen.discard(key)


def _slot_names(cls: type) -> list[str]:
    names = []
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__"):
                continue
            if name.startswith("__") and not name.endswith("__"):
                name = f"_{klass.__name__.lstrip('_')}{name}"
            names.append(name)
    return names


def _fields(obj: Any) -> dict[str, Any]:
    """Instance fields from ``__dict__`` and every ``__slots__`` in the MRO."""
    fields = dict(vars(obj)) if hasattr(obj, "__dict__") else {}
    for name in _slot_names(type(obj)):
        fields[name] = getattr(obj, name, _MISSING)
    return fields


def _compare_composite(a: Any, b: Any, seen: set[tuple[int, int]]) -> bool:
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if type(a) is not type(b) or len(a) != len(b):
            return False
        # True and 1 hash alike; keep bool keys distinct from int keys.
        if {k for k in a if isinstance(k, bool)} != {k for k in b if isinstance(k, bool)}:
            return False
        for k, v in a.items():
            if k not in b:
                return False
            if not _deep_equal(v, b[k], seen):
                return False
        return True

    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if type(a) is not type(b) or len(a) != len(b):
            return False
        return all(_deep_equal(x, y, seen) for x, y in zip(a, b))

    if isinstance(a, Set) and isinstance(b, Set):
        return type(a) is type(b) and _safe_eq(a, b)

    if type(a) is not type(b):
        return False

    # Functions, bound methods and classes use their own equality, not fields.
    if inspect.isroutine(a) or isinstance(a, type):
        return _safe_eq(a, b)

    # Objects without their own equality compare field by field; no fields means equal.
    if type(a).__eq__ is object.__eq__:
        return _deep_equal(_fields(a), _fields(b), seen)

    return _safe_eq(a, b)


def are_equal(new: Any, old: Any, deep: bool = False) -> bool:
    """Decide "unchanged" (True) vs "changed" (False) for a watcher."""
    if deep:
        return deep_equal(new, old)
    return same_value(new, old)
