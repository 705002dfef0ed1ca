"""Strict structural equality over value graphs.

Usage:
    deep_equal([1, {"a": 2}], [1, {"a": 2}])  # True
    deep_equal([True], [1])                   # False: bool is not a number
    deep_equal({}, [])                        # False: different kinds

Rules:
    - Identical objects are equal.
    - int and float compare as numbers; bool only equals bool.
    - Otherwise both sides must have exactly the same type.
    - Lists and tuples compare element-wise, dicts by key set then values.
    - Records compare by prototype and enumerable own keys.
    - Functions and classes are only equal to themselves.
    - Exceptions compare args, cause, context and built-in fields.
    - Subclasses of scalars and built-in containers must also be ==.
    - Objects with own state compare attribute-wise; stateless values use ==.
    - Cycles are followed once; a revisited pair counts as equal.
"""

from __future__ import annotations

from typing import Any

from replica.core.attributes import exception_state, has_own_state, own_state
from replica.core.clone.operations import ATOMIC_TYPES, UNSUPPORTED_CONTAINERS, is_opaque
from replica.core.record import Record

_HIDDEN_STORAGE = ATOMIC_TYPES + UNSUPPORTED_CONTAINERS


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def deep_equal(a: Any, b: Any) -> bool:
    """Check if a and b are structurally equal.

    Args:
        a: First value.
        b: Second value.

    Returns:
        True if both graphs have the same shape and scalar values.
    """
    return _equal(a, b, set())


def _equal(a: Any, b: Any, seen: set[tuple[int, int]]) -> bool:
    if a is b:
        return True
    if _is_number(a) and _is_number(b):
        return bool(a == b)
    if type(a) is not type(b):
        return False

    pair = (id(a), id(b))
    if pair in seen:
        return True

    if isinstance(a, (list, tuple)):
        seen.add(pair)
        if len(a) != len(b):
            return False
        return all(_equal(x, y, seen) for x, y in zip(a, b))

    if isinstance(a, dict):
        seen.add(pair)
        if a.keys() != b.keys():
            return False
        return all(_equal(a[key], b[key], seen) for key in a)

    if isinstance(a, Record):
        seen.add(pair)
        if a.proto is not b.proto:
            return False
        keys = a.keys()
        if set(keys) != set(b.keys()):
            return False
        return all(_equal(a[key], b[key], seen) for key in keys)

    if is_opaque(a):
        return False

    if isinstance(a, BaseException):
        seen.add(pair)
        if not _equal_mappings(exception_state(a), exception_state(b), seen):
            return False
        return _equal_mappings(own_state(a), own_state(b), seen)

    if has_own_state(a):
        # Contents of built-in storage are invisible to own_state
        if isinstance(a, _HIDDEN_STORAGE) and not a == b:
            return False
        seen.add(pair)
        return _equal_mappings(own_state(a), own_state(b), seen)

    return bool(a == b)


def _equal_mappings(a: dict[Any, Any], b: dict[Any, Any], seen: set[tuple[int, int]]) -> bool:
    if a.keys() != b.keys():
        return False
    return all(_equal(a[key], b[key], seen) for key in a)
