"""Pure functions classifying values and rebuilding slot-state values.

Dates, times, durations and compiled patterns keep their state in C-level
fields that attribute introspection cannot see. They are rebuilt from their
scalar state instead of being copied attribute by attribute.
"""

from __future__ import annotations

import inspect
import re
from array import array
from collections import deque
from collections.abc import Callable
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from functools import partial
from types import EllipsisType, NotImplementedType
from typing import Any
from uuid import UUID

from replica.core.record import Symbol

ATOMIC_TYPES: tuple[type, ...] = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    Decimal,
    Fraction,
    UUID,
    EllipsisType,
    NotImplementedType,
    Enum,
    Symbol,
)
"""Types with value semantics. Instances are returned as-is."""

UNSUPPORTED_CONTAINERS: tuple[type, ...] = (set, frozenset, bytearray, memoryview, array, deque)
"""Containers whose elements live in storage that generic copying skips."""


def is_atomic(value: object) -> bool:
    """Check if value is a scalar returned unchanged by clone()."""
    return isinstance(value, ATOMIC_TYPES)


def is_opaque(value: object) -> bool:
    """Check if value is a function, partial, class or module, shared by reference."""
    return (
        inspect.isroutine(value)
        or isinstance(value, (type, partial))
        or inspect.ismodule(value)
    )


def is_unsupported(value: object) -> bool:
    """Check if value is a container clone() can only rebuild empty."""
    return isinstance(value, UNSUPPORTED_CONTAINERS)


def allocate_empty(value: object) -> Any:
    """Allocate an empty container of value's type.

    memoryview cannot be subclassed or allocated without a buffer, and arrays
    need their typecode. Everything else allocates bare through __new__.
    """
    cls = type(value)
    if isinstance(value, memoryview):
        return memoryview(b"")
    if isinstance(value, array):
        return cls.__new__(cls, value.typecode)
    return cls.__new__(cls)


def rebuild_datetime(value: datetime) -> datetime:
    return type(value)(
        value.year,
        value.month,
        value.day,
        value.hour,
        value.minute,
        value.second,
        value.microsecond,
        value.tzinfo,
        fold=value.fold,
    )


def rebuild_date(value: date) -> date:
    return type(value)(value.year, value.month, value.day)


def rebuild_time(value: time) -> time:
    return type(value)(
        value.hour,
        value.minute,
        value.second,
        value.microsecond,
        value.tzinfo,
        fold=value.fold,
    )


def rebuild_timedelta(value: timedelta) -> timedelta:
    return type(value)(
        days=value.days,
        seconds=value.seconds,
        microseconds=value.microseconds,
    )


def rebuild_pattern(value: re.Pattern[Any]) -> re.Pattern[Any]:
    """Recompile from source and flags.

    The re module caches compiled patterns, so the result may be an interned
    instance. Patterns are immutable; source and flags are what matter.
    """
    return re.compile(value.pattern, value.flags)


SLOT_STATE_REBUILDERS: dict[type, Callable[[Any], Any]] = {
    datetime: rebuild_datetime,
    date: rebuild_date,
    time: rebuild_time,
    timedelta: rebuild_timedelta,
    re.Pattern: rebuild_pattern,
}


def find_rebuilder(value: object) -> Callable[[Any], Any] | None:
    """Find the slot-state rebuilder for value's type, most derived first.

    Args:
        value: Value to look up.

    Returns:
        Rebuild function, or None if value is not a slot-state value.
    """
    for base in type(value).__mro__:
        rebuilder = SLOT_STATE_REBUILDERS.get(base)
        if rebuilder is not None:
            return rebuilder
    return None
