"""Own-state introspection for plain Python objects.

An object's own state is its instance __dict__ plus every __slots__ slot that
is currently set, gathered across the class MRO. Class attributes, properties
and methods are inherited behavior, not own state.
"""

from __future__ import annotations

from collections.abc import Iterator
from functools import cache
from types import MemberDescriptorType
from typing import Any


def _mangle(cls: type, name: str) -> str:
    """Apply private name mangling the way the compiler does for __slots__."""
    if name.startswith("__") and not name.endswith("__"):
        return f"_{cls.__name__.lstrip('_')}{name}"
    return name


@cache
def slot_descriptors(cls: type) -> tuple[Any, ...]:
    """Member descriptors for every __slots__ entry declared along cls's MRO.

    Args:
        cls: Class to inspect.

    Returns:
        Descriptors in MRO order, base classes last. __dict__ and __weakref__
        entries are skipped.
    """
    found: list[Any] = []
    for klass in cls.__mro__:
        declared = klass.__dict__.get("__slots__", ())
        if isinstance(declared, str):
            declared = (declared,)
        for name in declared:
            if name in ("__dict__", "__weakref__"):
                continue
            descriptor = klass.__dict__.get(_mangle(klass, name))
            if descriptor is not None and hasattr(descriptor, "__set__"):
                found.append(descriptor)
    return tuple(found)


@cache
def builtin_members(cls: type) -> tuple[Any, ...]:
    """Member descriptors declared by built-in classes along cls's MRO.

    Exceptions keep fields such as StopIteration.value, OSError.errno and
    __suppress_context__ here, outside __dict__ and outside any __slots__.
    """
    found: list[Any] = []
    for klass in cls.__mro__:
        if klass.__module__ != "builtins":
            continue
        for descriptor in klass.__dict__.values():
            if isinstance(descriptor, MemberDescriptorType):
                found.append(descriptor)
    return tuple(found)


def exception_state(exc: BaseException) -> dict[str, Any]:
    """Snapshot of the state an exception keeps outside its __dict__.

    Includes args, the explicit cause, the implicit context and every set
    built-in member field. The traceback is left out.
    """
    state: dict[str, Any] = {
        "args": exc.args,
        "__cause__": exc.__cause__,
        "__context__": exc.__context__,
    }
    for descriptor in builtin_members(type(exc)):
        try:
            state[descriptor.__name__] = descriptor.__get__(exc, type(exc))
        except AttributeError:
            continue
    return state


def has_own_state(obj: object) -> bool:
    """Check if obj can carry per-instance attributes at all."""
    return hasattr(obj, "__dict__") or bool(slot_descriptors(type(obj)))


def instance_attributes(obj: object) -> dict[Any, Any]:
    """Instance __dict__ of obj, or an empty dict when it has none."""
    try:
        return vars(obj)
    except TypeError:
        return {}


def set_slots(obj: object) -> Iterator[tuple[Any, Any]]:
    """Yield (descriptor, value) for each slot currently set on obj."""
    for descriptor in slot_descriptors(type(obj)):
        try:
            value = descriptor.__get__(obj, type(obj))
        except AttributeError:
            continue
        yield descriptor, value


def own_state(obj: object) -> dict[Any, Any]:
    """Snapshot of obj's own state keyed by attribute name."""
    state = dict(instance_attributes(obj))
    for descriptor, value in set_slots(obj):
        state[descriptor.__name__] = value
    return state
