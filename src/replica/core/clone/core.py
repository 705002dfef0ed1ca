"""Deep clone engine with cycle detection and prototype preservation.

Usage:
    original = {"tags": ["a", "b"], "when": datetime(2020, 1, 1)}
    original["self"] = original

    copy = clone(original)
    assert copy["self"] is copy
    assert copy["tags"] is not original["tags"]

    # Records keep their prototype and accessor properties
    copy = clone(record)
    assert copy.proto is record.proto

Traversal order per node:
    1. Scalars, None, functions and classes are returned unchanged.
    2. A node already in the cache resolves to its cached clone. This runs
       before any descent, which is what terminates cycles.
    3. Slot-state values (dates, patterns) are rebuilt from their scalar state.
    4. Mutable containers are allocated empty, registered, then filled.
    5. Exceptions are allocated from their args, registered, then given cloned
       args, cause, context and built-in fields.
"""

from __future__ import annotations

import logging
import warnings
from collections import defaultdict
from dataclasses import replace
from typing import Any, TypeVar

from replica.config import CloneSettings, UnsupportedPolicy
from replica.core.attributes import builtin_members, instance_attributes, set_slots
from replica.core.clone.models import IdentityCache, UnsupportedCloneWarning, UnsupportedTypeError
from replica.core.clone.operations import (
    allocate_empty,
    find_rebuilder,
    is_atomic,
    is_opaque,
    is_unsupported,
)
from replica.core.record import Accessor, Record
from replica.core.types import Clone

logger = logging.getLogger("replica.clone")

T = TypeVar("T")


def clone(
    value: T,
    cache: IdentityCache | None = None,
    *,
    settings: CloneSettings | None = None,
) -> Clone[T]:
    """Return a structurally independent deep copy of value.

    Args:
        value: Root of the value graph to copy.
        cache: Identity cache to use. Defaults to a fresh one; pass a seeded
            cache to substitute replacements for specific originals.
        settings: Clone settings. Defaults to CloneSettings() from environment.

    Returns:
        Clone sharing no mutable node with value, except functions, classes
        and modules.

    Raises:
        UnsupportedTypeError: If an unsupported container is met under the
            "error" policy.
    """
    if cache is None:
        cache = IdentityCache()
    if settings is None:
        settings = CloneSettings()
    cloner = Cloner(cache, settings.on_unsupported)
    copy = cloner.clone(value)

    if settings.on_unsupported == "warn":
        for cls in cloner.degraded:
            warnings.warn(
                f"clone() cannot copy the contents of {cls.__name__}; "
                f"the clone is an empty {cls.__name__}.",
                UnsupportedCloneWarning,
                stacklevel=2,
            )
    return copy


class Cloner:
    """Recursive cloner bound to one identity cache.

    Args:
        cache: Identity cache shared by every node of one traversal.
        on_unsupported: Policy for containers with hidden storage.

    Attributes:
        degraded: Unsupported container types cloned empty so far, in the
            order first met. clone() warns about each under "warn".
    """

    def __init__(self, cache: IdentityCache, on_unsupported: UnsupportedPolicy = "warn") -> None:
        self._cache = cache
        self._on_unsupported = on_unsupported
        self.degraded: list[type] = []

    def clone(self, value: Any) -> Any:
        """Clone one node of the graph, descending into its children."""
        if is_atomic(value) or is_opaque(value):
            return value

        if value in self._cache:
            return self._cache[value]

        rebuilder = find_rebuilder(value)
        if rebuilder is not None:
            copy = rebuilder(value)
            self._cache.register(value, copy)
            return copy

        if isinstance(value, Record):
            return self._clone_record(value)
        if isinstance(value, list):
            return self._clone_list(value)
        if isinstance(value, tuple):
            return self._clone_tuple(value)
        if isinstance(value, dict):
            return self._clone_dict(value)
        if isinstance(value, BaseException):
            return self._clone_exception(value)
        if is_unsupported(value):
            return self._clone_unsupported(value)
        return self._clone_instance(value)

    def _clone_record(self, value: Record) -> Record:
        copy = type(value).create(value.proto)
        self._cache.register(value, copy)

        for key in value.own_keys():
            descriptor = value.descriptor(key)
            if descriptor is None:
                continue
            if isinstance(descriptor, Accessor):
                copy.define(key, descriptor)
            else:
                copy.define(key, replace(descriptor, value=self.clone(descriptor.value)))

        self._copy_attributes(value, copy)
        for descriptor, item in set_slots(value):
            # Record's own slots were rebuilt above
            if descriptor.__objclass__ is Record:
                continue
            descriptor.__set__(copy, self.clone(item))
        return copy

    def _clone_list(self, value: list[Any]) -> list[Any]:
        cls = type(value)
        copy = [] if cls is list else cls.__new__(cls)
        self._cache.register(value, copy)

        for item in value:
            copy.append(self.clone(item))

        if cls is not list:
            self._copy_own_state(value, copy)
        return copy

    def _clone_tuple(self, value: tuple[Any, ...]) -> tuple[Any, ...]:
        # Tuples are immutable, so they can only be registered once built
        items = [self.clone(item) for item in value]
        if value in self._cache:
            # Reached again through a cycle while cloning its items
            return self._cache[value]

        cls = type(value)
        if cls is tuple:
            copy = tuple(items)
        elif hasattr(cls, "_make"):
            copy = cls._make(items)
        else:
            copy = cls.__new__(cls, items)
        self._cache.register(value, copy)

        if cls is not tuple:
            self._copy_own_state(value, copy)
        return copy

    def _clone_dict(self, value: dict[Any, Any]) -> dict[Any, Any]:
        cls = type(value)
        copy = {} if cls is dict else cls.__new__(cls)
        if isinstance(value, defaultdict):
            copy.default_factory = value.default_factory
        self._cache.register(value, copy)

        # Keys are hashable and treated as names, not cloned
        for key, item in list(value.items()):
            copy[key] = self.clone(item)

        if cls is not dict:
            self._copy_own_state(value, copy)
        return copy

    def _clone_exception(self, value: BaseException) -> BaseException:
        cls = type(value)
        # Built-in __new__ derives fields such as OSError.errno from args
        copy = cls.__new__(cls, *value.args)
        self._cache.register(value, copy)

        copy.args = self.clone(value.args)
        # Setting __cause__ also sets __suppress_context__, restored below
        copy.__cause__ = self.clone(value.__cause__)
        copy.__context__ = self.clone(value.__context__)
        copy.__traceback__ = value.__traceback__
        for descriptor in builtin_members(cls):
            try:
                item = descriptor.__get__(value, cls)
            except AttributeError:
                continue
            item = self.clone(item)
            try:
                descriptor.__set__(copy, item)
            except AttributeError:
                # Read-only, already derived from args by __new__
                continue

        self._copy_own_state(value, copy)
        return copy

    def _clone_unsupported(self, value: Any) -> Any:
        cls = type(value)
        if self._on_unsupported == "error":
            raise UnsupportedTypeError(f"clone() cannot copy the contents of {cls.__name__}")
        if cls not in self.degraded:
            self.degraded.append(cls)
        logger.debug("Cloned %s as an empty instance", cls.__qualname__)

        copy = allocate_empty(value)
        self._cache.register(value, copy)
        if type(copy) is cls:
            self._copy_own_state(value, copy)
        return copy

    def _clone_instance(self, value: Any) -> Any:
        cls = type(value)
        copy = cls.__new__(cls)
        self._cache.register(value, copy)
        self._copy_own_state(value, copy)
        return copy

    def _copy_own_state(self, value: Any, copy: Any) -> None:
        """Copy instance __dict__ entries and set __slots__ slots onto copy.

        Writes bypass __setattr__ and properties, so frozen dataclasses and
        classes with validating setters are cloned as they are.
        """
        self._copy_attributes(value, copy)
        for descriptor, item in set_slots(value):
            descriptor.__set__(copy, self.clone(item))

    def _copy_attributes(self, value: Any, copy: Any) -> None:
        attributes = instance_attributes(value)
        if not attributes:
            return
        target = instance_attributes(copy)
        for name, item in list(attributes.items()):
            target[name] = self.clone(item)
