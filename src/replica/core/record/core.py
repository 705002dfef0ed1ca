"""Keyed records with an explicit prototype link.

Usage:
    point = Record()
    point.define("norm", DataSlot(lambda self: abs(self["x"]) + abs(self["y"])))

    p = Record.create(point)
    p["x"] = 3
    p["y"] = -4
    p.invoke("norm")  # 7, resolved through the prototype

    # Accessors run against the record they are read from
    p.define("double_x", Accessor(getter=lambda self: self["x"] * 2))
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace
from typing import Any

from replica.core.record.models import Accessor, DataSlot, Descriptor, PropertyKey, Symbol

_MISSING = object()


def _is_index(key: PropertyKey) -> bool:
    """Check if key is a canonical non-negative integer string ("0", "17", not "017")."""
    return isinstance(key, str) and key.isdigit() and str(int(key)) == key


class Record:
    """Keyed record whose shared behavior lives on a prototype record.

    Own properties are held as descriptors keyed by string or Symbol. Lookups
    that miss the own table continue along the prototype chain. The prototype
    link is a plain attribute, so a property named "__proto__" is just another
    own key.

    Args:
        proto: Prototype record, or None for a record with no shared behavior.
        **values: Initial enumerable, writable data properties.
    """

    __slots__ = ("_proto", "_properties", "__weakref__")

    def __init__(self, proto: Record | None = None, /, **values: Any) -> None:
        self._proto = proto
        self._properties: dict[PropertyKey, Descriptor] = {}
        for key, value in values.items():
            self._properties[key] = DataSlot(value)

    @classmethod
    def create(cls, proto: Record | None = None) -> Record:
        """Create an empty record linked to proto."""
        return cls(proto)

    @property
    def proto(self) -> Record | None:
        """Prototype this record delegates missing keys to."""
        return self._proto

    def define(self, key: PropertyKey, descriptor: Descriptor) -> None:
        """Define or replace an own property.

        Raises:
            TypeError: If the existing own property is not configurable.
        """
        existing = self._properties.get(key)
        if existing is not None and not existing.configurable:
            raise TypeError(f"Cannot redefine non-configurable property {key!r}")
        self._properties[key] = descriptor

    def descriptor(self, key: PropertyKey) -> Descriptor | None:
        """Own descriptor for key, or None. Never consults the prototype."""
        return self._properties.get(key)

    def own_keys(self) -> list[PropertyKey]:
        """All own keys: index keys ascending, other strings, then symbols.

        Non-enumerable keys are included; inherited keys are not.
        """
        indices: list[str] = []
        strings: list[str] = []
        symbols: list[Symbol] = []
        for key in self._properties:
            if isinstance(key, Symbol):
                symbols.append(key)
            elif _is_index(key):
                indices.append(key)
            else:
                strings.append(key)
        indices.sort(key=int)
        return [*indices, *strings, *symbols]

    def keys(self) -> list[str]:
        """Enumerable own string keys, in own_keys() order."""
        return [
            key
            for key in self.own_keys()
            if isinstance(key, str) and self._properties[key].enumerable
        ]

    def has_own(self, key: PropertyKey) -> bool:
        return key in self._properties

    def has(self, key: PropertyKey) -> bool:
        """Check own and inherited keys."""
        return self._lookup(key) is not None

    def get(self, key: PropertyKey, default: Any = None) -> Any:
        """Read key through the prototype chain. Accessors run against self."""
        descriptor = self._lookup(key)
        if descriptor is None:
            return default
        return self._read(descriptor)

    def set(self, key: PropertyKey, value: Any) -> None:
        """Assign key.

        An accessor found anywhere on the chain receives the write. Otherwise
        the value lands in an own data property, shadowing any inherited one.

        Raises:
            TypeError: If the property is read-only or an accessor without setter.
        """
        descriptor = self._lookup(key)
        if isinstance(descriptor, Accessor):
            if descriptor.setter is None:
                raise TypeError(f"Property {key!r} has a getter but no setter")
            descriptor.setter(self, value)
            return
        if descriptor is not None and not descriptor.writable:
            raise TypeError(f"Cannot assign to read-only property {key!r}")

        own = self._properties.get(key)
        if own is None:
            self._properties[key] = DataSlot(value)
        else:
            self._properties[key] = replace(own, value=value)

    def delete(self, key: PropertyKey) -> None:
        """Remove an own property.

        Raises:
            KeyError: If key is not an own property.
            TypeError: If the property is not configurable.
        """
        descriptor = self._properties.get(key)
        if descriptor is None:
            raise KeyError(key)
        if not descriptor.configurable:
            raise TypeError(f"Cannot delete non-configurable property {key!r}")
        del self._properties[key]

    def invoke(self, key: PropertyKey, *args: Any, **kwargs: Any) -> Any:
        """Call the function stored at key with this record as first argument.

        Raises:
            TypeError: If key does not resolve to a callable.
        """
        method = self.get(key)
        if not callable(method):
            raise TypeError(f"Property {key!r} is not callable")
        return method(self, *args, **kwargs)

    def _lookup(self, key: PropertyKey) -> Descriptor | None:
        record: Record | None = self
        while record is not None:
            descriptor = record._properties.get(key)
            if descriptor is not None:
                return descriptor
            record = record._proto
        return None

    def _read(self, descriptor: Descriptor) -> Any:
        if isinstance(descriptor, Accessor):
            return None if descriptor.getter is None else descriptor.getter(self)
        return descriptor.value

    def __getitem__(self, key: PropertyKey) -> Any:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __setitem__(self, key: PropertyKey, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: PropertyKey) -> None:
        self.delete(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, (str, Symbol)) and self.has(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __repr__(self) -> str:
        shown = {}
        for key in self.keys():
            descriptor = self._properties[key]
            shown[key] = descriptor.value if isinstance(descriptor, DataSlot) else "<accessor>"
        return f"{type(self).__name__}({shown!r})"
