"""Record models: property keys and property descriptors.

A record stores its own properties as a table of descriptors. Each descriptor is
tagged: a DataSlot holds a value, an Accessor holds getter/setter functions that
receive the record they are invoked on.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias


class Symbol:
    """Unique property key that never collides with a string key.

    Two symbols with the same description are still different keys. Symbols
    compare and hash by identity.
    """

    __slots__ = ("description",)

    def __init__(self, description: str | None = None) -> None:
        self.description = description

    def __repr__(self) -> str:
        if self.description is None:
            return "Symbol()"
        return f"Symbol({self.description!r})"


PropertyKey: TypeAlias = str | Symbol
"""Own keys of a record: ordinary strings or symbols."""


@dataclass(frozen=True, slots=True)
class DataSlot:
    """Plain value property."""

    value: Any = None
    enumerable: bool = True
    writable: bool = True
    configurable: bool = True


@dataclass(frozen=True, slots=True)
class Accessor:
    """Getter/setter property.

    getter is called as getter(record); setter as setter(record, value). Either
    may be None, in which case reads yield None and writes are refused.
    """

    getter: Callable[[Any], Any] | None = None
    setter: Callable[[Any, Any], None] | None = None
    enumerable: bool = True
    configurable: bool = True


Descriptor: TypeAlias = DataSlot | Accessor
