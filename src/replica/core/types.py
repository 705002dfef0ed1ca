"""Core type definitions for replica."""

from typing import TypeAlias, TypeVar

T = TypeVar("T")

Clone: TypeAlias = T
"""Type alias indicating a value is a deep clone of its input.

When you see `Clone[T]` in a return type, the returned value shares no mutable
node with the argument, except functions and classes, which are shared on purpose.
"""
