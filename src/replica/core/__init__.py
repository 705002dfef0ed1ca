"""Core functionalities: records, deep cloning, and structural equality.

Architecture Note:
    core/ contains synchronous, in-memory algorithms over value graphs.
    Nothing here touches the event loop; for awaitable combinators see
    combinators/.
"""

from replica.core.clone import (
    Cloner,
    IdentityCache,
    UnsupportedCloneWarning,
    UnsupportedTypeError,
    clone,
)
from replica.core.equality import deep_equal
from replica.core.record import (
    Accessor,
    DataSlot,
    Descriptor,
    PropertyKey,
    Record,
    Symbol,
)
from replica.core.types import Clone

__all__ = [
    # Types
    "Clone",
    # Record
    "Record",
    "Symbol",
    "PropertyKey",
    "DataSlot",
    "Accessor",
    "Descriptor",
    # Clone
    "clone",
    "Cloner",
    "IdentityCache",
    "UnsupportedTypeError",
    "UnsupportedCloneWarning",
    # Equality
    "deep_equal",
]
