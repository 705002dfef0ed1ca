"""Clone functionality: deep clone engine, identity cache, and rebuilders."""

from replica.core.clone.core import Cloner, clone
from replica.core.clone.models import (
    IdentityCache,
    UnsupportedCloneWarning,
    UnsupportedTypeError,
)
from replica.core.clone.operations import (
    SLOT_STATE_REBUILDERS,
    allocate_empty,
    find_rebuilder,
    is_atomic,
    is_opaque,
    is_unsupported,
)

__all__ = [
    # Models
    "IdentityCache",
    "UnsupportedTypeError",
    "UnsupportedCloneWarning",
    # Operations
    "SLOT_STATE_REBUILDERS",
    "allocate_empty",
    "find_rebuilder",
    "is_atomic",
    "is_opaque",
    "is_unsupported",
    # Core
    "clone",
    "Cloner",
]
