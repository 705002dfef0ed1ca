"""Record functionality: keyed records, symbols, and property descriptors."""

from replica.core.record.core import Record
from replica.core.record.models import (
    Accessor,
    DataSlot,
    Descriptor,
    PropertyKey,
    Symbol,
)

__all__ = [
    # Models
    "Symbol",
    "PropertyKey",
    "DataSlot",
    "Accessor",
    "Descriptor",
    # Core
    "Record",
]
