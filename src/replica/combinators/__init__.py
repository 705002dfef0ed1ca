"""Promise-style combinators: all_of, any_of, all_settled, race."""

from replica.combinators.core import Item, all_of, all_settled, any_of, race
from replica.combinators.models import AggregateError, Settled, SettledStatus

__all__ = [
    # Combinators
    "all_of",
    "any_of",
    "all_settled",
    "race",
    "Item",
    # Models
    "AggregateError",
    "Settled",
    "SettledStatus",
]
