"""replica: deep cloning and promise-style combinators for Python.

Usage:
    from replica import all_of, any_of, clone, deep_equal

    graph = {"name": "root", "children": []}
    graph["children"].append(graph)

    copy = clone(graph)
    assert copy["children"][0] is copy
    assert deep_equal(copy, graph)

    async def main():
        values = await all_of([fetch("a"), 2, fetch("c")])   # input order
        first = await any_of([slow_mirror(), fast_mirror()])  # first success
"""

__version__ = "0.1.0"

# Combinators
from replica.combinators import (
    AggregateError,
    Settled,
    SettledStatus,
    all_of,
    all_settled,
    any_of,
    race,
)

# Configuration
from replica.config import CloneSettings, CombinatorSettings

# Core primitives
from replica.core import (
    Accessor,
    Clone,
    DataSlot,
    IdentityCache,
    Record,
    Symbol,
    UnsupportedCloneWarning,
    UnsupportedTypeError,
    clone,
    deep_equal,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "clone",
    "deep_equal",
    "Clone",
    "IdentityCache",
    "UnsupportedTypeError",
    "UnsupportedCloneWarning",
    "Record",
    "Symbol",
    "DataSlot",
    "Accessor",
    # Combinators
    "all_of",
    "any_of",
    "all_settled",
    "race",
    "AggregateError",
    "Settled",
    "SettledStatus",
    # Config
    "CloneSettings",
    "CombinatorSettings",
]
