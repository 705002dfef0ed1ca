"""Promise-style combinators over awaitables and plain values.

Usage:
    # Values in input order, whatever order the items finish in
    values = await all_of([fetch(1), 2, fetch(3)])

    # First item to fulfil wins; AggregateError only if every item rejects
    value = await any_of([primary(), mirror(), cache_lookup()])

    # Never rejects; one Settled per item
    outcomes = await all_settled([risky_a(), risky_b()])

Each combinator returns an asyncio.Future immediately and must be called while
an event loop is running. Items are turned into futures (plain values become
already-fulfilled ones) and observed through done-callbacks. The loop always
schedules those callbacks, so even already-settled items are observed only
after the calling code yields.

Once the combined future is decided, later settlements are still observed,
which retrieves their exceptions, and then ignored. There is no cancellation:
cancelling the returned future leaves the items running. A cancelled item
counts as rejected with CancelledError, the way asyncio.gather treats it.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable
from functools import partial
from typing import Any, TypeAlias, TypeVar

from replica.combinators.models import AggregateError, Settled
from replica.config import CombinatorSettings

logger = logging.getLogger("replica.combinators")

T = TypeVar("T")

Item: TypeAlias = T | Awaitable[T]
"""A combinator input: plain value or something to await."""


def _to_future(item: Item[T], loop: asyncio.AbstractEventLoop) -> asyncio.Future[T]:
    """Wrap item in a future: awaitables are scheduled, values pre-fulfilled."""
    if inspect.isawaitable(item):
        return asyncio.ensure_future(item, loop=loop)
    future: asyncio.Future[T] = loop.create_future()
    future.set_result(item)
    return future


def _outcome(future: asyncio.Future[Any]) -> Settled[Any]:
    """Read a done future's outcome, retrieving any exception."""
    if future.cancelled():
        return Settled.rejected(asyncio.CancelledError())
    error = future.exception()
    if error is not None:
        return Settled.rejected(error)
    return Settled.fulfilled(future.result())


def _watch(
    items: Iterable[Item[Any]],
    on_settled: Callable[[int, Settled[Any]], None],
    aggregate: asyncio.Future[Any],
    name: str,
    settings: CombinatorSettings,
) -> int:
    """Attach on_settled to every item; return the item count.

    on_settled only runs while aggregate is pending.
    """
    loop = aggregate.get_loop()
    futures = [_to_future(item, loop) for item in items]

    def observe(index: int, future: asyncio.Future[Any]) -> None:
        outcome = _outcome(future)
        if aggregate.done():
            if settings.log_ignored_settlements:
                logger.debug(
                    "%s: ignoring %s of item %d, result already decided",
                    name,
                    outcome.status.value,
                    index,
                )
            return
        on_settled(index, outcome)

    for index, future in enumerate(futures):
        future.add_done_callback(partial(observe, index))
    return len(futures)


def all_of(
    items: Iterable[Item[T]],
    *,
    settings: CombinatorSettings | None = None,
) -> asyncio.Future[list[T]]:
    """Fulfil with every item's value, or reject with the first rejection.

    Args:
        items: Awaitables and plain values.
        settings: Combinator settings. Defaults to CombinatorSettings().

    Returns:
        Future of the values in input order. It rejects with the first
        exception observed in real time, not the first by position.
    """
    settings = settings or CombinatorSettings()
    aggregate: asyncio.Future[list[T]] = asyncio.get_running_loop().create_future()
    values: list[Any] = []
    fulfilled = 0

    def on_settled(index: int, outcome: Settled[T]) -> None:
        nonlocal fulfilled
        if outcome.is_rejected:
            aggregate.set_exception(outcome.error)  # type: ignore[arg-type]
            return
        values[index] = outcome.value
        fulfilled += 1
        if fulfilled == len(values):
            aggregate.set_result(values)

    count = _watch(items, on_settled, aggregate, "all_of", settings)
    # Done-callbacks never run before this function returns
    values.extend([None] * count)
    if count == 0:
        aggregate.set_result([])
    return aggregate


def any_of(
    items: Iterable[Item[T]],
    *,
    settings: CombinatorSettings | None = None,
) -> asyncio.Future[T]:
    """Fulfil with the first value, or reject once every item rejected.

    Args:
        items: Awaitables and plain values.
        settings: Combinator settings. Defaults to CombinatorSettings().

    Returns:
        Future of the first value fulfilled in real time. If all items reject
        it rejects with AggregateError holding the errors in input order;
        with no items it rejects with an empty AggregateError.
    """
    settings = settings or CombinatorSettings()
    aggregate: asyncio.Future[T] = asyncio.get_running_loop().create_future()
    errors: list[Any] = []
    rejected = 0

    def on_settled(index: int, outcome: Settled[T]) -> None:
        nonlocal rejected
        if outcome.is_fulfilled:
            aggregate.set_result(outcome.value)  # type: ignore[arg-type]
            return
        errors[index] = outcome.error
        rejected += 1
        if rejected == len(errors):
            aggregate.set_exception(AggregateError(errors))

    count = _watch(items, on_settled, aggregate, "any_of", settings)
    errors.extend([None] * count)
    if count == 0:
        aggregate.set_exception(AggregateError([]))
    return aggregate


def all_settled(
    items: Iterable[Item[T]],
    *,
    settings: CombinatorSettings | None = None,
) -> asyncio.Future[list[Settled[T]]]:
    """Fulfil with one Settled per item, in input order. Never rejects."""
    settings = settings or CombinatorSettings()
    aggregate: asyncio.Future[list[Settled[T]]] = asyncio.get_running_loop().create_future()
    outcomes: list[Any] = []
    settled = 0

    def on_settled(index: int, outcome: Settled[T]) -> None:
        nonlocal settled
        outcomes[index] = outcome
        settled += 1
        if settled == len(outcomes):
            aggregate.set_result(outcomes)

    count = _watch(items, on_settled, aggregate, "all_settled", settings)
    outcomes.extend([None] * count)
    if count == 0:
        aggregate.set_result([])
    return aggregate


def race(
    items: Iterable[Item[T]],
    *,
    settings: CombinatorSettings | None = None,
) -> asyncio.Future[T]:
    """Settle like the first item to settle, fulfilled or rejected.

    Raises:
        ValueError: If items is empty, since nothing could ever settle it.
    """
    settings = settings or CombinatorSettings()
    aggregate: asyncio.Future[T] = asyncio.get_running_loop().create_future()

    def on_settled(index: int, outcome: Settled[T]) -> None:
        if outcome.is_rejected:
            aggregate.set_exception(outcome.error)  # type: ignore[arg-type]
        else:
            aggregate.set_result(outcome.value)  # type: ignore[arg-type]

    materialized = list(items)
    if not materialized:
        raise ValueError("race() requires at least one item")
    _watch(materialized, on_settled, aggregate, "race", settings)
    return aggregate
