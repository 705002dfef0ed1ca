"""Tests for promise-style combinators.

Critical Invariants:
- all_of preserves input order regardless of completion order
- The first settlement in real time decides, not the first by position
- Later settlements never change a decided result
- Callbacks are deferred even for already-settled items
"""

import asyncio
import logging

import pytest

from replica import (
    AggregateError,
    CombinatorSettings,
    SettledStatus,
    all_of,
    all_settled,
    any_of,
    race,
)


async def resolve_after(delay: float, value):
    await asyncio.sleep(delay)
    return value


async def reject_after(delay: float, error: BaseException):
    await asyncio.sleep(delay)
    raise error


def resolved(value) -> asyncio.Future:
    future = asyncio.get_running_loop().create_future()
    future.set_result(value)
    return future


def rejected(error: BaseException) -> asyncio.Future:
    future = asyncio.get_running_loop().create_future()
    future.set_exception(error)
    return future


# all_of


@pytest.mark.asyncio
async def test_all_of_preserves_input_order():
    """CRITICAL: values come back in input order, not completion order."""
    result = await all_of([resolve_after(0.03, 1), 2, resolve_after(0.001, 3)])
    assert result == [1, 2, 3]


@pytest.mark.asyncio
async def test_all_of_mixed_futures_and_values():
    result = await all_of([resolved(1), resolved(2), 3])
    assert result == [1, 2, 3]


@pytest.mark.asyncio
async def test_all_of_rejects_with_the_error():
    boom = ValueError("boom")
    with pytest.raises(ValueError) as info:
        await all_of([resolved(1), rejected(boom)])
    assert info.value is boom


@pytest.mark.asyncio
async def test_all_of_first_rejection_in_time_wins():
    """CRITICAL: the earliest rejection decides, whatever its position."""
    late = ValueError("late")
    early = KeyError("early")
    with pytest.raises(KeyError) as info:
        await all_of([reject_after(0.03, late), reject_after(0.001, early)])
    assert info.value is early


@pytest.mark.asyncio
async def test_all_of_empty_input_resolves_immediately():
    aggregate = all_of([])
    assert aggregate.done()
    assert await aggregate == []


@pytest.mark.asyncio
async def test_all_of_accepts_any_iterable():
    result = await all_of(x for x in (resolved("a"), "b"))
    assert result == ["a", "b"]


@pytest.mark.asyncio
async def test_all_of_ignores_settlements_after_rejection():
    """Later settlements are observed but never change the decided outcome."""
    boom = RuntimeError("boom")
    slow_ok = asyncio.ensure_future(resolve_after(0.01, "ok"))
    slow_fail = asyncio.ensure_future(reject_after(0.01, ValueError("ignored")))
    aggregate = all_of([rejected(boom), slow_ok, slow_fail])

    with pytest.raises(RuntimeError):
        await aggregate
    await asyncio.wait([slow_ok, slow_fail])
    await asyncio.sleep(0)

    assert aggregate.exception() is boom


@pytest.mark.asyncio
async def test_callbacks_are_deferred():
    """CRITICAL: already-settled items are observed only after the caller yields."""
    aggregate = all_of([1, resolved(2)])
    assert not aggregate.done()
    assert await aggregate == [1, 2]


# any_of


@pytest.mark.asyncio
async def test_any_of_first_success():
    result = await any_of([rejected(ValueError("x")), resolved(2)])
    assert result == 2


@pytest.mark.asyncio
async def test_any_of_plain_value_counts_as_fulfilled():
    result = await any_of([rejected(ValueError("x")), "plain"])
    assert result == "plain"


@pytest.mark.asyncio
async def test_any_of_first_fulfilment_in_time_wins():
    result = await any_of([resolve_after(0.03, "slow"), resolve_after(0.001, "fast")])
    assert result == "fast"


@pytest.mark.asyncio
async def test_any_of_aggregates_errors_in_input_order():
    """CRITICAL: AggregateError lists errors by position, not by completion time."""
    x = ValueError("x")
    y = ValueError("y")
    with pytest.raises(AggregateError) as info:
        await any_of([reject_after(0.02, x), reject_after(0.001, y)])
    assert info.value.errors == [x, y]


@pytest.mark.asyncio
async def test_any_of_empty_input_rejects_with_empty_aggregate():
    aggregate = any_of([])
    assert aggregate.done()
    with pytest.raises(AggregateError) as info:
        await aggregate
    assert info.value.errors == []


@pytest.mark.asyncio
async def test_any_of_success_after_failures():
    result = await any_of(
        [
            reject_after(0.001, ValueError("a")),
            reject_after(0.002, ValueError("b")),
            resolve_after(0.01, "c"),
        ]
    )
    assert result == "c"


@pytest.mark.asyncio
async def test_cancelled_item_counts_as_rejection():
    never = asyncio.get_running_loop().create_future()
    never.cancel()
    with pytest.raises(AggregateError) as info:
        await any_of([never])
    assert isinstance(info.value.errors[0], asyncio.CancelledError)


# all_settled and race


@pytest.mark.asyncio
async def test_all_settled_reports_every_outcome():
    boom = ValueError("boom")
    outcomes = await all_settled([resolve_after(0.01, 1), rejected(boom), 3])

    assert [o.status for o in outcomes] == [
        SettledStatus.FULFILLED,
        SettledStatus.REJECTED,
        SettledStatus.FULFILLED,
    ]
    assert outcomes[0].unwrap() == 1
    assert outcomes[1].error is boom
    with pytest.raises(ValueError):
        outcomes[1].unwrap()


@pytest.mark.asyncio
async def test_all_settled_empty_input():
    assert await all_settled([]) == []


@pytest.mark.asyncio
async def test_race_settles_like_first_item():
    assert await race([resolve_after(0.03, "slow"), resolve_after(0.001, "fast")]) == "fast"

    with pytest.raises(KeyError):
        await race([resolve_after(0.03, "slow"), reject_after(0.001, KeyError("k"))])


@pytest.mark.asyncio
async def test_race_requires_items():
    with pytest.raises(ValueError):
        race([])


# Logging


@pytest.mark.asyncio
async def test_ignored_settlements_are_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="replica.combinators")
    await any_of([resolved(1), resolved(2)])
    await asyncio.sleep(0)

    assert "ignoring fulfilled of item 1" in caplog.text


@pytest.mark.asyncio
async def test_ignored_settlement_logging_can_be_disabled(caplog):
    caplog.set_level(logging.DEBUG, logger="replica.combinators")
    settings = CombinatorSettings(log_ignored_settlements=False)
    await any_of([resolved(1), resolved(2)], settings=settings)
    await asyncio.sleep(0)

    assert "ignoring" not in caplog.text
