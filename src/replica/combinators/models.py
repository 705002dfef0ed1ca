"""Combinator models: settlement records and the aggregate rejection."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class SettledStatus(StrEnum):
    """Final state of one awaited item."""

    FULFILLED = "fulfilled"
    REJECTED = "rejected"


@dataclass(slots=True, frozen=True)
class Settled(Generic[T]):
    """Outcome of one item, as reported by all_settled().

    Attributes:
        status: FULFILLED or REJECTED.
        value: Result if fulfilled.
        error: Exception if rejected.
    """

    status: SettledStatus
    value: T | None = None
    error: BaseException | None = None

    @property
    def is_fulfilled(self) -> bool:
        return self.status == SettledStatus.FULFILLED

    @property
    def is_rejected(self) -> bool:
        return self.status == SettledStatus.REJECTED

    def unwrap(self) -> T:
        """Get value or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    @classmethod
    def fulfilled(cls, value: T) -> Settled[T]:
        return cls(SettledStatus.FULFILLED, value=value)

    @classmethod
    def rejected(cls, error: BaseException) -> Settled[T]:
        return cls(SettledStatus.REJECTED, error=error)


class AggregateError(Exception):
    """Raised by any_of() when every item rejected.

    Attributes:
        errors: Individual exceptions in input order. Empty when any_of()
            was given no items.
    """

    def __init__(
        self,
        errors: Sequence[BaseException],
        message: str = "All awaitables were rejected",
    ) -> None:
        super().__init__(message)
        self.errors: list[BaseException] = list(errors)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.errors!r}, {str(self)!r})"
