"""Boxed queue items and the termination sentinel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Boxed(Generic[T]):
    """Single-slot container for a queued value.

    Boxing lets consumers tell a delivered item from the termination sentinel by
    type alone, whatever the item's value is (None, the sentinel itself, ...).
    """

    value: T

    def unbox(self) -> T:
        return self.value


class _QueueDoneType:
    """Type of the process-wide termination sentinel."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "QUEUE_DONE"

    def __reduce__(self) -> str:
        return "QUEUE_DONE"


QUEUE_DONE: Final = _QueueDoneType()
"""Delivered (unboxed) to a waiting consumer once the queue is closed."""
