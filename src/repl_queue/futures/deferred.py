# -*- coding: utf-8 -*-
"""Completable future: an asyncio future paired with its completion handles."""

from __future__ import annotations

import asyncio
from collections.abc import Generator, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


def _retrieve_exception(future: asyncio.Future[Any]) -> None:
    """Observe a rejection so asyncio does not report it as never retrieved."""
    if not future.cancelled():
        future.exception()


@dataclass(slots=True)
class Deferred(Generic[T]):
    """A future whose outcome is set from the outside.

    Completable exactly once: after the first successful complete/fail (or after
    the future was cancelled by its awaiter) further attempts are ignored and
    return False.

    Unpacks as ``future, complete, fail`` and can be awaited directly.
    """

    future: asyncio.Future[T]

    @property
    def done(self) -> bool:
        """True once the future holds a result, an exception or was cancelled."""
        return self.future.done()

    @property
    def cancelled(self) -> bool:
        return self.future.cancelled()

    def complete(self, value: T) -> bool:
        """Resolve the future with value.

        Returns:
            True if the future was resolved by this call, False if it was already settled.
        """
        if self.future.done():
            return False
        self.future.set_result(value)
        return True

    def fail(self, error: BaseException) -> bool:
        """Reject the future with error.

        Returns:
            True if the future was rejected by this call, False if it was already settled.
        """
        if self.future.done():
            return False
        self.future.set_exception(error)
        return True

    def fail_silently(self, error: BaseException) -> bool:
        """Reject the future and observe the rejection at the same time.

        For futures created speculatively that may never be awaited: no
        "exception was never retrieved" diagnostic is emitted for them.
        """
        rejected = self.fail(error)
        if rejected:
            self.future.add_done_callback(_retrieve_exception)
        return rejected

    def __iter__(self) -> Iterator[Any]:
        yield self.future
        yield self.complete
        yield self.fail

    def __await__(self) -> Generator[Any, None, T]:
        return self.future.__await__()


def create_deferred(loop: asyncio.AbstractEventLoop | None = None) -> Deferred[T]:
    """Create a pending Deferred bound to loop (default: the running loop)."""
    resolved_loop = loop if loop is not None else asyncio.get_running_loop()
    return Deferred[T](future=resolved_loop.create_future())
