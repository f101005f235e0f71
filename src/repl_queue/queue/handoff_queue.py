# -*- coding: utf-8 -*-
"""In-memory async hand-off queue implementation."""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import AsyncIterator, Callable, Iterable
from typing import Any, Generic, Self, TypeVar, cast

import structlog

from repl_queue.exceptions import (
    QueueClosedError,
    QueueConsumerBusyError,
    QueueDone,
    QueueEmpty,
)
from repl_queue.futures import Deferred, create_deferred
from repl_queue.queue.base import IAsyncQueue
from repl_queue.queue.messages import QUEUE_DONE, Boxed

T = TypeVar("T")


class HandoffQueue(IAsyncQueue[T]):
    """Unbounded FIFO with direct hand-off to a single waiting consumer.

    No locks: every operation except get() runs to completion without
    suspending, so the only shared slot is the waiter of the consumer
    currently suspended in get(). A producer that finds a waiter resolves it
    directly instead of touching the buffer.
    """

    def __init__(
        self,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize an empty, open queue.

        Args:
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._items: deque[Boxed[T]] = deque()
        self._waiter: Deferred[object] | None = None
        self._closed = False
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        waiting = self._waiter is not None and not self._waiter.done
        return f"<{self.__class__.__name__} {state} size={len(self._items)} waiting={waiting}>"

    @property
    def size(self) -> int:
        return len(self._items)

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, *items: T) -> Self:
        self._add(items, self._items.append)
        return self

    def unshift(self, *items: T) -> Self:
        self._add(items, self._items.appendleft)
        return self

    async def get(self) -> T:
        delivered = await self._next_delivery()
        if delivered is QUEUE_DONE:
            raise QueueDone("Queue is closed and drained")
        return cast("Boxed[T]", delivered).unbox()

    def get_nowait(self) -> T:
        if self._items:
            return self._items.popleft().unbox()
        if self._closed:
            raise QueueDone("Queue is closed and drained")
        raise QueueEmpty

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._logger.debug(
                "queue_closed",
                queue_pending_items=len(self._items),
                queue_consumer_waiting=self._waiter is not None and not self._waiter.done,
            )
        waiter = self._waiter
        if waiter is not None:
            waiter.complete(QUEUE_DONE)

    def items(self) -> AsyncIterator[T]:
        return _QueueItems(self)

    def _add(self, items: Iterable[T], place: Callable[[Boxed[T]], None]) -> None:
        """Hand the first item to a waiting consumer, place the rest with place."""
        if self._closed:
            self._logger.warning("queue_push_rejected", queue_pending_items=len(self._items))
            raise QueueClosedError()
        for item in items:
            boxed = Boxed(item)
            waiter = self._waiter
            if waiter is not None and not waiter.done:
                self._waiter = None
                waiter.complete(boxed)
            else:
                place(boxed)

    async def _next_delivery(self) -> Boxed[T] | object:
        """Return the next boxed item, or QUEUE_DONE once closed and drained.

        Suspends only when the buffer is empty and the queue is open.
        """
        if self._items:
            return self._items.popleft()
        if self._closed:
            return QUEUE_DONE

        waiter = self._waiter
        if waiter is not None and not waiter.done:
            raise QueueConsumerBusyError("Another consumer is already waiting on this queue")
        waiter = create_deferred()
        self._waiter = waiter

        try:
            return await waiter
        except asyncio.CancelledError:
            if waiter.cancelled:
                if self._waiter is waiter:
                    self._waiter = None
            else:
                # Delivered but never resumed: keep the item for the next consumer.
                delivered = waiter.future.result()
                if isinstance(delivered, Boxed):
                    self._items.appendleft(delivered)
            raise


class _QueueItems(AsyncIterator[T], Generic[T]):
    """Lazy view over a queue's delivered items.

    Checks for the sentinel before unboxing, so it ends cleanly where a raw
    get() would raise QueueDone.
    """

    def __init__(self, queue: HandoffQueue[T]) -> None:
        self._queue = queue

    def __aiter__(self) -> Self:
        return self

    async def __anext__(self) -> T:
        delivered = await self._queue._next_delivery()
        if delivered is QUEUE_DONE:
            raise StopAsyncIteration
        return cast("Boxed[T]", delivered).unbox()
