# -*- coding: utf-8 -*-
"""Async hand-off queue interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Generic, Self, TypeVar

T = TypeVar("T")


class IAsyncQueue(ABC, Generic[T]):
    """Abstract interface for an unbounded async queue with a single consumer.

    Producers push/unshift synchronously; one consumer awaits items with get()
    or iterates with ``async for``. close() ends the stream of items once the
    buffer has drained. Use the exceptions from repl_queue.exceptions
    (QueueClosedError, QueueDone, QueueEmpty, QueueConsumerBusyError) where specified.
    """

    @abstractmethod
    def push(self, *items: T) -> Self:
        """Append items to the back of the queue, in order.

        If a consumer is waiting, the first item is handed to it directly.

        Args:
            items: Zero or more values to enqueue.

        Returns:
            The queue itself, so calls can be chained.

        Raises:
            QueueClosedError: If the queue has been closed.
        """
        ...

    @abstractmethod
    def unshift(self, *items: T) -> Self:
        """Insert items at the front of the queue, one after another.

        If a consumer is waiting, the first item is handed to it directly.
        ``unshift(a, b)`` leaves ``b`` before ``a`` at the front.

        Args:
            items: Zero or more values to enqueue.

        Returns:
            The queue itself, so calls can be chained.

        Raises:
            QueueClosedError: If the queue has been closed.
        """
        ...

    @abstractmethod
    async def get(self) -> T:
        """Remove and return the oldest item. Suspends until one is available.

        Returns:
            The next item from the queue.

        Raises:
            QueueDone: If the queue was closed and all items were delivered.
            QueueConsumerBusyError: If another consumer is already waiting.
        """
        ...

    @abstractmethod
    def get_nowait(self) -> T:
        """Remove and return the oldest item without suspending.

        Raises:
            QueueEmpty: If the queue has no items and is still open.
            QueueDone: If the queue was closed and all items were delivered.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the queue: no more items can be added, consumers stop once it drains.

        Idempotent.
        """
        ...

    @abstractmethod
    def items(self) -> AsyncIterator[T]:
        """Return a lazy, forward-only view of delivered items.

        The view ends the first time termination is observed, and on every
        later advance.
        """
        ...

    @property
    @abstractmethod
    def size(self) -> int:
        """Number of buffered items. A waiting consumer is not counted."""
        ...

    @property
    @abstractmethod
    def closed(self) -> bool:
        """True once close() has been called."""
        ...

    def qsize(self) -> int:
        """Return the number of buffered items."""
        return self.size

    def empty(self) -> bool:
        """Return True if no items are buffered."""
        return self.size == 0

    def __len__(self) -> int:
        return self.size

    def __aiter__(self) -> AsyncIterator[T]:
        return self.items()
