"""Queue-specific exceptions."""

from __future__ import annotations


class QueueError(Exception):
    """Base exception for queue operations."""


class QueueClosedError(QueueError):
    """Raised when pushing or unshifting onto a queue that has been closed."""

    def __init__(self, message: str = "Cannot push on a closed queue") -> None:
        super().__init__(message)


class QueueDone(QueueError):
    """Raised by get() once the queue is closed and every buffered item has been delivered."""


class QueueEmpty(QueueError):
    """Raised when getting an item from an empty, still open queue (non-blocking get)."""


class QueueConsumerBusyError(QueueError):
    """Raised when get() is called while another consumer is already waiting on the queue."""
