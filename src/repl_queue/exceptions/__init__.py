"""Exceptions subpackage."""

from repl_queue.exceptions.exceptions import (
    EvaluationError,
    MissingRequiredConfigError,
    ReplError,
    SessionError,
)
from repl_queue.exceptions.queue_exceptions import (
    QueueClosedError,
    QueueConsumerBusyError,
    QueueDone,
    QueueEmpty,
    QueueError,
)

__all__ = [
    "EvaluationError",
    "MissingRequiredConfigError",
    "ReplError",
    "SessionError",
    "QueueClosedError",
    "QueueConsumerBusyError",
    "QueueDone",
    "QueueEmpty",
    "QueueError",
]
