"""repl-queue: an async hand-off queue piping line input into a sequential evaluator."""

from repl_queue.config import get_settings
from repl_queue.exceptions import QueueClosedError, QueueDone
from repl_queue.futures import Deferred, create_deferred
from repl_queue.queue import QUEUE_DONE, HandoffQueue, IAsyncQueue
from repl_queue.repl import ReplLoop, run_repl
from repl_queue.session import ReplSession, SessionConfig

__version__ = "0.0.1"
__all__ = [
    "Deferred",
    "HandoffQueue",
    "IAsyncQueue",
    "QUEUE_DONE",
    "QueueClosedError",
    "QueueDone",
    "ReplLoop",
    "ReplSession",
    "SessionConfig",
    "create_deferred",
    "get_settings",
    "run_repl",
]
