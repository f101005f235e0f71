# -*- coding: utf-8 -*-
"""Async hand-off queue abstraction and implementation."""

from repl_queue.queue.base import IAsyncQueue
from repl_queue.queue.handoff_queue import HandoffQueue
from repl_queue.queue.messages import QUEUE_DONE, Boxed

__all__ = [
    "IAsyncQueue",
    "HandoffQueue",
    "Boxed",
    "QUEUE_DONE",
]
