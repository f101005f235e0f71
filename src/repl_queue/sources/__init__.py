# -*- coding: utf-8 -*-
"""Input sources feeding chunks to the REPL driver."""

from repl_queue.sources.base import Chunk, IInputSource
from repl_queue.sources.iterable_source import IterableSource
from repl_queue.sources.stdin_source import StdinSource

__all__ = [
    "Chunk",
    "IInputSource",
    "IterableSource",
    "StdinSource",
]
