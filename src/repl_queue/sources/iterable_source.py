# -*- coding: utf-8 -*-
"""In-memory input source replaying a fixed sequence of chunks."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from repl_queue.sources.base import Chunk, IInputSource


class IterableSource(IInputSource):
    """Emit chunks one per event-loop turn, then the end event.

    Useful to drive a REPL loop from code (embedding, tests).
    """

    def __init__(self, chunks: Iterable[Chunk], *, end: bool = True) -> None:
        """Initialize the source.

        Args:
            chunks: Chunks to emit, in order.
            end: Emit the end event once chunks are exhausted.
        """
        super().__init__()
        self._chunks = list(chunks)
        self._end = end
        self._feed_task: asyncio.Task[None] | None = None

    @property
    def feed_task(self) -> asyncio.Task[None] | None:
        return self._feed_task

    async def start(self) -> None:
        if self._feed_task is None and not self._paused:
            self._feed_task = asyncio.create_task(self._feed())

    def pause(self) -> None:
        self._paused = True

    async def _feed(self) -> None:
        for chunk in self._chunks:
            if self._paused:
                return
            self._emit_data(chunk)
            await asyncio.sleep(0)
        if self._end and not self._paused:
            self._emit_end()
