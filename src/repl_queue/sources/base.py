# -*- coding: utf-8 -*-
"""Input source interface: a stream of data events that can be paused."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

Chunk = str | bytes


class IInputSource(ABC):
    """Abstract event source feeding chunks of input to subscribers.

    Subscribers register with on_data()/on_end(); start() begins delivery.
    After pause() no further data events are emitted.
    """

    def __init__(self) -> None:
        self._data_callbacks: list[Callable[[Chunk], None]] = []
        self._end_callbacks: list[Callable[[], None]] = []
        self._paused = False
        self._ended = False

    def on_data(self, callback: Callable[[Chunk], None]) -> None:
        """Register callback to receive every data chunk."""
        self._data_callbacks.append(callback)

    def on_end(self, callback: Callable[[], None]) -> None:
        """Register callback invoked once when the input is exhausted."""
        self._end_callbacks.append(callback)

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def ended(self) -> bool:
        return self._ended

    @abstractmethod
    async def start(self) -> None:
        """Begin delivering events. Idempotent."""
        ...

    @abstractmethod
    def pause(self) -> None:
        """Stop reading input. No data events are delivered afterwards."""
        ...

    def close(self) -> None:
        """Release resources held by the source. Implies pause()."""
        self.pause()

    def _emit_data(self, chunk: Chunk) -> None:
        if self._paused:
            return
        for callback in list(self._data_callbacks):
            callback(chunk)

    def _emit_end(self) -> None:
        if self._ended:
            return
        self._ended = True
        for callback in list(self._end_callbacks):
            callback()
