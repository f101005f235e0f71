# -*- coding: utf-8 -*-
"""Driver loop: input source -> queue -> evaluator.

The source's data events are pushed onto the queue as they arrive; a single
consumer iterates the queue and evaluates one chunk at a time. The loop ends
when the queue reports termination (someone else closed it, usually on end of
input) and then pauses the source.
"""

from __future__ import annotations

import asyncio
import sys
import traceback
from types import TracebackType
from typing import Any, Callable, Literal, Optional, TextIO, Type

import structlog

from repl_queue.evaluation import IEvaluator
from repl_queue.exceptions import EvaluationError, QueueClosedError
from repl_queue.queue import IAsyncQueue
from repl_queue.sources import Chunk, IInputSource


class ReplLoop:
    """Evaluates every chunk delivered by an input source, sequentially.

    Run either via run() (awaited until the queue terminates) or via
    start()/stop() / async with loop. The loop never closes the queue itself.
    """

    def __init__(
        self,
        queue: IAsyncQueue[Chunk],
        source: IInputSource,
        evaluator: IEvaluator,
        *,
        on_error: Literal["continue", "stop"] = "continue",
        encoding: str = "utf-8",
        error_stream: Optional[TextIO] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the loop.

        Args:
            queue: Queue between the source and the consumer.
            source: Input source whose data events are pushed onto the queue.
            evaluator: Evaluator invoked once per delivered chunk.
            on_error: "continue" logs evaluation failures and goes on; "stop" re-raises.
            encoding: Encoding used for byte chunks.
            error_stream: Where tracebacks of failed chunks are printed (defaults to sys.stderr).
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._queue = queue
        self._source = source
        self._evaluator = evaluator
        self._on_error = on_error
        self._encoding = encoding
        self._error_stream = error_stream
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._attached = False
        self._evaluations = 0
        self._worker_task: Optional[asyncio.Task[int]] = None

    @property
    def queue(self) -> IAsyncQueue[Chunk]:
        return self._queue

    @property
    def source(self) -> IInputSource:
        return self._source

    @property
    def evaluations(self) -> int:
        """Number of evaluation calls made so far."""
        return self._evaluations

    async def __aenter__(self) -> ReplLoop:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> bool:
        await self.stop()
        return False

    def attach(self) -> None:
        """Subscribe to the source's data events. Idempotent."""
        if self._attached:
            return
        self._source.on_data(self._on_data)
        self._attached = True

    async def run(self) -> int:
        """Evaluate chunks until the queue terminates, then pause the source.

        Returns:
            The number of evaluation calls made by this run.

        Raises:
            EvaluationError: If a chunk fails and on_error is "stop".
        """
        self.attach()
        count = 0
        self._logger.debug("repl_loop_started", repl_on_error=self._on_error)
        try:
            async for chunk in self._queue:
                count += 1
                self._evaluations += 1
                await self._evaluate(chunk)
        finally:
            self._source.pause()
            self._logger.debug("repl_loop_stopped", repl_evaluations=count)
        return count

    async def start(self) -> None:
        """Start run() in a background task. Idempotent."""
        if self._worker_task is not None and not self._worker_task.done():
            return
        self._worker_task = asyncio.create_task(self.run())

    async def wait(self) -> int:
        """Wait for the background task started by start() and return its count."""
        if self._worker_task is None:
            return 0
        return await self._worker_task

    async def stop(self) -> None:
        """Cancel the background task and wait for it to finish. Idempotent."""
        task = self._worker_task
        self._worker_task = None
        if task is None:
            return
        if not task.done():
            task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            self._logger.debug("repl_loop_cancelled")

    def _on_data(self, chunk: Chunk) -> None:
        try:
            self._queue.push(chunk)
        except QueueClosedError:
            self._logger.warning("repl_chunk_after_close", chunk_size=len(chunk))
            self._source.pause()

    async def _evaluate(self, chunk: Chunk) -> None:
        text = chunk.decode(self._encoding) if isinstance(chunk, bytes) else chunk
        try:
            await self._evaluator.evaluate(text)
        except EvaluationError as e:
            self._logger.error(
                "repl_eval_failed",
                error=str(e),
                repl_on_error=self._on_error,
            )
            if self._on_error == "stop":
                raise
            stream = self._error_stream if self._error_stream is not None else sys.stderr
            traceback.print_exception(e.cause if e.cause is not None else e, file=stream)
