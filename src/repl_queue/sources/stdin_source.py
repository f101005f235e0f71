# -*- coding: utf-8 -*-
"""Line-oriented input source reading a pipe or TTY (stdin by default)."""

from __future__ import annotations

import asyncio
import codecs
import sys
from collections.abc import Callable
from typing import Any, TextIO

import structlog

from repl_queue.sources.base import IInputSource

# One chunk per line; a session frames each submission as a single line.
_LINE_LIMIT = 16 * 1024 * 1024


class StdinSource(IInputSource):
    """Emit each line read from stream as a text data event.

    loop.connect_read_pipe() reads the stream's file descriptor directly and
    bypasses any TextIOWrapper, so lines are decoded here with the stream's
    own encoding when it has one (the configured encoding otherwise).
    """

    def __init__(
        self,
        stream: TextIO | Any | None = None,
        *,
        encoding: str = "utf-8",
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the source.

        Args:
            stream: File-like object with a fileno() (defaults to sys.stdin).
            encoding: Fallback encoding for streams that do not declare one.
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        super().__init__()
        self._stream = stream if stream is not None else sys.stdin
        stream_encoding = getattr(self._stream, "encoding", None)
        self._encoding = stream_encoding or encoding
        self._errors = getattr(self._stream, "errors", None) or "strict"
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._transport: asyncio.ReadTransport | None = None
        self._reader_task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        if self._reader_task is not None or self._paused:
            return
        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader(limit=_LINE_LIMIT)
        protocol = asyncio.StreamReaderProtocol(reader)
        self._transport, _ = await loop.connect_read_pipe(lambda: protocol, self._stream)
        self._reader_task = asyncio.create_task(self._read_lines(reader))
        self._logger.debug("stdin_source_started", stdin_encoding=self._encoding)

    def pause(self) -> None:
        if self._paused:
            return
        self._paused = True
        transport = self._transport
        if transport is not None and not transport.is_closing():
            transport.pause_reading()
        task = self._reader_task
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()
        self._logger.debug("stdin_source_paused")

    def close(self) -> None:
        self.pause()
        transport = self._transport
        self._transport = None
        if transport is not None:
            transport.close()

    async def _read_lines(self, reader: asyncio.StreamReader) -> None:
        """Read until EOF, emitting one data event per line, then the end event."""
        decoder = codecs.getincrementaldecoder(self._encoding)(errors=self._errors)
        try:
            while not self._paused:
                line = await reader.readline()
                if not line:  # EOF
                    break
                text = decoder.decode(line)
                if text:
                    self._emit_data(text)
        except asyncio.CancelledError:
            self._logger.debug("stdin_source_cancelled")
            raise
        except (OSError, ValueError) as e:
            self._logger.error(
                "stdin_source_read_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
        if self._paused:
            return
        tail = decoder.decode(b"", final=True)
        if tail:
            self._emit_data(tail)
        self._logger.debug("stdin_source_eof")
        self._emit_end()
