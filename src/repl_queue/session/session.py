# -*- coding: utf-8 -*-
"""A running REPL session in a child interpreter."""

from __future__ import annotations

import asyncio
import tempfile
from collections.abc import Callable
from types import TracebackType
from typing import Any, Optional, Type

import structlog

from repl_queue.exceptions import SessionError
from repl_queue.session.script import SUBMIT_NAME

_READ_SIZE = 64 * 1024


def frame_submission(code: str, eof: bytes) -> bytes:
    """Encode code as one input line that runs it and then writes eof to stdout."""
    return f"await {SUBMIT_NAME}({code!r}, {eof!r})\n".encode("utf-8")


class ReplSession:
    """Send code to a REPL running in a child process and collect its stdout.

    The temporary working directory lives as long as the session and is
    removed by stop().
    """

    def __init__(
        self,
        working_dir: tempfile.TemporaryDirectory[str],
        process: asyncio.subprocess.Process,
        *,
        eof: bytes,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._working_dir = working_dir
        self._process = process
        self._eof = eof
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._buffer = bytearray()
        self._stderr = bytearray()
        self._stderr_task: Optional[asyncio.Task[None]] = (
            asyncio.create_task(self._drain_stderr()) if process.stderr is not None else None
        )
        self._stopped = False

    @property
    def working_dir(self) -> str:
        return self._working_dir.name

    @property
    def process(self) -> asyncio.subprocess.Process:
        return self._process

    @property
    def returncode(self) -> Optional[int]:
        return self._process.returncode

    @property
    def stderr(self) -> bytes:
        """Everything the child wrote to stderr so far."""
        return bytes(self._stderr)

    async def __aenter__(self) -> ReplSession:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> bool:
        if exc_type is not None and self._process.returncode is None:
            self._process.kill()
        await self.stop()
        return False

    async def repl(self, code: str) -> bytes:
        """Run code in the REPL and return whatever it wrote to stdout.

        Raises:
            SessionError: If the session is stopped or the child exits before answering.
        """
        stdin = self._process.stdin
        if self._stopped or stdin is None:
            raise SessionError("REPL session is not running")
        if stdin.is_closing():
            raise await self._exited_error("REPL process closed its input")
        stdin.write(frame_submission(code, self._eof))
        try:
            await stdin.drain()
        except ConnectionError as e:
            raise await self._exited_error("REPL process closed its input") from e
        return await self._read_until_eof()

    async def stop(self) -> bytes:
        """End the REPL's input, wait for the child to exit and return its remaining stdout.

        Idempotent; later calls return b"".
        """
        if self._stopped:
            return b""
        self._stopped = True
        try:
            stdin = self._process.stdin
            if stdin is not None and not stdin.is_closing():
                stdin.close()
                try:
                    await stdin.wait_closed()
                except ConnectionError:
                    pass  # child already exited; wait() reports its status
            rest = await self._process.stdout.read() if self._process.stdout is not None else b""
            returncode = await self._process.wait()
            if self._stderr_task is not None:
                await self._stderr_task
            output = bytes(self._buffer) + rest
            self._buffer.clear()
            self._logger.debug(
                "session_stopped",
                session_returncode=returncode,
                session_output_bytes=len(output),
            )
            return output
        finally:
            self._working_dir.cleanup()

    async def _read_until_eof(self) -> bytes:
        stdout = self._process.stdout
        if stdout is None:
            raise SessionError("REPL process has no stdout pipe")
        while True:
            index = self._buffer.find(self._eof)
            if index >= 0:
                result = bytes(self._buffer[:index])
                del self._buffer[: index + len(self._eof)]
                return result
            chunk = await stdout.read(_READ_SIZE)
            if not chunk:
                raise await self._exited_error("REPL process exited before finishing the submission")
            self._buffer.extend(chunk)

    async def _drain_stderr(self) -> None:
        stderr = self._process.stderr
        assert stderr is not None
        while chunk := await stderr.read(_READ_SIZE):
            self._stderr.extend(chunk)

    async def _exited_error(self, message: str) -> SessionError:
        returncode = await self._process.wait()
        if self._stderr_task is not None:
            await self._stderr_task
        self._logger.error(
            "session_process_exited",
            session_returncode=returncode,
            session_stderr=self.stderr.decode("utf-8", errors="replace")[-2000:],
        )
        return SessionError(message, returncode=returncode, stderr=self.stderr)
