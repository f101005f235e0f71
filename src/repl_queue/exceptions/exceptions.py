"""Custom exceptions for the REPL driver, evaluators and sessions."""

from __future__ import annotations


class ReplError(Exception):
    """Base exception for REPL-related errors."""

    pass


class MissingRequiredConfigError(ReplError):
    """Raised when a required configuration value is missing."""

    pass


class EvaluationError(ReplError):
    """Raised when a chunk of source fails while being evaluated."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.cause = cause


class SessionError(ReplError):
    """Raised when a REPL session cannot be prepared or its child process misbehaves."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        stderr: bytes | None = None,
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
