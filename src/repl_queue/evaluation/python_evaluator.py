# -*- coding: utf-8 -*-
"""Evaluator running Python source in a persistent namespace."""

from __future__ import annotations

import ast
import inspect
from collections.abc import Callable
from typing import Any

import structlog

from repl_queue.evaluation.base import IEvaluator
from repl_queue.exceptions import EvaluationError


class PythonEvaluator(IEvaluator):
    """Execute chunks with exec semantics in one namespace shared across calls.

    Names bound by one chunk are visible to the next, like statements typed
    into an interactive interpreter. With top-level await enabled a chunk may
    ``await`` directly; it then runs as a coroutine on the current loop.
    """

    def __init__(
        self,
        namespace: dict[str, Any] | None = None,
        *,
        allow_top_level_await: bool = True,
        filename: str = "<repl>",
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the evaluator.

        Args:
            namespace: Globals used for evaluation (a fresh one if omitted).
            allow_top_level_await: Compile with PyCF_ALLOW_TOP_LEVEL_AWAIT.
            filename: Filename shown in tracebacks of evaluated code.
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._namespace: dict[str, Any] = (
            namespace if namespace is not None else {"__name__": "__repl__"}
        )
        self._flags = ast.PyCF_ALLOW_TOP_LEVEL_AWAIT if allow_top_level_await else 0
        self._filename = filename
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def namespace(self) -> dict[str, Any]:
        return self._namespace

    async def evaluate(self, source: str) -> None:
        if not source.strip():
            return
        try:
            code = compile(source, self._filename, "exec", flags=self._flags, dont_inherit=True)
            result = eval(code, self._namespace)
            if code.co_flags & inspect.CO_COROUTINE:
                await result
        except Exception as e:
            self._logger.debug(
                "evaluation_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise EvaluationError(
                f"{type(e).__name__}: {e}",
                source=source,
                cause=e,
            ) from e
