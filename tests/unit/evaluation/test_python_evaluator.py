# -*- coding: utf-8 -*-
"""Unit tests for PythonEvaluator."""

from __future__ import annotations

from typing import Any

import pytest

from repl_queue.evaluation import PythonEvaluator
from repl_queue.exceptions import EvaluationError


async def test_names_persist_across_evaluations() -> None:
    evaluator = PythonEvaluator()

    await evaluator.evaluate("a = 66\n")
    await evaluator.evaluate("b = 7 + a\n")

    assert evaluator.namespace["b"] == 73


async def test_uses_given_namespace() -> None:
    namespace: dict[str, Any] = {"seed": 2}
    evaluator = PythonEvaluator(namespace)

    await evaluator.evaluate("doubled = seed * 2")

    assert namespace["doubled"] == 4
    assert evaluator.namespace is namespace


async def test_output_goes_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    evaluator = PythonEvaluator()

    await evaluator.evaluate("print('Hello, world!')")

    assert capsys.readouterr().out == "Hello, world!\n"


async def test_top_level_await_is_supported() -> None:
    evaluator = PythonEvaluator()

    await evaluator.evaluate("import asyncio\nawait asyncio.sleep(0)\nresult = 42\n")

    assert evaluator.namespace["result"] == 42


async def test_top_level_await_can_be_disabled() -> None:
    evaluator = PythonEvaluator(allow_top_level_await=False)

    with pytest.raises(EvaluationError) as exc_info:
        await evaluator.evaluate("import asyncio\nawait asyncio.sleep(0)\n")

    assert isinstance(exc_info.value.cause, SyntaxError)


async def test_blank_chunks_are_skipped() -> None:
    evaluator = PythonEvaluator()

    await evaluator.evaluate("   \n")

    assert set(evaluator.namespace) == {"__name__"}


async def test_runtime_error_is_wrapped_with_source_and_cause() -> None:
    evaluator = PythonEvaluator()

    with pytest.raises(EvaluationError, match="ZeroDivisionError") as exc_info:
        await evaluator.evaluate("1 / 0")

    error = exc_info.value
    assert error.source == "1 / 0"
    assert isinstance(error.cause, ZeroDivisionError)
    assert error.__cause__ is error.cause


async def test_syntax_error_is_wrapped() -> None:
    evaluator = PythonEvaluator(filename="<input>")

    with pytest.raises(EvaluationError) as exc_info:
        await evaluator.evaluate("def broken(:\n")

    assert isinstance(exc_info.value.cause, SyntaxError)
    assert exc_info.value.cause.filename == "<input>"


async def test_failure_does_not_reset_namespace() -> None:
    evaluator = PythonEvaluator()
    await evaluator.evaluate("kept = 1")

    with pytest.raises(EvaluationError):
        await evaluator.evaluate("kept = 2\nraise RuntimeError('stop')")

    assert evaluator.namespace["kept"] == 2
