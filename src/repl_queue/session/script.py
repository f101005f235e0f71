# -*- coding: utf-8 -*-
"""Child side of a REPL session: the code a generated session script calls."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Sequence
from functools import partial
from typing import Any

from repl_queue.evaluation import PythonEvaluator
from repl_queue.logging import configure_logging
from repl_queue.repl import run_repl

SUBMIT_NAME = "__repl_submit__"


async def _submit(evaluator: PythonEvaluator, code: str, eof: bytes) -> None:
    """Evaluate code, then write the end-of-output marker even if it failed."""
    try:
        await evaluator.evaluate(code)
    finally:
        sys.stdout.flush()
        sys.stdout.buffer.write(eof)
        sys.stdout.buffer.flush()


async def _main(namespace: dict[str, Any], before: Sequence[str], after: Sequence[str]) -> int:
    evaluator = PythonEvaluator(namespace)
    namespace[SUBMIT_NAME] = partial(_submit, evaluator)
    for code in before:
        await evaluator.evaluate(code)
    evaluations = await run_repl(namespace=namespace, evaluator=evaluator)
    for code in after:
        await evaluator.evaluate(code)
    return evaluations


def run_script(
    namespace: dict[str, Any],
    *,
    before: Sequence[str] = (),
    after: Sequence[str] = (),
) -> int:
    """Run before-code, the REPL over stdin, then after-code, all in namespace.

    after is run in the given order; SessionConfig.build_script() already
    reverses the configured teardown list.
    """
    configure_logging()
    return asyncio.run(_main(namespace, before, after))
