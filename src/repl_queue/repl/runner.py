# -*- coding: utf-8 -*-
"""Run a REPL over stdin (or another source) until end of input."""

from __future__ import annotations

from typing import Any

from repl_queue.config import Settings, get_settings
from repl_queue.evaluation import IEvaluator, PythonEvaluator
from repl_queue.queue import HandoffQueue
from repl_queue.repl.repl_loop import ReplLoop
from repl_queue.sources import Chunk, IInputSource, StdinSource


async def run_repl(
    *,
    namespace: dict[str, Any] | None = None,
    source: IInputSource | None = None,
    evaluator: IEvaluator | None = None,
    settings: Settings | None = None,
) -> int:
    """Evaluate every chunk of input in namespace until the input ends.

    End of input closes the queue; the loop then drains what is buffered and
    returns.

    Args:
        namespace: Globals for the default PythonEvaluator (e.g. globals() of a script).
        source: Input source (defaults to StdinSource).
        evaluator: Evaluator (defaults to PythonEvaluator over namespace).
        settings: Settings (defaults to get_settings()).

    Returns:
        The number of evaluation calls made.
    """
    repl_settings = (settings if settings is not None else get_settings()).repl
    queue = HandoffQueue[Chunk]()
    if source is None:
        source = StdinSource(encoding=repl_settings.encoding)
    if evaluator is None:
        evaluator = PythonEvaluator(
            namespace,
            allow_top_level_await=repl_settings.allow_top_level_await,
            filename=repl_settings.filename,
        )
    repl_loop = ReplLoop(
        queue,
        source,
        evaluator,
        on_error=repl_settings.on_error,
        encoding=repl_settings.encoding,
    )
    source.on_end(queue.close)
    repl_loop.attach()
    await source.start()
    try:
        return await repl_loop.run()
    finally:
        source.close()
