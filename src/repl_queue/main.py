# -*- coding: utf-8 -*-
"""
Entry point for the REPL.

Orchestrates: logging, settings, container, stdin source, REPL loop, shutdown
(end of input or SIGINT). Chunks flow: stdin -> queue -> REPL loop -> evaluator.

Run with: python -m repl_queue
"""
from __future__ import annotations

import asyncio
import signal
import structlog
from collections.abc import Callable

from repl_queue.DI import Container
from repl_queue.logging import configure_logging


def _setup_sigint(on_interrupt: Callable[[], None]) -> None:
    try:
        loop = asyncio.get_running_loop()
        loop.add_signal_handler(signal.SIGINT, on_interrupt)
    except NotImplementedError:
        pass  # Windows has no add_signal_handler


async def run() -> int:
    """Evaluate stdin line by line until end of input; return the number of evaluations."""
    configure_logging()
    logger = structlog.get_logger("main")

    container = Container()
    repl_loop = container.repl_loop()
    queue = repl_loop.queue
    source = repl_loop.source

    # End of input (or Ctrl-C) closes the queue; the loop drains it and stops.
    source.on_end(queue.close)
    _setup_sigint(queue.close)

    repl_loop.attach()
    await source.start()
    logger.debug("main_repl_started")
    try:
        evaluations = await repl_loop.run()
    finally:
        source.close()
    logger.debug("main_repl_stopped", repl_evaluations=evaluations)
    return evaluations


def main() -> None:
    asyncio.run(run())


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
