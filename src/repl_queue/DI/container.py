# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from repl_queue.config import get_settings
from repl_queue.evaluation import PythonEvaluator
from repl_queue.queue import HandoffQueue
from repl_queue.repl import ReplLoop
from repl_queue.sources import StdinSource


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, queue, input source, evaluator and REPL loop."""

    config = providers.Callable(get_settings)

    repl_queue = providers.Factory(HandoffQueue)

    input_source = providers.Factory(
        StdinSource,
        encoding=config.provided.repl.encoding,
    )

    evaluator = providers.Factory(
        PythonEvaluator,
        allow_top_level_await=config.provided.repl.allow_top_level_await,
        filename=config.provided.repl.filename,
    )

    repl_loop = providers.Factory(
        ReplLoop,
        queue=repl_queue,
        source=input_source,
        evaluator=evaluator,
        on_error=config.provided.repl.on_error,
        encoding=config.provided.repl.encoding,
    )
