# -*- coding: utf-8 -*-
"""REPL driver loop."""

from repl_queue.repl.repl_loop import ReplLoop
from repl_queue.repl.runner import run_repl

__all__ = ["ReplLoop", "run_repl"]
