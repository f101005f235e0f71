# -*- coding: utf-8 -*-
"""Evaluators run by the REPL driver."""

from repl_queue.evaluation.base import IEvaluator
from repl_queue.evaluation.python_evaluator import PythonEvaluator

__all__ = ["IEvaluator", "PythonEvaluator"]
