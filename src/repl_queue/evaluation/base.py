# -*- coding: utf-8 -*-
"""Evaluator interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class IEvaluator(ABC):
    """Evaluates chunks of source text for their side effects."""

    @abstractmethod
    async def evaluate(self, source: str) -> None:
        """Evaluate source.

        Args:
            source: Code to run. The result, if any, is not returned; evaluated
                code reports through side effects (e.g. writing to stdout).

        Raises:
            EvaluationError: If the code fails to compile or raises.
        """
        ...
