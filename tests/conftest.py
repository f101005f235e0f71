# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit and integration tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import Mock

import pytest

from repl_queue.queue import HandoffQueue
from repl_queue.sources import Chunk


@pytest.fixture
def logger() -> Mock:
    """Logger double recording structlog-style calls (event name + key/values)."""
    return Mock()


@pytest.fixture
def get_logger(logger: Mock) -> Callable[[str], Any]:
    """Logger factory returning the shared logger double."""
    return lambda name: logger


@pytest.fixture
def queue(get_logger: Callable[[str], Any]) -> HandoffQueue[Any]:
    """Fresh open queue per test."""
    return HandoffQueue[Any](get_logger=get_logger)


@pytest.fixture
def chunk_queue(get_logger: Callable[[str], Any]) -> HandoffQueue[Chunk]:
    """Fresh open queue of input chunks per test."""
    return HandoffQueue[Chunk](get_logger=get_logger)
