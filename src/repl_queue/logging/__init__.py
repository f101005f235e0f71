# -*- coding: utf-8 -*-
"""Logging setup (structlog + Logfire)."""

from repl_queue.logging.config import configure_logging

__all__ = ["configure_logging"]
