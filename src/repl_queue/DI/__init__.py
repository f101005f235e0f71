# -*- coding: utf-8 -*-
"""Dependency injection."""

from repl_queue.DI.container import Container

__all__ = ["Container"]
