# -*- coding: utf-8 -*-
"""Completable futures."""

from repl_queue.futures.deferred import Deferred, create_deferred

__all__ = ["Deferred", "create_deferred"]
