# -*- coding: utf-8 -*-
"""Host side of a REPL running in a child interpreter."""

from repl_queue.session.config import (
    DEFAULT_EOF,
    DEFAULT_REPL_CODE,
    SessionConfig,
    default_build_command,
)
from repl_queue.session.session import ReplSession, frame_submission

__all__ = [
    "DEFAULT_EOF",
    "DEFAULT_REPL_CODE",
    "ReplSession",
    "SessionConfig",
    "default_build_command",
    "frame_submission",
]
