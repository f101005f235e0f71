"""Configuration subpackage."""

from repl_queue.config.config import (
    AppSettings,
    LoggingSettings,
    ReplSettings,
    Settings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "LoggingSettings",
    "ReplSettings",
    "Settings",
    "get_settings",
]
