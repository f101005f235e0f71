# -*- coding: utf-8 -*-
"""REPL session configuration and script generation.

The generated script looks like::

    # SessionConfig.imports
    __repl_before__ = [...]   # SessionConfig.before
    __repl_after__ = [...]    # SessionConfig.after, reversed
    # SessionConfig.repl_code: runs before-code, the REPL, then after-code

before/after are evaluated by the REPL's own evaluator, so they may use
top-level await and the names they bind are visible to submitted code.
"""

from __future__ import annotations

import asyncio
import os
import shutil
import sys
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field

from repl_queue.exceptions import MissingRequiredConfigError, SessionError
from repl_queue.session.session import ReplSession

DEFAULT_SCRIPT_FILE_NAME = "script.py"
DEFAULT_EOF = b"\x00\x01\x00"
DEFAULT_REPL_CODE = (
    "from repl_queue.session.script import run_script\n"
    "run_script(globals(), before=__repl_before__, after=__repl_after__)"
)

logger = structlog.get_logger(__name__)


def default_build_command(config: SessionConfig, working_dir: str, script_path: str) -> list[str]:
    """Return argv running script_path with the configured interpreter."""
    return [config.python_binary, script_path]


class SessionConfig(BaseModel):
    """Set up a REPL session: context code, teardown, interpreter and working dir."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")

    imports: list[str] = Field(default_factory=list, description="Module-level code run first.")
    before: list[str] = Field(
        default_factory=list,
        description="Code run before the REPL starts (setup).",
    )
    repl_code: str = Field(default=DEFAULT_REPL_CODE, description="Code that runs the REPL.")
    after: list[str] = Field(
        default_factory=list,
        description="Code run after the REPL ends (teardown), in reverse order.",
    )
    script_file_name: str = DEFAULT_SCRIPT_FILE_NAME
    # (config, working_dir, script_path) -> argv
    build_command: Optional[Callable[..., list[str]]] = None
    copy_dirs: list[str] = Field(
        default_factory=list,
        description="Directories copied into the session's temporary working directory.",
    )
    python_path: Optional[str] = Field(default=None, description="PYTHONPATH for the child.")
    python_binary: str = Field(default=sys.executable)
    eof: bytes = Field(default=DEFAULT_EOF, min_length=1)

    @classmethod
    def build(cls, **fields: object) -> SessionConfig:
        """Build a config from defaults and the given fields."""
        return cls(**fields)  # type: ignore[arg-type]

    def build_script(self) -> str:
        """Assemble the source of the script run by the child interpreter."""
        imports = "\n".join(self.imports)
        before = list(self.before)
        after = list(reversed(self.after))
        return (
            f"{imports}\n"
            f"__repl_before__ = {before!r}\n"
            f"__repl_after__ = {after!r}\n"
            f"{self.repl_code}\n"
        )

    def build_env(self) -> dict[str, str]:
        env = dict(os.environ)
        env["PYTHONIOENCODING"] = "utf-8"
        if self.python_path:
            env["PYTHONPATH"] = self.python_path
        return env

    async def start(self) -> ReplSession:
        """Write the script into a temporary directory and start the child.

        Raises:
            SessionError: If a directory in copy_dirs cannot be copied.
            MissingRequiredConfigError: If build_command produces no command.
        """
        working_dir = tempfile.TemporaryDirectory(prefix="repl_queue_")
        working_dir_path = working_dir.name
        try:
            script_path = Path(working_dir_path) / self.script_file_name
            script_path.write_text(self.build_script(), encoding="utf-8")
            for directory in self.copy_dirs:
                self._copy_dir(directory, working_dir_path)

            build = self.build_command or default_build_command
            argv = build(self, working_dir_path, str(script_path))
            if not argv:
                raise MissingRequiredConfigError("build_command returned an empty command")
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=working_dir_path,
                env=self.build_env(),
            )
        except BaseException:
            working_dir.cleanup()
            raise

        logger.debug(
            "session_started",
            session_pid=process.pid,
            session_working_dir=working_dir_path,
        )
        return ReplSession(working_dir, process, eof=self.eof)

    @staticmethod
    def _copy_dir(directory: str, working_dir_path: str) -> None:
        source = Path(directory)
        target = Path(working_dir_path) / source.name
        try:
            shutil.copytree(source, target, dirs_exist_ok=True)
        except (OSError, shutil.Error) as e:
            raise SessionError(
                f"failed to copy dir [{directory}] to [{working_dir_path}]: {e}"
            ) from e
