"""Executor that shells out to the hdhomerun_config tool."""

from __future__ import annotations

import shlex
import subprocess

from hdhrctl.core.errors import ExecutionError

DEFAULT_COMMAND = "hdhomerun_config"


class SubprocessExecutor:
    def __init__(self, command: str = DEFAULT_COMMAND, *, timeout_s: float | None = None) -> None:
        self.command = command
        self.timeout_s = timeout_s

    def execute(self, command_line: str) -> str:
        try:
            argv = [self.command, *shlex.split(command_line)]
        except ValueError as exc:
            raise ExecutionError(f"Could not parse '{command_line}': {exc}", command_line=command_line) from exc

        # Station names in scan output are not guaranteed to be UTF-8.
        try:
            result = subprocess.run(
                argv,
                check=False,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout_s,
            )
        except FileNotFoundError as exc:
            raise ExecutionError(
                f"Command '{self.command}' not found. Install hdhomerun_config or set 'command' in config.",
                command_line=command_line,
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise ExecutionError(
                f"'{command_line}' timed out after {self.timeout_s}s",
                command_line=command_line,
            ) from exc
        except OSError as exc:
            raise ExecutionError(
                f"Could not run '{command_line}': {exc}",
                command_line=command_line,
            ) from exc

        if result.returncode != 0:
            detail = (result.stderr or "").strip() or (result.stdout or "").strip()
            raise ExecutionError(
                f"'{command_line}' exited with status {result.returncode}: {detail}",
                command_line=command_line,
                returncode=result.returncode,
                stderr=result.stderr or "",
            )
        return result.stdout or ""
