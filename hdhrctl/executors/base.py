"""Command executor interfaces."""

from __future__ import annotations

from typing import Protocol


class CommandExecutor(Protocol):
    def execute(self, command_line: str) -> str:
        """Run a command line against the appliance tool and return its raw output."""
