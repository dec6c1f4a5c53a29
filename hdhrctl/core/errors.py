"""Domain-specific errors for hdhrctl."""

from __future__ import annotations

from collections.abc import Sequence


class HdhrctlError(Exception):
    """Base error for hdhrctl."""


class ConfigurationError(HdhrctlError):
    """Raised when a session field is unset or a value fails device validation."""

    def __init__(self, message: str, *, value: object = None, valid: Sequence[object] | None = None) -> None:
        super().__init__(message)
        self.value = value
        self.valid = tuple(valid) if valid is not None else None


class FormatError(HdhrctlError):
    """Raised when a command response does not match its expected grammar."""

    def __init__(self, message: str, *, fragment: str) -> None:
        super().__init__(f"{message}: {fragment!r}")
        self.fragment = fragment


class DeviceDiscoveryError(HdhrctlError):
    """Raised when discovery explicitly reports that no devices were found."""


class ExecutionError(HdhrctlError):
    """Raised when the command executor fails to run a command."""

    def __init__(
        self,
        message: str,
        *,
        command_line: str,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command_line = command_line
        self.returncode = returncode
        self.stderr = stderr


class ConfigFileError(HdhrctlError):
    """Raised when reading a configuration file fails."""


class ConfigValidationError(HdhrctlError):
    """Raised when a configuration file does not conform to schema or semantics."""
