"""Logging port used by parsers, session, and service.

The core reports protocol activity through a single-method ``LogSink`` that is
injected at construction. ``NullSink`` is the default and discards everything;
``LoggingSink`` forwards to the standard :mod:`logging` module.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import NoReturn, Protocol


class Severity(IntEnum):
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    ERROR = logging.ERROR


class LogSink(Protocol):
    def log(self, message: str, severity: Severity) -> None:
        """Record a message. Must never raise."""


class NullSink:
    def log(self, message: str, severity: Severity) -> None:
        return None


class LoggingSink:
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("hdhrctl")

    def log(self, message: str, severity: Severity) -> None:
        self.logger.log(int(severity), "%s", message)


NULL_SINK = NullSink()


def raise_logged(sink: LogSink, exc: Exception) -> NoReturn:
    """Log ``exc`` at ERROR severity, then raise it."""
    sink.log(str(exc), Severity.ERROR)
    raise exc
