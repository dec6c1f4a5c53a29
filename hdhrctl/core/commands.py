"""hdhomerun_config command templates and the tuner command builder."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from hdhrctl.core.errors import ConfigurationError
from hdhrctl.core.logsink import NULL_SINK, LogSink, raise_logged

DISCOVER_COMMAND = "discover"
SYS_FEATURES_COMMAND = "get /sys/features"
SET_CHANNELMAP_COMMAND = "set /tuner{tuner}/channelmap"
SCAN_COMMAND = "scan /tuner{tuner}"
SET_CHANNEL_COMMAND = "set /tuner{tuner}/channel"
TUNER_STATUS_COMMAND = "get /tuner{tuner}/status"
SET_PROGRAM_COMMAND = "set /tuner{tuner}/program"
SET_TARGET_COMMAND = "set /tuner{tuner}/target"
GET_TARGET_COMMAND = "get /tuner{tuner}/target"


class SessionDefaults(Protocol):
    @property
    def device_id(self) -> str: ...

    @property
    def tuner_id(self) -> int: ...


def command_line(command: str, device_id: str | None = None, params: Sequence[object] = ()) -> str:
    """Join an optional device id, the command, and its params into one line."""
    parts: list[str] = []
    if device_id:
        parts.append(device_id)
    parts.append(command)
    parts.extend(str(param) for param in params)
    return " ".join(parts)


class TunerCommandBuilder:
    """Formats tuner-scoped commands, falling back to session values for missing ids."""

    def __init__(self, defaults: SessionDefaults | None = None, sink: LogSink = NULL_SINK) -> None:
        self.defaults = defaults
        self.sink = sink

    def build(
        self,
        template: str,
        tuner_id: int | None = None,
        device_id: str | None = None,
        params: Sequence[object] = (),
    ) -> str:
        if tuner_id is None:
            tuner_id = self._default("tuner_id")
        if device_id is None:
            device_id = self._default("device_id")
        return command_line(template.format(tuner=tuner_id), device_id, params)

    def _default(self, name: str):
        if self.defaults is None:
            raise_logged(
                self.sink,
                ConfigurationError(f"No {name.replace('_', ' ')} given and no session to default from."),
            )
        return getattr(self.defaults, name)
