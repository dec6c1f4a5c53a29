"""Device gateway: runs commands through an executor and parses device-level responses."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from hdhrctl.core.commands import DISCOVER_COMMAND, SYS_FEATURES_COMMAND, command_line
from hdhrctl.core.errors import ExecutionError
from hdhrctl.core.logsink import NULL_SINK, LogSink, Severity
from hdhrctl.core.model import Device, FeatureMap
from hdhrctl.core.parsers import parse_discovery, parse_features
from hdhrctl.executors.base import CommandExecutor

DEFAULT_TUNERS = (0, 1)


class TunerDirectory:
    """Tuner indices per device, from configuration rather than the device itself."""

    def __init__(
        self,
        default: Sequence[int] = DEFAULT_TUNERS,
        overrides: Mapping[str, Sequence[int]] | None = None,
    ) -> None:
        self.default = tuple(default)
        self.overrides = {device_id.upper(): tuple(tuners) for device_id, tuners in (overrides or {}).items()}

    def tuners_for(self, device_id: str) -> tuple[int, ...]:
        return self.overrides.get(device_id.upper(), self.default)


class HdhrDevice:
    def __init__(
        self,
        executor: CommandExecutor,
        *,
        tuners: TunerDirectory | None = None,
        sink: LogSink = NULL_SINK,
    ) -> None:
        self.executor = executor
        self.tuners = tuners or TunerDirectory()
        self.sink = sink

    def run(self, line: str) -> str:
        try:
            response = self.executor.execute(line)
        except ExecutionError as exc:
            self.sink.log(str(exc), Severity.ERROR)
            raise
        self.sink.log(f"Executing CMD: '{line}' ...\n... Response: '{response}'.", Severity.DEBUG)
        return response

    def discover(self) -> dict[str, Device]:
        response = self.run(command_line(DISCOVER_COMMAND))
        return parse_discovery(response, self.tuners.tuners_for, self.sink)

    def list_tuners(self, device_id: str) -> tuple[int, ...]:
        return self.tuners.tuners_for(device_id)

    def get_features(self, device_id: str) -> FeatureMap:
        response = self.run(command_line(SYS_FEATURES_COMMAND, device_id))
        features = parse_features(response, self.sink)
        self.sink.log(f"Features for {device_id}: {features!r}", Severity.DEBUG)
        return features
