"""Service layer used by CLI and future UI frontends."""

from __future__ import annotations

from hdhrctl.core.commands import SCAN_COMMAND, TUNER_STATUS_COMMAND
from hdhrctl.core.config import Config
from hdhrctl.core.device import HdhrDevice, TunerDirectory
from hdhrctl.core.logsink import NULL_SINK, LogSink, Severity
from hdhrctl.core.model import Device, FeatureMap, ScanResult, TunerStatus
from hdhrctl.core.parsers import parse_status
from hdhrctl.core.scan_report import parse_scan_report
from hdhrctl.core.session import PROTOCOL_RTP, Session
from hdhrctl.executors.base import CommandExecutor
from hdhrctl.executors.subprocess_exec import SubprocessExecutor


class HdhrService:
    def __init__(
        self,
        *,
        executor: CommandExecutor | None = None,
        tuners: TunerDirectory | None = None,
        sink: LogSink = NULL_SINK,
    ) -> None:
        self.sink = sink
        self.device = HdhrDevice(executor or SubprocessExecutor(), tuners=tuners, sink=sink)
        self.session = Session(self.device, sink=sink)

    @classmethod
    def from_config(
        cls,
        config: Config,
        *,
        executor: CommandExecutor | None = None,
        sink: LogSink = NULL_SINK,
    ) -> HdhrService:
        return cls(
            executor=executor or SubprocessExecutor(config.command, timeout_s=config.timeout_s),
            tuners=TunerDirectory(config.tuners, config.device_tuners),
            sink=sink,
        )

    @property
    def current_device_id(self) -> str:
        return self.session.device_id

    @property
    def current_tuner_id(self) -> int:
        return self.session.tuner_id

    @property
    def current_channel_map(self) -> str:
        return self.session.channel_map

    @property
    def current_channel(self) -> str:
        return self.session.channel

    @property
    def current_program(self) -> int:
        return self.session.program

    def set_current_device_id(self, device_id: str) -> None:
        self.session.set_device_id(device_id)

    def set_current_tuner_id(self, tuner_id: int) -> None:
        self.session.set_tuner_id(tuner_id)

    def discover(self) -> dict[str, Device]:
        return self.device.discover()

    def get_features(self, device_id: str | None = None) -> FeatureMap:
        return self.device.get_features(device_id or self.session.device_id)

    def list_tuners(self, device_id: str | None = None) -> tuple[int, ...]:
        return self.device.list_tuners(device_id or self.session.device_id)

    def set_channel_map(self, channel_map: str) -> None:
        self.session.set_channel_map(channel_map)

    def scan(self) -> ScanResult:
        """Scan the current device and tuner; blocks until the tool finishes the sweep."""
        response = self.session.run_tuner(SCAN_COMMAND)
        return parse_scan_report(response, self.sink)

    def set_channel(self, channel: str) -> None:
        self.session.set_channel(channel)

    def set_program(self, program: int) -> None:
        self.session.set_program(program)

    def set_target(self, ip: str, port: int, protocol: str = PROTOCOL_RTP) -> None:
        self.session.set_target(ip, port, protocol)

    def get_target(self) -> str:
        return self.session.get_target()

    def get_tuner_status(self, tuner_id: int | None = None, device_id: str | None = None) -> TunerStatus:
        tuner_id = self.session.tuner_id if tuner_id is None else tuner_id
        device_id = device_id or self.session.device_id
        response = self.session.run_tuner(TUNER_STATUS_COMMAND, tuner_id=tuner_id, device_id=device_id)
        status = parse_status(response, self.sink)
        self.sink.log(f"Checking status of tuner {tuner_id} on device {device_id}: {status!r}", Severity.DEBUG)
        return status
