"""Stable public API for building tooling on top of hdhrctl.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from hdhrctl.core.config import Config, load_config
from hdhrctl.core.device import TunerDirectory
from hdhrctl.core.errors import (
    ConfigFileError,
    ConfigurationError,
    ConfigValidationError,
    DeviceDiscoveryError,
    ExecutionError,
    FormatError,
    HdhrctlError,
)
from hdhrctl.core.logsink import LoggingSink, LogSink, NullSink, Severity
from hdhrctl.core.model import Device, FeatureMap, Program, ScannedChannel, ScanResult, TunerStatus
from hdhrctl.core.service import HdhrService
from hdhrctl.core.session import PROTOCOL_RTP, PROTOCOL_UDP
from hdhrctl.executors.base import CommandExecutor
from hdhrctl.executors.subprocess_exec import SubprocessExecutor

__all__ = [
    "HdhrctlError",
    "ConfigurationError",
    "ConfigFileError",
    "ConfigValidationError",
    "DeviceDiscoveryError",
    "ExecutionError",
    "FormatError",
    "Config",
    "load_config",
    "Device",
    "FeatureMap",
    "Program",
    "ScannedChannel",
    "ScanResult",
    "TunerStatus",
    "LogSink",
    "LoggingSink",
    "NullSink",
    "Severity",
    "CommandExecutor",
    "SubprocessExecutor",
    "TunerDirectory",
    "PROTOCOL_RTP",
    "PROTOCOL_UDP",
    "Client",
]


class Client:
    """Public client for one HDHomeRun session.

    A `Client` instance wraps command execution, response parsing, and session
    validation behind a stable API intended for third-party tools
    (GUI/TUI/services/scripts). Hold one client per (device, tuner) pair.
    """

    def __init__(
        self,
        *,
        executor: CommandExecutor | None = None,
        tuners: TunerDirectory | None = None,
        sink: LogSink | None = None,
        config: Config | None = None,
    ) -> None:
        if config is not None:
            self._service = HdhrService.from_config(config, executor=executor, sink=sink or NullSink())
        else:
            self._service = HdhrService(executor=executor, tuners=tuners, sink=sink or NullSink())

    @property
    def current_device_id(self) -> str:
        return self._service.current_device_id

    @property
    def current_tuner_id(self) -> int:
        return self._service.current_tuner_id

    @property
    def current_channel_map(self) -> str:
        return self._service.current_channel_map

    @property
    def current_channel(self) -> str:
        return self._service.current_channel

    @property
    def current_program(self) -> int:
        return self._service.current_program

    def set_current_device_id(self, device_id: str) -> None:
        self._service.set_current_device_id(device_id)

    def set_current_tuner_id(self, tuner_id: int) -> None:
        self._service.set_current_tuner_id(tuner_id)

    def discover(self) -> dict[str, Device]:
        return self._service.discover()

    def get_features(self, device_id: str | None = None) -> FeatureMap:
        return self._service.get_features(device_id)

    def list_tuners(self, device_id: str | None = None) -> tuple[int, ...]:
        return self._service.list_tuners(device_id)

    def set_channel_map(self, channel_map: str) -> None:
        self._service.set_channel_map(channel_map)

    def scan(self) -> ScanResult:
        return self._service.scan()

    def set_channel(self, channel: str) -> None:
        self._service.set_channel(channel)

    def set_program(self, program: int) -> None:
        self._service.set_program(program)

    def set_target(self, ip: str, port: int, protocol: str = PROTOCOL_RTP) -> None:
        self._service.set_target(ip, port, protocol)

    def get_target(self) -> str:
        return self._service.get_target()

    def get_tuner_status(self, tuner_id: int | None = None, device_id: str | None = None) -> TunerStatus:
        return self._service.get_tuner_status(tuner_id, device_id)
