"""Session state for one (device, tuner) pair.

A session holds the current device id, tuner id, channel map, channel, and
program. Reading a field that was never set raises ``ConfigurationError``.
Mutations that touch the tuner send their command first and commit the new
value only once the command has succeeded, so an execution failure leaves the
session unchanged.

Sessions are not thread-safe; use one per (device, tuner) pair.
"""

from __future__ import annotations

from collections.abc import Sequence

from hdhrctl.core.commands import (
    GET_TARGET_COMMAND,
    SET_CHANNEL_COMMAND,
    SET_CHANNELMAP_COMMAND,
    SET_PROGRAM_COMMAND,
    SET_TARGET_COMMAND,
    TunerCommandBuilder,
)
from hdhrctl.core.device import HdhrDevice
from hdhrctl.core.errors import ConfigurationError
from hdhrctl.core.logsink import NULL_SINK, LogSink, Severity, raise_logged
from hdhrctl.core.parsers import CHANNELMAP_FEATURE

PROTOCOL_RTP = "rtp"
PROTOCOL_UDP = "udp"
TARGET_PROTOCOLS = (PROTOCOL_RTP, PROTOCOL_UDP)


class Session:
    def __init__(self, device: HdhrDevice, *, sink: LogSink = NULL_SINK) -> None:
        self.device = device
        self.sink = sink
        self.builder = TunerCommandBuilder(defaults=self, sink=sink)
        self._device_id: str | None = None
        self._tuner_id: int | None = None
        self._channel_map: str | None = None
        self._channel: str | None = None
        self._program: int | None = None

    def _require(self, value, message: str):
        if value is None:
            raise_logged(self.sink, ConfigurationError(message))
        return value

    @property
    def device_id(self) -> str:
        return self._require(self._device_id, "No current device ID set.")

    @property
    def tuner_id(self) -> int:
        return self._require(self._tuner_id, "No tuner ID currently set.")

    @property
    def channel_map(self) -> str:
        return self._require(self._channel_map, "No current channel map set.")

    @property
    def channel(self) -> str:
        return self._require(self._channel, "No channel currently set.")

    @property
    def program(self) -> int:
        return self._require(self._program, "No program currently set.")

    def set_device_id(self, device_id: str) -> None:
        self._device_id = device_id

    def set_tuner_id(self, tuner_id: int) -> None:
        device_id = self.device_id
        tuners = self.device.list_tuners(device_id)
        if tuner_id not in tuners:
            raise_logged(
                self.sink,
                ConfigurationError(
                    f"Invalid tuner ID {tuner_id}. Device {device_id} supports these tuner IDs: "
                    f"{', '.join(str(t) for t in tuners)}.",
                    value=tuner_id,
                    valid=tuners,
                ),
            )
        self._tuner_id = tuner_id

    def set_channel_map(self, channel_map: str) -> None:
        device_id = self.device_id
        tuner_id = self.tuner_id
        features = self.device.get_features(device_id)
        available = features.get(CHANNELMAP_FEATURE)
        if available is None:
            self.sink.log(
                f"Device {device_id} reports no {CHANNELMAP_FEATURE} feature; accepting '{channel_map}' unchecked.",
                Severity.DEBUG,
            )
        elif channel_map not in available:
            raise_logged(
                self.sink,
                ConfigurationError(
                    f"{channel_map} is not an available channel map. Device {device_id} supports these "
                    f"channel maps: {', '.join(available)}",
                    value=channel_map,
                    valid=available,
                ),
            )

        self.run_tuner(SET_CHANNELMAP_COMMAND, (channel_map,), tuner_id=tuner_id, device_id=device_id)
        self._channel_map = channel_map

    def set_channel(self, channel: str) -> None:
        self.run_tuner(SET_CHANNEL_COMMAND, (channel,))
        self._channel = channel

    def set_program(self, program: int) -> None:
        self.run_tuner(SET_PROGRAM_COMMAND, (program,))
        self._program = program

    def set_target(self, ip: str, port: int, protocol: str = PROTOCOL_RTP) -> None:
        if protocol not in TARGET_PROTOCOLS:
            raise_logged(
                self.sink,
                ConfigurationError(
                    f"Unsupported target protocol '{protocol}'. Supported: {', '.join(TARGET_PROTOCOLS)}",
                    value=protocol,
                    valid=TARGET_PROTOCOLS,
                ),
            )
        target = f"{protocol}://{ip}:{port}"
        self.sink.log(
            f"Setting tuner {self.tuner_id}, device {self.device_id} to target {target}.",
            Severity.INFO,
        )
        self.run_tuner(SET_TARGET_COMMAND, (target,))

    def get_target(self) -> str:
        """Return the tuner target as the device reports it.

        Surrounding whitespace (the tool's trailing newline) is stripped; the
        response is otherwise not parsed or validated.
        """
        response = self.run_tuner(GET_TARGET_COMMAND).strip()
        self.sink.log(
            f"Found target for tuner {self.tuner_id}, device {self.device_id}: {response}",
            Severity.DEBUG,
        )
        return response

    def run_tuner(
        self,
        template: str,
        params: Sequence[object] = (),
        *,
        tuner_id: int | None = None,
        device_id: str | None = None,
    ) -> str:
        line = self.builder.build(template, tuner_id=tuner_id, device_id=device_id, params=params)
        return self.device.run(line)
