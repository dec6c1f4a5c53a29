"""Parsers for the discovery list, feature map, and tuner status responses."""

from __future__ import annotations

from collections.abc import Callable

from hdhrctl.core.errors import DeviceDiscoveryError, FormatError
from hdhrctl.core.logsink import NULL_SINK, LogSink, Severity, raise_logged
from hdhrctl.core.model import Device, FeatureMap, TunerStatus
from hdhrctl.core.tokenizer import tokenize

NO_DEVICES_RESPONSE = "no devices found"
CHANNELMAP_FEATURE = "channelmap"

# hdhomerun device <ID> found at <IP>
_DISCOVERY_WORDS = ("hdhomerun", "device", None, "found", "at", None)


def parse_discovery(
    text: str,
    tuners_for: Callable[[str], tuple[int, ...]],
    sink: LogSink = NULL_SINK,
) -> dict[str, Device]:
    if text.strip() == NO_DEVICES_RESPONSE:
        raise_logged(sink, DeviceDiscoveryError("No devices found"))

    devices: dict[str, Device] = {}
    for line in tokenize("\n", text):
        words = tokenize(" ", line)
        if len(words) != len(_DISCOVERY_WORDS) or any(
            expected is not None and word != expected
            for word, expected in zip(words, _DISCOVERY_WORDS)
        ):
            raise_logged(sink, FormatError("Unexpected discovery line", fragment=line))
        device_id, ip = words[2], words[5]
        devices[device_id] = Device(id=device_id, ip=ip, tuners=tuple(tuners_for(device_id)))

    sink.log(f"Discovered devices: {devices!r}", Severity.DEBUG)
    return devices


def parse_features(text: str, sink: LogSink = NULL_SINK) -> FeatureMap:
    features: FeatureMap = {}
    for line in tokenize("\n", text):
        key, sep, remainder = line.partition(":")
        if not sep:
            raise_logged(sink, FormatError("Feature line is missing ':' separator", fragment=line))
        features[key.strip()] = tuple(tokenize(" ", remainder))
    return features


def parse_status(text: str, sink: LogSink = NULL_SINK) -> TunerStatus:
    status: TunerStatus = {}
    for line in tokenize("\n", text):
        for word in tokenize(" ", line):
            key, sep, value = word.partition("=")
            if not sep:
                raise_logged(sink, FormatError("Status token is missing '=' separator", fragment=word))
            status[key] = value
    return status
