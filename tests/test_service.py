from __future__ import annotations

import pytest

from hdhrctl.core.config import Config
from hdhrctl.core.errors import ConfigurationError, DeviceDiscoveryError, FormatError
from hdhrctl.core.service import HdhrService

DEVICE_ID = "103440A8"

SCAN_REPORT = """\
SCAN: 57000000 (us-bcast:2)
LOCK: none (ss=45 snq=0 seq=0)
SCAN: 473000000 (us-bcast:14)
LOCK: 8vsb (ss=83 snq=67 seq=100)
PROGRAM 3: 14.1 KPXB-DT
PROGRAM 4: 14.2 ION
"""


class FakeExecutor:
    def __init__(self, responses: dict[str, str] | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[str] = []

    def execute(self, command_line: str) -> str:
        self.calls.append(command_line)
        return self.responses.get(command_line, "")


def _service(responses: dict[str, str]) -> tuple[HdhrService, FakeExecutor]:
    executor = FakeExecutor(responses)
    return HdhrService(executor=executor), executor


def test_discover_then_scan_end_to_end() -> None:
    service, executor = _service(
        {
            "discover": "hdhomerun device 103440A8 found at 192.168.1.217\n",
            f"{DEVICE_ID} scan /tuner0": SCAN_REPORT,
        }
    )

    devices = service.discover()
    service.set_current_device_id(next(iter(devices)))
    service.set_current_tuner_id(0)
    channels = service.scan()

    assert list(channels) == [14]
    assert sorted(channels[14].programs) == [3, 4]
    assert executor.calls == ["discover", f"{DEVICE_ID} scan /tuner0"]


def test_discover_no_devices_is_error() -> None:
    service, _ = _service({"discover": "no devices found\n"})
    with pytest.raises(DeviceDiscoveryError):
        service.discover()


def test_scan_requires_session() -> None:
    service, executor = _service({})
    with pytest.raises(ConfigurationError):
        service.scan()
    assert executor.calls == []


def test_scan_format_error_propagates() -> None:
    service, _ = _service({f"{DEVICE_ID} scan /tuner1": "SCAN: 1 (us-bcast:2)\nBOGUS: line\n"})
    service.set_current_device_id(DEVICE_ID)
    service.set_current_tuner_id(1)
    with pytest.raises(FormatError):
        service.scan()


def test_get_features_defaults_to_current_device() -> None:
    service, executor = _service({f"{DEVICE_ID} get /sys/features": "channelmap: us-bcast us-cable\n"})
    service.set_current_device_id(DEVICE_ID)
    assert service.get_features() == {"channelmap": ("us-bcast", "us-cable")}
    assert service.get_features("1040ABCD") == {}
    assert executor.calls[-1] == "1040ABCD get /sys/features"


def test_tuner_status_uses_session_defaults() -> None:
    service, _ = _service({f"{DEVICE_ID} get /tuner0/status": "ch=8vsb:473000000 lock=8vsb ss=83 snq=67 seq=100\n"})
    service.set_current_device_id(DEVICE_ID)
    service.set_current_tuner_id(0)
    status = service.get_tuner_status()
    assert status["lock"] == "8vsb"
    assert status["ss"] == "83"


def test_tuner_status_explicit_ids_without_session() -> None:
    service, executor = _service({"1040ABCD get /tuner1/status": "ss=100 snq=95 seq=100"})
    assert service.get_tuner_status(1, "1040ABCD") == {"ss": "100", "snq": "95", "seq": "100"}
    assert executor.calls == ["1040ABCD get /tuner1/status"]


def test_current_accessors_track_mutations() -> None:
    service, _ = _service({f"{DEVICE_ID} get /sys/features": "channelmap: us-bcast\n"})
    service.set_current_device_id(DEVICE_ID)
    service.set_current_tuner_id(1)
    service.set_channel_map("us-bcast")
    service.set_channel("auto:473000000")
    service.set_program(3)
    assert service.current_device_id == DEVICE_ID
    assert service.current_tuner_id == 1
    assert service.current_channel_map == "us-bcast"
    assert service.current_channel == "auto:473000000"
    assert service.current_program == 3


def test_from_config_applies_tuner_overrides() -> None:
    config = Config(device_tuners={DEVICE_ID: (0, 1, 2)})
    service = HdhrService.from_config(config, executor=FakeExecutor())
    service.set_current_device_id(DEVICE_ID)
    service.set_current_tuner_id(2)
    assert service.list_tuners() == (0, 1, 2)


def test_from_config_builds_subprocess_executor() -> None:
    service = HdhrService.from_config(Config(command="/opt/hdhomerun_config", timeout_s=5.0))
    assert service.device.executor.command == "/opt/hdhomerun_config"
    assert service.device.executor.timeout_s == 5.0
