from __future__ import annotations

import logging

import pytest

from hdhrctl.api import Client, ConfigurationError, Config, LoggingSink, TunerDirectory


class FakeExecutor:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def execute(self, command_line: str) -> str:
        self.calls.append(command_line)
        if command_line == "discover":
            return "hdhomerun device 103440A8 found at 192.168.1.217\n"
        if command_line.endswith("get /tuner0/target"):
            return "udp://192.168.1.50:5000\n"
        return ""


def test_public_client_discover() -> None:
    client = Client(executor=FakeExecutor())
    devices = client.discover()
    assert devices["103440A8"].ip == "192.168.1.217"
    assert devices["103440A8"].tuners == (0, 1)


def test_public_client_target_round_trip() -> None:
    executor = FakeExecutor()
    client = Client(executor=executor)
    client.set_current_device_id("103440A8")
    client.set_current_tuner_id(0)

    client.set_target("192.168.1.50", 5000, "udp")
    assert executor.calls[-1] == "103440A8 set /tuner0/target udp://192.168.1.50:5000"
    assert client.get_target() == "udp://192.168.1.50:5000"


def test_public_client_custom_tuners() -> None:
    client = Client(executor=FakeExecutor(), tuners=TunerDirectory((0, 1, 2, 3)))
    client.set_current_device_id("103440A8")
    client.set_current_tuner_id(3)
    assert client.current_tuner_id == 3
    assert client.list_tuners() == (0, 1, 2, 3)


def test_public_client_from_config() -> None:
    client = Client(executor=FakeExecutor(), config=Config(tuners=(0,)))
    client.set_current_device_id("103440A8")
    with pytest.raises(ConfigurationError):
        client.set_current_tuner_id(1)


def test_logging_sink_reports_errors(caplog: pytest.LogCaptureFixture) -> None:
    client = Client(executor=FakeExecutor(), sink=LoggingSink())
    with caplog.at_level(logging.DEBUG, logger="hdhrctl"):
        with pytest.raises(ConfigurationError):
            client.scan()
    assert any(record.levelno == logging.ERROR and "No tuner ID currently set." in record.message for record in caplog.records)
