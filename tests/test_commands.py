from __future__ import annotations

import pytest

from hdhrctl.core.commands import (
    DISCOVER_COMMAND,
    SCAN_COMMAND,
    SET_TARGET_COMMAND,
    SYS_FEATURES_COMMAND,
    TUNER_STATUS_COMMAND,
    TunerCommandBuilder,
    command_line,
)
from hdhrctl.core.errors import ConfigurationError


class StaticDefaults:
    device_id = "103440A8"
    tuner_id = 1


def test_command_line_without_device() -> None:
    assert command_line(DISCOVER_COMMAND) == "discover"


def test_command_line_with_device() -> None:
    assert command_line(SYS_FEATURES_COMMAND, "103440A8") == "103440A8 get /sys/features"


def test_build_substitutes_tuner_and_appends_params() -> None:
    builder = TunerCommandBuilder()
    line = builder.build(SET_TARGET_COMMAND, tuner_id=0, device_id="103440A8", params=["rtp://10.0.0.2:5000"])
    assert line == "103440A8 set /tuner0/target rtp://10.0.0.2:5000"


def test_build_defaults_from_session() -> None:
    builder = TunerCommandBuilder(defaults=StaticDefaults())
    assert builder.build(SCAN_COMMAND) == "103440A8 scan /tuner1"
    assert builder.build(TUNER_STATUS_COMMAND, tuner_id=0) == "103440A8 get /tuner0/status"


def test_build_without_session_requires_ids() -> None:
    builder = TunerCommandBuilder()
    with pytest.raises(ConfigurationError):
        builder.build(SCAN_COMMAND, device_id="103440A8")
    with pytest.raises(ConfigurationError):
        builder.build(SCAN_COMMAND, tuner_id=0)
