"""Core data models used across parsers, session, service, and CLI."""

from __future__ import annotations

from dataclasses import dataclass, field

FeatureMap = dict[str, tuple[str, ...]]
TunerStatus = dict[str, str]


@dataclass(frozen=True)
class Device:
    id: str
    ip: str
    tuners: tuple[int, ...]


@dataclass(frozen=True)
class Program:
    number: int
    friendly_number: str
    friendly_name: str


@dataclass(frozen=True)
class ScannedChannel:
    friendly_number: int
    internal_channel: str
    programs: dict[int, Program] = field(default_factory=dict)
    lock: str = ""
    signal: dict[str, str] = field(default_factory=dict)
    tsid: str | None = None


ScanResult = dict[int, ScannedChannel]
