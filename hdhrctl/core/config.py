"""Configuration loading and validation for hdhrctl YAML config files."""

from __future__ import annotations

import functools
import json
import logging
import os
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import validators
from jsonschema.exceptions import best_match

from hdhrctl.core.device import DEFAULT_TUNERS
from hdhrctl.core.errors import ConfigFileError, ConfigValidationError
from hdhrctl.executors.subprocess_exec import DEFAULT_COMMAND

LOGGER = logging.getLogger(__name__)


_BOOL_TAG = "tag:yaml.org,2002:bool"


class ConfigLoader(yaml.SafeLoader):
    """SafeLoader for config files.

    Duplicate keys are an error, and yes/no/on/off are left as strings so a
    channel map named ``no`` survives. Device ids must be quoted when they are
    all digits; the schema rejects anything that did not load as a string.
    """

    yaml_implicit_resolvers = {
        first_char: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
        for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }

    def construct_unique_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        mapping: dict[Any, Any] = {}
        for key_node, value_node in node.value:
            key = self.construct_object(key_node, deep=deep)
            if key in mapping:
                mark = key_node.start_mark
                raise ConfigValidationError(
                    f"Duplicate key '{key}' at line {mark.line + 1}, column {mark.column + 1}"
                )
            mapping[key] = self.construct_object(value_node, deep=deep)
        return mapping


ConfigLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    ConfigLoader.construct_unique_mapping,
)


@dataclass(frozen=True)
class Config:
    command: str = DEFAULT_COMMAND
    timeout_s: float | None = None
    device_id: str | None = None
    tuner_id: int | None = None
    channel_map: str | None = None
    target_protocol: str = "rtp"
    tuners: tuple[int, ...] = DEFAULT_TUNERS
    device_tuners: dict[str, tuple[int, ...]] = field(default_factory=dict)
    source: Path | None = None


@functools.lru_cache(maxsize=1)
def _config_validator() -> Any:
    schema = json.loads(
        resources.files("hdhrctl.schemas").joinpath("config.schema.json").read_text(encoding="utf-8")
    )
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def default_config_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "hdhrctl/config.yaml"


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigFileError(f"Could not read config file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=ConfigLoader)
    except yaml.YAMLError as exc:
        raise ConfigValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigValidationError(f"Config file {path} must contain a mapping at root")
    return loaded


def _build_config(doc: dict[str, Any], source: Path) -> Config:
    error = best_match(_config_validator().iter_errors(doc))
    if error is not None:
        where = f" ({error.json_path})" if error.path else ""
        raise ConfigValidationError(f"Schema validation failed for {source}{where}: {error.message}")

    tuners = tuple(doc.get("tuners", DEFAULT_TUNERS))
    device_tuners: dict[str, tuple[int, ...]] = {}
    for device_id, device_spec in doc.get("devices", {}).items():
        device_tuners[device_id.upper()] = tuple(device_spec["tuners"])

    tuner_id = doc.get("tuner_id")
    device_id = doc.get("device_id")
    if tuner_id is not None:
        allowed = device_tuners.get(device_id.upper(), tuners) if device_id else tuners
        if tuner_id not in allowed:
            raise ConfigValidationError(
                f"tuner_id {tuner_id} in {source} is not one of the configured tuners: "
                f"{', '.join(str(t) for t in allowed)}"
            )

    return Config(
        command=doc.get("command", DEFAULT_COMMAND),
        timeout_s=float(doc["timeout_s"]) if "timeout_s" in doc else None,
        device_id=device_id,
        tuner_id=tuner_id,
        channel_map=doc.get("channel_map"),
        target_protocol=doc.get("target_protocol", "rtp"),
        tuners=tuners,
        device_tuners=device_tuners,
        source=source,
    )


def load_config(path: Path | None = None) -> Config:
    """Load config from ``path``, else the XDG location, else built-in defaults."""
    if path is None:
        path = default_config_path()
        if not path.is_file():
            LOGGER.debug("No config file at %s; using defaults", path)
            return Config()
    doc = _read_yaml(path)
    return _build_config(doc, path)
