"""Simulation config loader: overlays YAML overrides onto the default table."""

from __future__ import annotations

import logging
from dataclasses import asdict, fields, is_dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from lifetwin.domains.twin.domain_logic.simulation_config import (
    DEFAULT_CONFIG,
    SimulationConfig,
)

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a simulation config override is malformed."""


def load_simulation_config(path: str | Path) -> SimulationConfig:
    """Parse a YAML file of overrides into a SimulationConfig.

    The file mirrors the nested structure of SimulationConfig, e.g.::

        version: "2025.1-clinic"
        scoring:
          steps:
            high: 9000

    Keys not present keep their default value. Unknown keys are rejected.
    """
    path = Path(path).expanduser()
    if not path.is_file():
        raise ConfigError(f"Simulation config file does not exist: {path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Simulation config is not valid YAML: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Simulation config must be a mapping, got {type(data).__name__}")

    config = apply_overrides(DEFAULT_CONFIG, data)
    logger.info("Loaded simulation config %s from %s", config.version, path)
    return config


def apply_overrides(base: Any, overrides: dict[str, Any], *, where: str = "config") -> Any:
    """Return a copy of a frozen config dataclass with ``overrides`` applied."""
    known = {f.name: f.type for f in fields(base)}
    changes: dict[str, Any] = {}

    for key, value in overrides.items():
        if key not in known:
            raise ConfigError(f"Unknown simulation config key: {where}.{key}")
        current = getattr(base, key)

        if is_dataclass(current):
            if not isinstance(value, dict):
                raise ConfigError(f"{where}.{key} must be a mapping")
            changes[key] = apply_overrides(current, value, where=f"{where}.{key}")
        elif known[key] == "str":
            changes[key] = str(value)
        else:
            changes[key] = _coerce_number(value, known[key], f"{where}.{key}")

    return replace(base, **changes)


def _coerce_number(value: Any, type_name: str, name: str) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    if type_name == "int":
        if not float(value).is_integer():
            raise ConfigError(f"{name} must be a whole number, got {value!r}")
        return int(value)
    return float(value)


def config_to_dict(config: SimulationConfig) -> dict[str, Any]:
    """Plain nested dict view of a configuration (for display and export)."""
    return asdict(config)
