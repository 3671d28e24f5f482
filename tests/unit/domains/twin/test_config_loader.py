"""Unit tests for YAML simulation config overrides."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from lifetwin.domains.twin.domain_logic.config_loader import (
    ConfigError,
    apply_overrides,
    config_to_dict,
    load_simulation_config,
)
from lifetwin.domains.twin.domain_logic.engine import run_simulation
from lifetwin.domains.twin.domain_logic.simulation_config import (
    CONFIG_VERSION,
    DEFAULT_CONFIG,
)


def _write(tmp_path, text: str):
    path = tmp_path / "simulation.yaml"
    path.write_text(text)
    return path


class TestDefaultConfig:
    def test_is_frozen(self):
        with pytest.raises(FrozenInstanceError):
            DEFAULT_CONFIG.version = "other"  # type: ignore[misc]

    def test_to_dict(self):
        data = config_to_dict(DEFAULT_CONFIG)
        assert data["version"] == CONFIG_VERSION
        assert data["scoring"]["base_score"] == 50
        assert data["simulation"]["exercise"]["ramp_months"] == 12
        assert data["reporting"]["recommendations"]["max_recommendations"] == 4


class TestApplyOverrides:
    def test_nested_override(self):
        config = apply_overrides(DEFAULT_CONFIG, {"scoring": {"steps": {"high": 9000}}})
        assert config.scoring.steps.high == 9000.0
        assert config.scoring.steps.medium == DEFAULT_CONFIG.scoring.steps.medium
        assert DEFAULT_CONFIG.scoring.steps.high == 8000

    def test_float_field_accepts_int(self):
        config = apply_overrides(DEFAULT_CONFIG, {"scoring": {"savings_rate": {"high": 1}}})
        assert config.scoring.savings_rate.high == 1.0

    def test_int_field_rejects_fraction(self):
        with pytest.raises(ConfigError, match="config.scoring.base_score must be a whole number"):
            apply_overrides(DEFAULT_CONFIG, {"scoring": {"base_score": 50.5}})

    def test_int_field_accepts_whole_float(self):
        config = apply_overrides(DEFAULT_CONFIG, {"scoring": {"base_score": 40.0}})
        assert config.scoring.base_score == 40
        assert isinstance(config.scoring.base_score, int)

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="config.scoring.stepz"):
            apply_overrides(DEFAULT_CONFIG, {"scoring": {"stepz": {}}})

    def test_section_must_be_mapping(self):
        with pytest.raises(ConfigError, match="must be a mapping"):
            apply_overrides(DEFAULT_CONFIG, {"scoring": 5})

    def test_bool_is_not_a_number(self):
        with pytest.raises(ConfigError, match="must be a number"):
            apply_overrides(DEFAULT_CONFIG, {"scoring": {"steps": {"high": True}}})

    def test_version_is_string(self):
        assert apply_overrides(DEFAULT_CONFIG, {"version": 2026}).version == "2026"


class TestLoadSimulationConfig:
    def test_overrides_change_simulation(self, tmp_path, prediabetic_snapshot):
        path = _write(
            tmp_path,
            'version: "2025.1-lenient"\n'
            "scoring:\n"
            "  steps:\n"
            "    high: 4000\n",
        )
        config = load_simulation_config(path)
        assert config.version == "2025.1-lenient"
        result = run_simulation(prediabetic_snapshot, config)
        # 4500 steps now earns +10 instead of -5.
        assert result.scores.body == 50
        assert result.config_version == "2025.1-lenient"

    def test_empty_file_is_default(self, tmp_path):
        assert load_simulation_config(_write(tmp_path, "")) == DEFAULT_CONFIG

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="does not exist"):
            load_simulation_config(tmp_path / "nope.yaml")

    def test_top_level_must_be_mapping(self, tmp_path):
        with pytest.raises(ConfigError, match="must be a mapping"):
            load_simulation_config(_write(tmp_path, "- 1\n- 2\n"))

    def test_broken_yaml(self, tmp_path):
        with pytest.raises(ConfigError, match="not valid YAML"):
            load_simulation_config(_write(tmp_path, "scoring: [unclosed\n"))

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)
