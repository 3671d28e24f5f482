"""Unit tests for dashboard/chat snapshot parsing."""

from __future__ import annotations

import logging

import pytest

from lifetwin.domains.twin.connectors.snapshot_parser import (
    SnapshotError,
    parse_mode,
    snapshot_from_dict,
    snapshot_from_json,
)
from lifetwin.domains.twin.domain_logic.twin_models import TwinMode


class TestParseMode:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("body", TwinMode.BODY),
            ("BodyTwin", TwinMode.BODY),
            ("MoneyTwin", TwinMode.MONEY),
            (" LIFE ", TwinMode.LIFE),
            (TwinMode.MONEY, TwinMode.MONEY),
        ],
    )
    def test_aliases(self, raw, expected):
        assert parse_mode(raw) is expected

    def test_unknown_mode(self):
        with pytest.raises(SnapshotError, match="body \\| money \\| life"):
            parse_mode("soul")


class TestSnapshotFromDict:
    def test_dashboard_keys(self):
        snapshot = snapshot_from_dict({
            "twinType": "BodyTwin",
            "heightCm": 175,
            "weightKg": 88,
            "averageSleep": 5.5,
            "eGFR": 92,
            "lateNightFoodSpend": 220,
        })
        assert snapshot.mode is TwinMode.BODY
        assert snapshot.height_cm == 175
        assert snapshot.weight_kg == 88
        assert snapshot.average_sleep_hours == 5.5
        assert snapshot.egfr == 92
        assert snapshot.late_night_food_spend == 220

    def test_snake_case_keys(self):
        snapshot = snapshot_from_dict({"mode": "money", "monthly_income": 5000, "persona": "custom"})
        assert snapshot.mode is TwinMode.MONEY
        assert snapshot.monthly_income == 5000

    def test_numeric_strings_are_coerced(self):
        assert snapshot_from_dict({"weightKg": "72.5"}).weight_kg == 72.5

    def test_blank_values_mean_not_provided(self):
        snapshot = snapshot_from_dict({"hba1c": "", "ldlCholesterol": None})
        assert snapshot.hba1c is None
        assert snapshot.ldl_cholesterol is None

    def test_zero_is_kept_but_not_provided(self):
        snapshot = snapshot_from_dict({"monthlyIncome": 0})
        assert snapshot.monthly_income == 0
        assert not snapshot.has("monthly_income")

    def test_defaults_to_life_twin(self):
        assert snapshot_from_dict({}).mode is TwinMode.LIFE

    def test_unknown_keys_are_ignored(self, caplog):
        with caplog.at_level(logging.DEBUG):
            snapshot = snapshot_from_dict({"weightKg": 70, "favouriteColour": "green"})
        assert snapshot.weight_kg == 70
        assert "favouriteColour" in caplog.text

    def test_negative_value_rejected(self):
        with pytest.raises(SnapshotError, match="weightKg must not be negative"):
            snapshot_from_dict({"weightKg": -3})

    def test_non_numeric_value_rejected(self):
        with pytest.raises(SnapshotError, match="stepsPerDay must be a number"):
            snapshot_from_dict({"stepsPerDay": "lots"})

    def test_bool_rejected(self):
        with pytest.raises(SnapshotError):
            snapshot_from_dict({"workoutsPerWeek": True})

    def test_non_finite_rejected(self):
        with pytest.raises(SnapshotError, match="finite"):
            snapshot_from_dict({"totalDebt": "inf"})

    def test_not_a_mapping(self):
        with pytest.raises(SnapshotError):
            snapshot_from_dict([1, 2, 3])

    def test_snapshot_error_is_value_error(self):
        assert issubclass(SnapshotError, ValueError)


class TestSnapshotFromJson:
    def test_parses_object(self):
        snapshot = snapshot_from_json('{"weightKg": 64, "monthlyIncome": 6000}')
        assert snapshot.weight_kg == 64
        assert snapshot.monthly_income == 6000

    def test_invalid_json(self):
        with pytest.raises(SnapshotError, match="not valid JSON"):
            snapshot_from_json("{weightKg: 64")
