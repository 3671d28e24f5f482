"""Snapshot parser: turns dashboard/chat payloads into a UserSnapshot.

Accepts the dashboard's camelCase keys (``weightKg``, ``eGFR``,
``twinType``) as well as the snake_case field names of UserSnapshot.
Unknown keys are ignored; malformed values raise SnapshotError.
"""

from __future__ import annotations

import json
import logging
from dataclasses import fields
from typing import Any

from lifetwin.domains.twin.domain_logic.twin_models import TwinMode, UserSnapshot

logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """Raised when a snapshot payload cannot be parsed."""


# Dashboard key -> UserSnapshot field (only where the names differ beyond case)
_DASHBOARD_KEYS: dict[str, str] = {
    "twinType": "mode",
    "heightCm": "height_cm",
    "weightKg": "weight_kg",
    "previousWeightKg": "previous_weight_kg",
    "stepsPerDay": "steps_per_day",
    "workoutsPerWeek": "workouts_per_week",
    "restingHeartRate": "resting_heart_rate",
    "averageSleep": "average_sleep_hours",
    "bloodPressureSys": "blood_pressure_sys",
    "bloodPressureDia": "blood_pressure_dia",
    "fastingGlucose": "fasting_glucose",
    "ldlCholesterol": "ldl_cholesterol",
    "hdlCholesterol": "hdl_cholesterol",
    "eGFR": "egfr",
    "monthlyIncome": "monthly_income",
    "fixedCosts": "fixed_costs",
    "lifestyleSpend": "lifestyle_spend",
    "currentSavings": "current_savings",
    "totalDebt": "total_debt",
    "debtInterestRate": "debt_interest_rate",
    "groceriesSpend": "groceries_spend",
    "eatingOutSpend": "eating_out_spend",
    "alcoholSpend": "alcohol_spend",
    "lateNightFoodSpend": "late_night_food_spend",
    "gymSpend": "gym_spend",
    "pharmacySpend": "pharmacy_spend",
    "wellnessSpend": "wellness_spend",
    "subscriptionSpend": "subscription_spend",
}

_MODE_ALIASES: dict[str, TwinMode] = {
    "body": TwinMode.BODY,
    "bodytwin": TwinMode.BODY,
    "money": TwinMode.MONEY,
    "moneytwin": TwinMode.MONEY,
    "life": TwinMode.LIFE,
    "lifetwin": TwinMode.LIFE,
}

_NUMERIC_FIELDS = {f.name for f in fields(UserSnapshot)} - {"mode", "persona"}


def parse_mode(value: Any) -> TwinMode:
    """Parse 'body' / 'BodyTwin' / TwinMode.BODY etc. into a TwinMode."""
    if isinstance(value, TwinMode):
        return value
    mode = _MODE_ALIASES.get(str(value).strip().lower())
    if mode is None:
        raise SnapshotError("twin mode must be one of: body | money | life")
    return mode


def _parse_number(name: str, value: Any) -> float | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise SnapshotError(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise SnapshotError(f"{name} must be a number, got {value!r}") from None
    if number != number or number in (float("inf"), float("-inf")):
        raise SnapshotError(f"{name} must be a finite number")
    if number < 0:
        raise SnapshotError(f"{name} must not be negative, got {number:g}")
    return number


def snapshot_from_dict(data: dict[str, Any]) -> UserSnapshot:
    """Build a UserSnapshot from a dict of dashboard or snake_case keys."""
    if not isinstance(data, dict):
        raise SnapshotError("snapshot must be a JSON object")

    values: dict[str, Any] = {}
    ignored: list[str] = []
    for key, raw in data.items():
        name = _DASHBOARD_KEYS.get(key, key)
        if name == "mode":
            values["mode"] = parse_mode(raw)
        elif name == "persona":
            values["persona"] = str(raw)
        elif name in _NUMERIC_FIELDS:
            values[name] = _parse_number(key, raw)
        else:
            ignored.append(key)

    if ignored:
        logger.debug("Ignoring unknown snapshot keys: %s", ", ".join(sorted(ignored)))
    return UserSnapshot(**values)


def snapshot_from_json(text: str) -> UserSnapshot:
    """Parse a JSON object string into a UserSnapshot."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"snapshot is not valid JSON: {exc.msg}") from exc
    return snapshot_from_dict(data)
