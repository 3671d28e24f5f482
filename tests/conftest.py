"""Shared test fixtures for LifeTwin tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (
        "TWIN_HOST",
        "TWIN_PORT",
        "TWIN_LOG_LEVEL",
        "TWIN_ALLOW_INSECURE_BIND",
        "SIMULATION_CONFIG_PATH",
        "DEFAULT_PRIVACY_MODE",
    ):
        monkeypatch.delenv(var, raising=False)

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from lifetwin.domains.twin.connectors.personas import (  # noqa: E402
    get_diabetic_type2_snapshot,
    get_prediabetic_snapshot,
)
from lifetwin.domains.twin.domain_logic.twin_models import (  # noqa: E402
    TwinMode,
    UserSnapshot,
)


def make_junk_spend_snapshot(**overrides) -> UserSnapshot:
    """Sedentary, poor sleep, heavy take-out and alcohol spend; no money basics."""
    values = dict(
        mode=TwinMode.LIFE,
        height_cm=175,
        weight_kg=88,
        steps_per_day=4200,
        workouts_per_week=1,
        average_sleep_hours=5.5,
        hba1c=6.3,
        eating_out_spend=700,
        late_night_food_spend=220,
        alcohol_spend=250,
    )
    values.update(overrides)
    return UserSnapshot(**values)


def make_healthy_snapshot(**overrides) -> UserSnapshot:
    """Active, well-rested, normal HbA1c, saving half of income."""
    values = dict(
        mode=TwinMode.LIFE,
        height_cm=170,
        weight_kg=64,
        steps_per_day=8500,
        workouts_per_week=4,
        average_sleep_hours=7.5,
        hba1c=5.3,
        monthly_income=6000,
        fixed_costs=2600,
        lifestyle_spend=400,
    )
    values.update(overrides)
    return UserSnapshot(**values)


@pytest.fixture
def junk_spend_snapshot() -> UserSnapshot:
    return make_junk_spend_snapshot()


@pytest.fixture
def healthy_snapshot() -> UserSnapshot:
    return make_healthy_snapshot()


@pytest.fixture
def prediabetic_snapshot() -> UserSnapshot:
    return get_prediabetic_snapshot()


@pytest.fixture
def diabetic_snapshot() -> UserSnapshot:
    return get_diabetic_type2_snapshot()


@pytest.fixture
def make_junk():
    """Builder for junk-spend snapshots with field overrides."""
    return make_junk_spend_snapshot


@pytest.fixture
def make_healthy():
    """Builder for healthy snapshots with field overrides."""
    return make_healthy_snapshot
