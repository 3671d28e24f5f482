"""Dual-path monthly forecaster: baseline vs improved projections.

Every body metric is a linear recurrence stepped by ``project_path``, called
once per path. Slope selection lives in one small function per metric.
Money metrics use a compounding recurrence (``forecast_money``).

A metric whose gating field was not provided gets ``None`` for all 13 months
on both paths. Nothing here raises for missing data.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Callable

from lifetwin.domains.twin.domain_logic.scoring import bmi, round_half_up, total_expenses
from lifetwin.domains.twin.domain_logic.simulation_config import (
    DEFAULT_CONFIG,
    SimulationConfig,
    SleepPhysics,
)
from lifetwin.domains.twin.domain_logic.twin_models import (
    BODY_METRICS,
    FORECAST_MONTHS,
    MONEY_METRICS,
    Forecast,
    UserSnapshot,
)

logger = logging.getLogger(__name__)

Series = list[float | None]


def project_path(
    initial: float,
    slope: float,
    *,
    step: Callable[[int], int] | None = None,
    floor: float | None = None,
    ceiling: float | None = None,
    ndigits: int = 0,
    months: list[int] = FORECAST_MONTHS,
) -> Series:
    """Step ``initial + slope * step(m)`` over the forecast months.

    Args:
        initial: Value at month 0.
        slope: Change per step.
        step: Maps a month index to the number of steps taken (default: m).
        floor: Lower clamp, applied before ``ceiling``.
        ceiling: Upper clamp.
        ndigits: Rounding precision (halves go up); 0 rounds to whole numbers.
    """
    values: Series = []
    for m in months:
        value = initial + slope * (step(m) if step is not None else m)
        if floor is not None:
            value = max(floor, value)
        if ceiling is not None:
            value = min(ceiling, value)
        values.append(round_half_up(value, ndigits))
    return values


def _absent() -> tuple[Series, Series]:
    return [None] * len(FORECAST_MONTHS), [None] * len(FORECAST_MONTHS)


def _junk_food_spend(snapshot: UserSnapshot) -> float:
    return snapshot.get("eating_out_spend") + snapshot.get("late_night_food_spend")


# ---------------------------------------------------------------------------
# Weight
# ---------------------------------------------------------------------------

def weight_slopes(snapshot: UserSnapshot, config: SimulationConfig) -> tuple[float, float]:
    """Monthly kg change on (baseline, improved) paths."""
    w = config.simulation.weight
    workouts = snapshot.get("workouts_per_week")
    steps = snapshot.get("steps_per_day")

    baseline = w.base_monthly_change
    if _junk_food_spend(snapshot) + snapshot.get("alcohol_spend") > w.bad_food_spend_threshold:
        baseline += w.bad_food_penalty

    if workouts >= w.active_workouts and steps >= w.active_steps:
        baseline -= w.active_bonus
    elif workouts >= w.moderate_workouts and steps >= w.moderate_steps:
        baseline -= w.moderate_bonus

    improved = max(w.max_monthly_improvement, baseline - w.active_bonus)
    return baseline, min(baseline, improved)


def forecast_weight(snapshot: UserSnapshot, config: SimulationConfig) -> tuple[Series, Series]:
    if not snapshot.has("weight_kg"):
        return _absent()
    weight = snapshot.get("weight_kg")
    baseline, improved = weight_slopes(snapshot, config)
    return (
        project_path(weight, baseline, ndigits=1),
        project_path(weight, improved, ndigits=1),
    )


# ---------------------------------------------------------------------------
# HbA1c
# ---------------------------------------------------------------------------

def hba1c_slopes(snapshot: UserSnapshot, config: SimulationConfig) -> tuple[float, float]:
    """Monthly HbA1c (%) change on (baseline, improved) paths."""
    h = config.simulation.hba1c
    junk = _junk_food_spend(snapshot)
    alcohol = snapshot.get("alcohol_spend")
    steps = snapshot.get("steps_per_day")

    baseline = 0.0
    if junk > h.junk_spend_high:
        baseline += h.slope_junk_high
    elif junk > h.junk_spend_med:
        baseline += h.slope_junk_med
    elif junk < h.junk_spend_low:
        baseline += h.slope_junk_low

    if alcohol > h.alcohol_high:
        baseline += h.slope_alcohol_high
    elif alcohol > h.alcohol_med:
        baseline += h.slope_alcohol_med

    if steps < h.steps_sedentary:
        baseline += h.slope_sedentary
    elif steps >= h.steps_athlete:
        baseline += h.slope_athlete
    elif steps >= h.steps_active:
        baseline += h.slope_active

    if not snapshot.has("workouts_per_week"):
        baseline += h.slope_no_gym
    elif snapshot.get("workouts_per_week") >= h.workouts_high:
        baseline += h.slope_high_gym

    if snapshot.has("average_sleep_hours") and snapshot.get("average_sleep_hours") < h.sleep_poor:
        baseline += h.slope_poor_sleep

    improved = baseline
    if junk > h.junk_spend_high:
        improved += h.improve_junk_high
    elif junk > h.junk_spend_med:
        improved += h.improve_junk_med
    improved += h.improve_sedentary if steps < h.improve_steps_cut else h.improve_active

    return baseline, min(baseline, max(h.max_drop, improved))


def forecast_hba1c(snapshot: UserSnapshot, config: SimulationConfig) -> tuple[Series, Series]:
    if not (snapshot.has("weight_kg") and snapshot.has("hba1c")):
        return _absent()
    h = config.simulation.hba1c
    hba1c = snapshot.get("hba1c")
    baseline, improved = hba1c_slopes(snapshot, config)
    return (
        project_path(hba1c, baseline, floor=h.min_value, ceiling=h.max_value, ndigits=2),
        project_path(hba1c, improved, floor=h.min_value, ceiling=h.max_value, ndigits=2),
    )


# ---------------------------------------------------------------------------
# LDL cholesterol
# ---------------------------------------------------------------------------

def ldl_slopes(snapshot: UserSnapshot, config: SimulationConfig) -> tuple[float, float]:
    """Monthly LDL (mg/dL) change on (baseline, improved) paths."""
    p = config.simulation.ldl
    bad_fat = _junk_food_spend(snapshot)
    workouts = snapshot.get("workouts_per_week")

    baseline = 0.0
    if bad_fat > p.bad_fat_high:
        baseline += p.slope_bad_fat_high
    elif bad_fat > p.bad_fat_med:
        baseline += p.slope_bad_fat_med
    elif bad_fat < p.bad_fat_low:
        baseline += p.slope_bad_fat_low

    if snapshot.get("alcohol_spend") > p.alcohol_high:
        baseline += p.slope_alcohol

    if workouts >= p.workouts_high:
        baseline += p.slope_gym_high
    elif workouts >= p.workouts_med:
        baseline += p.slope_gym_med
    elif workouts == 0:
        baseline += p.slope_gym_none

    body_mass = bmi(snapshot)
    if body_mass is not None and body_mass >= p.bmi_obese:
        baseline += p.slope_obese

    improved = max(p.max_drop, baseline - p.improved_cardio_impact)
    return baseline, min(baseline, improved)


def forecast_ldl(snapshot: UserSnapshot, config: SimulationConfig) -> tuple[Series, Series]:
    if not (snapshot.has("weight_kg") and snapshot.has("ldl_cholesterol")):
        return _absent()
    p = config.simulation.ldl
    ldl = snapshot.get("ldl_cholesterol")
    baseline, improved = ldl_slopes(snapshot, config)
    # The improved floor never lifts a reading that already sits below it.
    return (
        project_path(ldl, baseline, floor=p.baseline_min),
        project_path(ldl, improved, floor=min(p.improved_min, ldl)),
    )


# ---------------------------------------------------------------------------
# Sleep and resting heart rate
# ---------------------------------------------------------------------------

_SLEEP_FLUCTUATION_FIELDS = (
    "average_sleep_hours",
    "steps_per_day",
    "workouts_per_week",
    "resting_heart_rate",
    "weight_kg",
)


def sleep_fluctuation(snapshot: UserSnapshot, physics: SleepPhysics) -> float:
    """Baseline sleep wobble in [-fluctuation, +fluctuation] hours.

    This is the engine's only pseudo-variation. It is derived from a digest
    of the snapshot's activity fields, so equal snapshots always wobble the
    same way.
    """
    key = "|".join(f"{snapshot.get(name):.3f}" for name in _SLEEP_FLUCTUATION_FIELDS)
    digest = hashlib.sha256(key.encode("utf-8")).digest()
    unit = int.from_bytes(digest[:4], "big") / 0xFFFFFFFF
    return (unit * 2 - 1) * physics.fluctuation


def forecast_sleep(snapshot: UserSnapshot, config: SimulationConfig) -> tuple[Series, Series]:
    if not snapshot.has("weight_kg"):
        return _absent()
    s = config.simulation.sleep
    current = snapshot.get("average_sleep_hours") or s.default_hours
    wobble = sleep_fluctuation(snapshot, s)
    improve_per_month = (s.target_hours - current) / s.months_to_target
    return (
        project_path(current, wobble, step=lambda m: m % s.fluctuation_period, ndigits=1),
        project_path(
            current, improve_per_month, step=lambda m: min(m, s.months_to_target), ndigits=1
        ),
    )


def forecast_rhr(snapshot: UserSnapshot, config: SimulationConfig) -> tuple[Series, Series]:
    if not snapshot.has("weight_kg"):
        return _absent()
    hr = config.simulation.heart_rate
    current = snapshot.get("resting_heart_rate") or hr.default_bpm
    baseline = 0.0 if snapshot.has("workouts_per_week") else hr.sedentary_slope
    return (
        project_path(current, baseline),
        project_path(current, hr.improved_slope, floor=min(hr.floor_bpm, current)),
    )


# ---------------------------------------------------------------------------
# Daily tracking projections: meal cost and exercise minutes
# ---------------------------------------------------------------------------

def forecast_meals_cost(snapshot: UserSnapshot, config: SimulationConfig) -> tuple[Series, Series]:
    if not snapshot.has("weight_kg"):
        return _absent()
    mc = config.simulation.meals_cost
    food_spend = snapshot.get("groceries_spend") + _junk_food_spend(snapshot)
    daily = food_spend / mc.days_per_month
    current = daily if daily > 0 else mc.default_daily_cost
    return (
        project_path(current, mc.baseline_slope),
        project_path(current, mc.improved_slope, floor=min(mc.improved_floor, current)),
    )


def current_exercise_minutes(snapshot: UserSnapshot, config: SimulationConfig) -> float:
    """Estimated exercise minutes per day from workouts and steps."""
    ex = config.simulation.exercise
    workout_minutes = snapshot.get("workouts_per_week") * ex.minutes_per_workout / 7
    step_minutes = min(ex.max_step_minutes, snapshot.get("steps_per_day") / ex.steps_per_minute)
    current = round_half_up(workout_minutes + step_minutes)
    return current if current > 0 else ex.default_minutes


def forecast_exercise(snapshot: UserSnapshot, config: SimulationConfig) -> tuple[Series, Series]:
    if not snapshot.has("weight_kg"):
        return _absent()
    ex = config.simulation.exercise
    current = current_exercise_minutes(snapshot, config)
    baseline = 0.0 if snapshot.has("workouts_per_week") else ex.sedentary_slope
    improved = (ex.target_minutes - current) / ex.ramp_months
    # Both paths start from today's minutes, even above the ceiling.
    return (
        project_path(current, baseline, floor=ex.baseline_floor),
        project_path(current, improved, ceiling=max(ex.improved_ceiling, current)),
    )


# ---------------------------------------------------------------------------
# Money: compounding recurrence
# ---------------------------------------------------------------------------

def discretionary_spend(snapshot: UserSnapshot) -> float:
    return sum(
        snapshot.get(name)
        for name in (
            "lifestyle_spend",
            "eating_out_spend",
            "alcohol_spend",
            "late_night_food_spend",
            "subscription_spend",
        )
    )


def monthly_cut(snapshot: UserSnapshot, config: SimulationConfig) -> float:
    """Monthly saving from trimming discretionary categories on the improved path."""
    r = config.simulation.money
    habit_savings = (
        snapshot.get("eating_out_spend") * r.reduce_eating_out
        + snapshot.get("alcohol_spend") * r.reduce_alcohol
        + snapshot.get("late_night_food_spend") * r.reduce_late_night
        + snapshot.get("subscription_spend") * r.reduce_subscriptions
    )
    general_cut = discretionary_spend(snapshot) * r.reduce_general_discretionary
    return max(general_cut, habit_savings)


def forecast_money(
    snapshot: UserSnapshot, config: SimulationConfig
) -> dict[str, tuple[Series, Series]]:
    """Savings, debt, net worth and spending-category projections."""
    if not snapshot.has("monthly_income"):
        return {metric: _absent() for metric in MONEY_METRICS}

    r = config.simulation.money
    net = snapshot.get("monthly_income") - total_expenses(snapshot)
    cut = monthly_cut(snapshot, config)
    net_improved = net + cut
    savings = snapshot.get("current_savings")
    monthly_rate = snapshot.get("debt_interest_rate") / 100 / 12

    junk = _junk_food_spend(snapshot) + snapshot.get("alcohol_spend")
    health = (
        snapshot.get("groceries_spend")
        + snapshot.get("gym_spend")
        + snapshot.get("wellness_spend")
        + snapshot.get("pharmacy_spend")
    )

    series: dict[str, tuple[Series, Series]] = {metric: ([], []) for metric in MONEY_METRICS}
    debt_base = debt_imp = snapshot.get("total_debt")
    for m in FORECAST_MONTHS:
        savings_base = savings + net * m
        savings_imp = savings + net_improved * m

        if m > 0:
            # Shortfalls are borrowed; the improved path spends its cut on the debt.
            if net < 0:
                debt_base += -net
            if debt_imp > 0 and cut > 0:
                debt_imp = max(0.0, debt_imp - cut)
            if debt_base > 0:
                debt_base *= 1 + monthly_rate
            if debt_imp > 0:
                debt_imp *= 1 + monthly_rate

        net_worth_base = savings_base - debt_base
        reinvested = cut * m * (1 + r.investment_multiplier)

        _append(series["savings"], savings_base, savings_imp)
        _append(series["debt"], debt_base, debt_imp)
        _append(series["net_worth"], net_worth_base, net_worth_base + reinvested)
        _append(series["junk_spend"], junk, junk * r.junk_spend_target)
        _append(series["health_spend"], health, health + junk * r.health_redistribution)

    return series


def _append(pair: tuple[Series, Series], baseline: float, improved: float) -> None:
    pair[0].append(round_half_up(baseline))
    pair[1].append(round_half_up(improved))


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------

_BODY_FORECASTERS: dict[str, Callable[[UserSnapshot, SimulationConfig], tuple[Series, Series]]] = {
    "weight": forecast_weight,
    "hba1c": forecast_hba1c,
    "ldl": forecast_ldl,
    "sleep": forecast_sleep,
    "rhr": forecast_rhr,
    "meals_cost": forecast_meals_cost,
    "exercise": forecast_exercise,
}


def build_forecast(
    snapshot: UserSnapshot, config: SimulationConfig = DEFAULT_CONFIG
) -> Forecast:
    """Project every metric for the snapshot's active twin(s)."""
    forecast = Forecast()

    if snapshot.body_active:
        for metric in BODY_METRICS:
            forecast.set_pair(metric, *_BODY_FORECASTERS[metric](snapshot, config))

    if snapshot.money_active:
        for metric, (baseline, improved) in forecast_money(snapshot, config).items():
            forecast.set_pair(metric, baseline, improved)

    omitted = [m for m in BODY_METRICS + MONEY_METRICS if not forecast.is_present(m)]
    if omitted:
        logger.debug("Forecast omitted for metrics without inputs: %s", ", ".join(omitted))
    return forecast
