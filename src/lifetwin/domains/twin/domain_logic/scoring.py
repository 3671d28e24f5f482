"""Composite body and money scores (0-100).

Each score starts from the configured base value, applies independent
additive adjustments and is clamped to [min_score, max_score]. Metrics that
were not provided contribute nothing. All formulas are deterministic.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from lifetwin.domains.twin.domain_logic.simulation_config import (
    DEFAULT_CONFIG,
    ScoringConfig,
    SimulationConfig,
)
from lifetwin.domains.twin.domain_logic.twin_models import TwinMode, UserSnapshot


def _clamp_score(score: float, scoring: ScoringConfig) -> int:
    return int(max(scoring.min_score, min(scoring.max_score, score)))


def round_half_up(value: float, ndigits: int = 0) -> int | float:
    """Round to ``ndigits`` places with halves going away from zero.

    Whole-number rounding returns an int. Built-in ``round`` sends halves to
    the even neighbour, which makes integer series step unevenly.
    """
    quantum = Decimal(1).scaleb(-ndigits)
    rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if ndigits == 0 else float(rounded)


def bmi(snapshot: UserSnapshot) -> float | None:
    """Body-mass index, or None when height or weight is missing."""
    if not (snapshot.has("height_cm") and snapshot.has("weight_kg")):
        return None
    height_m = snapshot.get("height_cm") / 100
    return snapshot.get("weight_kg") / (height_m * height_m)


def total_expenses(snapshot: UserSnapshot) -> float:
    """All monthly outgoings that count against income."""
    return sum(
        snapshot.get(name)
        for name in (
            "fixed_costs",
            "lifestyle_spend",
            "eating_out_spend",
            "groceries_spend",
            "alcohol_spend",
            "late_night_food_spend",
            "gym_spend",
            "wellness_spend",
            "pharmacy_spend",
            "subscription_spend",
        )
    )


# ---------------------------------------------------------------------------
# Body score
# ---------------------------------------------------------------------------

def score_body(snapshot: UserSnapshot, config: SimulationConfig = DEFAULT_CONFIG) -> int | None:
    """Compute the body score, or None if BMI cannot be computed."""
    body_mass = bmi(snapshot)
    if body_mass is None:
        return None

    sc = config.scoring
    score: float = sc.base_score

    # BMI bands
    if sc.bmi.underweight <= body_mass <= sc.bmi.normal:
        score += sc.bmi.points_normal
    elif sc.bmi.normal < body_mass <= sc.bmi.overweight:
        score += sc.bmi.points_overweight
    elif body_mass >= sc.bmi.obese:
        score += sc.bmi.points_obese

    # Activity
    steps = snapshot.get("steps_per_day")
    if steps >= sc.steps.high:
        score += sc.steps.points_high
    elif steps >= sc.steps.medium:
        score += sc.steps.points_medium
    else:
        score += sc.steps.points_low

    workouts = snapshot.get("workouts_per_week")
    if workouts >= sc.workouts.high:
        score += sc.workouts.points_high
    elif workouts >= sc.workouts.medium:
        score += sc.workouts.points_medium
    else:
        score += sc.workouts.points_none

    # Wearable vitals
    if snapshot.has("resting_heart_rate"):
        rhr = snapshot.get("resting_heart_rate")
        if rhr < sc.heart_rate.athlete:
            score += sc.heart_rate.points_athlete
        elif rhr <= sc.heart_rate.normal:
            score += sc.heart_rate.points_normal
        elif rhr > sc.heart_rate.poor:
            score += sc.heart_rate.points_poor

    if snapshot.has("blood_pressure_sys"):
        sys_bp = snapshot.get("blood_pressure_sys")
        dia_bp = snapshot.get("blood_pressure_dia")
        bp = sc.blood_pressure
        if sys_bp < bp.systolic_normal and dia_bp < bp.diastolic_normal:
            score += bp.points_optimal
        elif sys_bp > bp.systolic_high or dia_bp > bp.diastolic_high:
            score += bp.points_high

    # Labs
    labs = sc.labs
    if snapshot.has("hba1c"):
        hba1c = snapshot.get("hba1c")
        if hba1c < labs.hba1c_normal:
            score += labs.hba1c_points_normal
        elif hba1c > labs.hba1c_high:
            score += labs.hba1c_points_high
        else:
            score += labs.hba1c_points_elevated

    if snapshot.has("ldl_cholesterol"):
        ldl = snapshot.get("ldl_cholesterol")
        if ldl < labs.ldl_optimal:
            score += labs.ldl_points_optimal
        elif ldl > labs.ldl_high:
            score += labs.ldl_points_high

    if snapshot.has("egfr"):
        egfr = snapshot.get("egfr")
        if egfr > labs.egfr_healthy:
            score += labs.egfr_points_healthy
        elif egfr < labs.egfr_low:
            score += labs.egfr_points_low

    if snapshot.has("average_sleep_hours"):
        sleep = snapshot.get("average_sleep_hours")
        if sc.sleep.min_hours <= sleep <= sc.sleep.max_hours:
            score += sc.sleep.points_good
        elif sleep < sc.sleep.poor_hours:
            score += sc.sleep.points_poor

    return _clamp_score(score, sc)


# ---------------------------------------------------------------------------
# Money score
# ---------------------------------------------------------------------------

def score_money(snapshot: UserSnapshot, config: SimulationConfig = DEFAULT_CONFIG) -> int | None:
    """Compute the money score, or None if monthly income was not provided."""
    if not snapshot.has("monthly_income"):
        return None

    sc = config.scoring
    score: float = sc.base_score
    income = snapshot.get("monthly_income")
    expenses = total_expenses(snapshot)

    savings_rate = (income - expenses) / income
    if savings_rate >= sc.savings_rate.high:
        score += sc.savings_rate.points_high
    elif savings_rate >= sc.savings_rate.medium:
        score += sc.savings_rate.points_medium
    elif savings_rate >= 0:
        score += sc.savings_rate.points_positive
    else:
        score += sc.savings_rate.points_negative

    if snapshot.has("current_savings") and expenses > 0:
        runway = snapshot.get("current_savings") / expenses
        if runway >= sc.runway.safe:
            score += sc.runway.points_safe
        elif runway >= sc.runway.warning:
            score += sc.runway.points_warning
        elif runway >= sc.runway.danger:
            score += sc.runway.points_danger
        else:
            score += sc.runway.points_critical

    if snapshot.has("total_debt"):
        debt = snapshot.get("total_debt")
        if debt > income * sc.debt.critical_ratio:
            score += sc.debt.points_critical
        elif debt > income * sc.debt.warning_ratio:
            score += sc.debt.points_warning

    bad_habits = (
        snapshot.get("eating_out_spend")
        + snapshot.get("alcohol_spend")
        + snapshot.get("late_night_food_spend")
    )
    if bad_habits > sc.spending.bad_habits_threshold:
        score += sc.spending.points_bad_habits
    if snapshot.get("subscription_spend") > sc.spending.subscriptions_threshold:
        score += sc.spending.points_subscriptions

    return _clamp_score(score, sc)


def combine_scores(
    body: int | None,
    money: int | None,
    mode: TwinMode = TwinMode.LIFE,
) -> int | None:
    """Life score for the active mode.

    LIFE needs both scores and takes their mean (rounded half-up). BODY and
    MONEY pass their single score through.
    """
    if mode == TwinMode.BODY:
        return body
    if mode == TwinMode.MONEY:
        return money
    if body is None or money is None:
        return None
    return round_half_up((body + money) / 2)
