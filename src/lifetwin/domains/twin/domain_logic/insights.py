"""Trend labels and threshold-triggered insights.

Both read only the ``reporting`` section of the configuration, which is kept
separate from the scoring cut-points so caution bands can sit inside warning
bands. Rules are ordered tables of ``(predicate, builder)`` pairs; every rule
is evaluated, so several insights can fire for the same snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from lifetwin.domains.twin.domain_logic.scoring import round_half_up, total_expenses
from lifetwin.domains.twin.domain_logic.simulation_config import (
    DEFAULT_CONFIG,
    HealthReporting,
    MoneyReporting,
    SimulationConfig,
)
from lifetwin.domains.twin.domain_logic.twin_models import (
    Insight,
    MetricTrend,
    UserSnapshot,
)

logger = logging.getLogger(__name__)

HealthPredicate = Callable[[UserSnapshot, HealthReporting], bool]
MoneyPredicate = Callable[[UserSnapshot, MoneyReporting], bool]


# ---------------------------------------------------------------------------
# Shared money ratios
# ---------------------------------------------------------------------------

def savings_rate_pct(snapshot: UserSnapshot) -> float:
    income = snapshot.get("monthly_income")
    if income <= 0:
        return 0.0
    return (income - total_expenses(snapshot)) / income * 100


def runway_months(snapshot: UserSnapshot) -> float | None:
    """Months of expenses covered by savings, or None if it cannot be computed."""
    expenses = total_expenses(snapshot)
    if not snapshot.has("current_savings") or expenses <= 0:
        return None
    return snapshot.get("current_savings") / expenses


def _discretionary_ratio(snapshot: UserSnapshot) -> float:
    discretionary = (
        snapshot.get("eating_out_spend")
        + snapshot.get("alcohol_spend")
        + snapshot.get("late_night_food_spend")
        + snapshot.get("lifestyle_spend")
    )
    return discretionary / snapshot.get("monthly_income")


# ---------------------------------------------------------------------------
# Health trends
# ---------------------------------------------------------------------------

def _bp_elevated(s: UserSnapshot, t: HealthReporting) -> bool:
    return s.get("blood_pressure_sys") > t.bp_high_sys or s.get("blood_pressure_dia") > t.bp_high_dia


def _bp_warning(s: UserSnapshot, t: HealthReporting) -> bool:
    return s.get("blood_pressure_sys") > t.bp_warn_sys or s.get("blood_pressure_dia") > t.bp_warn_dia


def _weight_trend(s: UserSnapshot, t: HealthReporting) -> MetricTrend:
    weight = s.get("weight_kg")
    if not s.has("previous_weight_kg"):
        return MetricTrend("Weight", weight, "kg", "unknown", "No prior reading")
    diff = round_half_up(weight - s.get("previous_weight_kg"), 1)
    return MetricTrend(
        label="Weight",
        value=weight,
        unit="kg",
        status="improving" if diff <= t.weight_diff else "worsening",
        delta="Stable" if diff == 0 else f"{diff:+.1f}kg",
    )


def _bp_trend(s: UserSnapshot, t: HealthReporting) -> MetricTrend:
    elevated = _bp_elevated(s, t)
    return MetricTrend(
        label="Blood Pressure",
        value=f"{s.get('blood_pressure_sys'):g}/{s.get('blood_pressure_dia'):g}",
        unit="mmHg",
        status="worsening" if elevated else "stable",
        delta="Elevated" if elevated else "Normal",
    )


def _hba1c_trend(s: UserSnapshot, t: HealthReporting) -> MetricTrend:
    normal = s.get("hba1c") < t.hba1c_caution
    return MetricTrend(
        "HbA1c", s.get("hba1c"), "%",
        "stable" if normal else "worsening",
        "Normal" if normal else "Elevated",
    )


def _glucose_trend(s: UserSnapshot, t: HealthReporting) -> MetricTrend:
    glucose = s.get("fasting_glucose")
    if glucose < t.glucose_normal:
        return MetricTrend("Fasting Glucose", glucose, "mg/dL", "stable", "Normal")
    delta = "Diabetic Range" if glucose >= t.glucose_diabetic else "Elevated"
    return MetricTrend("Fasting Glucose", glucose, "mg/dL", "worsening", delta)


def _ldl_trend(s: UserSnapshot, t: HealthReporting) -> MetricTrend:
    optimal = s.get("ldl_cholesterol") < t.ldl_caution
    return MetricTrend(
        "LDL Chol.", s.get("ldl_cholesterol"), "mg/dL",
        "improving" if optimal else "worsening",
        "Optimal" if optimal else "Needs Action",
    )


def _hdl_trend(s: UserSnapshot, t: HealthReporting) -> MetricTrend:
    hdl = s.get("hdl_cholesterol")
    if hdl > t.hdl_good:
        return MetricTrend("HDL Chol.", hdl, "mg/dL", "improving", "Good")
    if hdl < t.hdl_bad:
        return MetricTrend("HDL Chol.", hdl, "mg/dL", "worsening", "Low")
    return MetricTrend("HDL Chol.", hdl, "mg/dL", "stable", "Borderline")


def _below_is_normal(label: str, field: str, unit: str, limit: Callable[[HealthReporting], float]):
    def build(s: UserSnapshot, t: HealthReporting) -> MetricTrend:
        normal = s.get(field) < limit(t)
        return MetricTrend(
            label, s.get(field), unit,
            "stable" if normal else "worsening",
            "Normal" if normal else "High",
        )
    return build


def _egfr_trend(s: UserSnapshot, t: HealthReporting) -> MetricTrend:
    status = "stable" if s.get("egfr") > t.egfr_good else "worsening"
    return MetricTrend("eGFR", s.get("egfr"), "", status, "Kidney Func")


def _rhr_trend(s: UserSnapshot, t: HealthReporting) -> MetricTrend:
    rhr = s.get("resting_heart_rate")
    status = "improving" if rhr < t.hr_good else "stable"
    return MetricTrend("Resting HR", rhr, "bpm", status, "Last 7 days")


# (anchor field, builder); a trend is emitted only when its anchor was provided.
HEALTH_TREND_RULES: list[tuple[str, Callable[[UserSnapshot, HealthReporting], MetricTrend]]] = [
    ("weight_kg", _weight_trend),
    ("blood_pressure_sys", _bp_trend),
    ("hba1c", _hba1c_trend),
    ("fasting_glucose", _glucose_trend),
    ("ldl_cholesterol", _ldl_trend),
    ("hdl_cholesterol", _hdl_trend),
    ("triglycerides", _below_is_normal("Triglycerides", "triglycerides", "mg/dL", lambda t: t.trig_good)),
    ("alt", _below_is_normal("ALT (Liver)", "alt", "u/L", lambda t: t.alt_good)),
    ("creatinine", _below_is_normal("Creatinine", "creatinine", "mg/dL", lambda t: t.creatinine_good)),
    ("egfr", _egfr_trend),
    ("resting_heart_rate", _rhr_trend),
]


# ---------------------------------------------------------------------------
# Money trends
# ---------------------------------------------------------------------------

def _savings_rate_trend(s: UserSnapshot, t: MoneyReporting) -> MetricTrend | None:
    rate = savings_rate_pct(s)
    if rate > t.savings_rate_high:
        status = "improving"
    elif rate > t.savings_rate_med:
        status = "stable"
    else:
        status = "worsening"
    return MetricTrend("Savings Rate", round_half_up(rate, 1), "%", status, "Monthly Avg")


def _runway_trend(s: UserSnapshot, t: MoneyReporting) -> MetricTrend | None:
    runway = runway_months(s)
    if runway is None:
        return None
    status = "stable" if runway > t.runway_safe else "worsening"
    return MetricTrend("Runway", round_half_up(runway, 1), "Months", status, "Emergency Fund")


def _eating_out_trend(s: UserSnapshot, t: MoneyReporting) -> MetricTrend | None:
    if not s.has("eating_out_spend"):
        return None
    high = s.get("eating_out_spend") > t.eating_out_high
    return MetricTrend(
        "Eating Out", s.get("eating_out_spend"), "$",
        "worsening" if high else "stable",
        "High" if high else "Normal",
    )


def _debt_trend(s: UserSnapshot, t: MoneyReporting) -> MetricTrend | None:
    if not s.has("total_debt"):
        return None
    ratio = s.get("total_debt") / s.get("monthly_income")
    status = "worsening" if ratio > t.debt_income_ratio else "stable"
    return MetricTrend("Debt", s.get("total_debt"), "$", status, f"{ratio:.1f}x income")


MONEY_TREND_RULES: list[Callable[[UserSnapshot, MoneyReporting], MetricTrend | None]] = [
    _savings_rate_trend,
    _runway_trend,
    _eating_out_trend,
    _debt_trend,
]


def derive_trends(
    snapshot: UserSnapshot, config: SimulationConfig = DEFAULT_CONFIG
) -> tuple[list[MetricTrend], list[MetricTrend]]:
    """Return (health_trends, money_trends) for the active twin(s)."""
    health: list[MetricTrend] = []
    money: list[MetricTrend] = []

    if snapshot.body_active:
        t = config.reporting.health
        for anchor, build in HEALTH_TREND_RULES:
            if snapshot.has(anchor):
                health.append(build(snapshot, t))

    if snapshot.money_active and snapshot.has("monthly_income"):
        t = config.reporting.money
        for build in MONEY_TREND_RULES:
            trend = build(snapshot, t)
            if trend is not None:
                money.append(trend)

    return health, money


# ---------------------------------------------------------------------------
# Health insights
# ---------------------------------------------------------------------------

HEALTH_INSIGHT_RULES: list[tuple[HealthPredicate, Insight]] = [
    (
        lambda s, t: s.has("blood_pressure_sys") and _bp_warning(s, t),
        Insight(
            "High Blood Pressure detected",
            "Systolic over 140 or Diastolic over 90 suggests increased load on your heart.",
            "warning", "Heart",
        ),
    ),
    (
        lambda s, t: s.has("blood_pressure_sys") and _bp_elevated(s, t) and not _bp_warning(s, t),
        Insight(
            "Elevated Blood Pressure",
            "Levels are slightly above optimal. Monitor sodium and stress.",
            "caution", "Heart",
        ),
    ),
    (
        lambda s, t: s.get("hba1c") >= t.hba1c_warn,
        Insight(
            "Blood Sugar Warning",
            "HbA1c level suggests significant insulin resistance.",
            "warning", "Metabolic",
        ),
    ),
    (
        lambda s, t: t.hba1c_caution <= s.get("hba1c") < t.hba1c_warn,
        Insight(
            "Metabolic Risk",
            "You are in a range often associated with pre-diabetes.",
            "caution", "Metabolic",
        ),
    ),
    (
        lambda s, t: s.get("ldl_cholesterol") > t.ldl_warn,
        Insight(
            "High Cholesterol",
            "LDL is significantly high, a key risk factor for arteries.",
            "warning", "Heart",
        ),
    ),
    (
        lambda s, t: t.ldl_caution < s.get("ldl_cholesterol") <= t.ldl_warn,
        Insight(
            "Cholesterol Watch",
            "LDL is above optimal levels. Consider dietary fats.",
            "caution", "Heart",
        ),
    ),
    (
        lambda s, t: s.has("hdl_cholesterol") and s.get("hdl_cholesterol") < t.hdl_bad,
        Insight(
            "Low HDL",
            "Protective cholesterol is low. Regular cardio is the most reliable way to raise it.",
            "caution", "Heart",
        ),
    ),
    (
        lambda s, t: s.get("triglycerides") > t.trig_warn,
        Insight(
            "High Triglycerides",
            "Linked to sugar/alcohol intake. Can harden arteries.",
            "warning", "Metabolic",
        ),
    ),
    (
        lambda s, t: s.get("alt") > t.alt_warn and s.get("alcohol_spend") > t.alcohol_trigger,
        Insight(
            "Liver Stress Detected",
            "Elevated ALT combined with regular alcohol spend suggests liver strain.",
            "warning", "Liver",
        ),
    ),
    (
        lambda s, t: s.has("egfr") and s.get("egfr") < t.egfr_bad,
        Insight(
            "Kidney Function Alert",
            "eGFR below 60 may indicate reduced kidney filtration.",
            "warning", "Renal",
        ),
    ),
    (
        lambda s, t: s.has("average_sleep_hours") and s.get("average_sleep_hours") < t.sleep_poor,
        Insight(
            "Sleep Deprivation",
            "Consistently getting <6 hours impacts recovery and metabolism.",
            "warning", "Lifestyle",
        ),
    ),
]


# ---------------------------------------------------------------------------
# Money insights
# ---------------------------------------------------------------------------

def _fixed_overhead(s: UserSnapshot, t: MoneyReporting) -> Insight:
    share = round_half_up(s.get("fixed_costs") / s.get("monthly_income") * 100)
    return Insight(
        "High Fixed Overhead",
        f"Fixed costs consume {share}% of income, leaving little room for savings or shocks.",
        "warning", "Budget",
    )


def _high_interest(s: UserSnapshot, t: MoneyReporting) -> Insight:
    return Insight(
        "High Interest Debt",
        f"Paying {s.get('debt_interest_rate'):g}% APR is actively eroding your future wealth.",
        "caution", "Debt",
    )


def _stable_cash_flow(s: UserSnapshot, t: MoneyReporting) -> Insight:
    return Insight(
        "Stable Cash Flow",
        f"You keep {savings_rate_pct(s):.0f}% of your income each month. Keep it consistent.",
        "info", "Savings",
    )


def _constant(insight: Insight) -> Callable[[UserSnapshot, MoneyReporting], Insight]:
    return lambda s, t: insight


def _runway_below(limit: Callable[[MoneyReporting], float], floor=None):
    def predicate(s: UserSnapshot, t: MoneyReporting) -> bool:
        runway = runway_months(s)
        if runway is None:
            return False
        return runway < limit(t) and (floor is None or runway >= floor(t))
    return predicate


MONEY_INSIGHT_RULES: list[tuple[MoneyPredicate, Callable[[UserSnapshot, MoneyReporting], Insight]]] = [
    (
        _runway_below(lambda t: t.runway_critical),
        _constant(Insight(
            "Critical Liquidity Risk",
            "You have less than 1 month of expenses saved. High vulnerability to income loss.",
            "warning", "Safety",
        )),
    ),
    (
        _runway_below(lambda t: t.runway_safe, floor=lambda t: t.runway_critical),
        _constant(Insight(
            "Low Runway",
            "Emergency fund covers less than 3 months. Recommended target is 3-6 months.",
            "caution", "Safety",
        )),
    ),
    (
        lambda s, t: s.get("fixed_costs") / s.get("monthly_income") > t.fixed_overhead_ratio,
        _fixed_overhead,
    ),
    (
        lambda s, t: s.get("total_debt") / s.get("monthly_income") > t.debt_income_ratio,
        _constant(Insight(
            "High Debt Load",
            "Total debt exceeds 3x monthly income.",
            "warning", "Debt",
        )),
    ),
    (
        lambda s, t: s.has("total_debt") and s.get("debt_interest_rate") > t.debt_interest_high,
        _high_interest,
    ),
    (
        lambda s, t: _discretionary_ratio(s) > t.lifestyle_ratio,
        _constant(Insight(
            "High Discretionary Spend",
            "Over 30% of income goes to non-essentials. This is the easiest lever to pull for savings.",
            "info", "Spending",
        )),
    ),
    (
        lambda s, t: savings_rate_pct(s) < 0,
        _constant(Insight(
            "Monthly Deficit",
            "You spend more than you earn each month. The gap is being covered by savings or debt.",
            "warning", "Budget",
        )),
    ),
    (
        lambda s, t: savings_rate_pct(s) >= t.savings_rate_med,
        _stable_cash_flow,
    ),
]


def derive_insights(
    snapshot: UserSnapshot, config: SimulationConfig = DEFAULT_CONFIG
) -> tuple[list[Insight], list[Insight]]:
    """Return (health_insights, money_insights); every matching rule fires."""
    health: list[Insight] = []
    money: list[Insight] = []

    if snapshot.body_active:
        t = config.reporting.health
        health = [insight for predicate, insight in HEALTH_INSIGHT_RULES if predicate(snapshot, t)]

    if snapshot.money_active and snapshot.has("monthly_income"):
        t = config.reporting.money
        money = [build(snapshot, t) for predicate, build in MONEY_INSIGHT_RULES if predicate(snapshot, t)]

    logger.debug("Derived %d health and %d money insights", len(health), len(money))
    return health, money
