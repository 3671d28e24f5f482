"""Digital twin input/output models and domain constants."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Literal


# ---------------------------------------------------------------------------
# Domain constants
# ---------------------------------------------------------------------------

FORECAST_MONTHS = list(range(13))

# Order matters: it is the order metrics appear in serialized output.
BODY_METRICS = ["weight", "hba1c", "ldl", "sleep", "rhr", "meals_cost", "exercise"]
MONEY_METRICS = ["savings", "net_worth", "junk_spend", "health_spend", "debt"]
FORECAST_METRICS = BODY_METRICS + MONEY_METRICS

TrendStatus = Literal["improving", "stable", "worsening", "unknown"]
Severity = Literal["info", "caution", "warning"]


class TwinMode(str, Enum):
    """Which twin(s) are active for a snapshot."""

    BODY = "body"
    MONEY = "money"
    LIFE = "life"


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UserSnapshot:
    """A single self-reported snapshot of body and money metrics.

    Every numeric field is optional. ``None`` and ``0`` both mean "not
    provided": the metric is not scored, trended or forecast.
    """

    mode: TwinMode = TwinMode.LIFE
    persona: str = "custom"

    # Body - basic
    height_cm: float | None = None
    weight_kg: float | None = None
    previous_weight_kg: float | None = None
    steps_per_day: float | None = None
    workouts_per_week: float | None = None
    resting_heart_rate: float | None = None
    average_sleep_hours: float | None = None

    # Body - clinical labs
    blood_pressure_sys: float | None = None
    blood_pressure_dia: float | None = None
    hba1c: float | None = None
    fasting_glucose: float | None = None
    cholesterol: float | None = None
    ldl_cholesterol: float | None = None
    hdl_cholesterol: float | None = None
    triglycerides: float | None = None
    alt: float | None = None
    ast: float | None = None
    creatinine: float | None = None
    egfr: float | None = None

    # Money - basic
    monthly_income: float | None = None
    fixed_costs: float | None = None
    lifestyle_spend: float | None = None
    current_savings: float | None = None
    total_debt: float | None = None
    debt_interest_rate: float | None = None  # APR percent

    # Money - spending categories
    groceries_spend: float | None = None
    eating_out_spend: float | None = None
    alcohol_spend: float | None = None
    late_night_food_spend: float | None = None
    gym_spend: float | None = None
    pharmacy_spend: float | None = None
    wellness_spend: float | None = None
    subscription_spend: float | None = None

    def has(self, name: str) -> bool:
        """True if the named metric was provided (present and positive)."""
        value = getattr(self, name)
        return value is not None and value > 0

    def get(self, name: str) -> float:
        """The named metric, or 0.0 when it was not provided."""
        return float(getattr(self, name)) if self.has(name) else 0.0

    @property
    def body_active(self) -> bool:
        return self.mode in (TwinMode.BODY, TwinMode.LIFE)

    @property
    def money_active(self) -> bool:
        return self.mode in (TwinMode.MONEY, TwinMode.LIFE)

    def provided(self) -> dict[str, float]:
        """Numeric fields that were provided, keyed by field name."""
        return {
            f.name: self.get(f.name)
            for f in fields(self)
            if f.name not in ("mode", "persona") and self.has(f.name)
        }


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

@dataclass
class Scores:
    body: int | None = None
    money: int | None = None
    life: int | None = None


@dataclass(frozen=True)
class MetricTrend:
    label: str
    value: float | str
    unit: str
    status: TrendStatus
    delta: str


@dataclass(frozen=True)
class Insight:
    title: str
    description: str
    severity: Severity
    category: str


@dataclass(frozen=True)
class Recommendation:
    title: str
    health_impact: str | None = None
    money_impact: str | None = None


def _empty_series() -> list[float | None]:
    return [None] * len(FORECAST_MONTHS)


@dataclass
class Forecast:
    """Dual-path monthly projections; each pair is fully numeric or fully None."""

    months: list[int] = field(default_factory=lambda: list(FORECAST_MONTHS))
    weight_baseline: list[float | None] = field(default_factory=_empty_series)
    weight_improved: list[float | None] = field(default_factory=_empty_series)
    hba1c_baseline: list[float | None] = field(default_factory=_empty_series)
    hba1c_improved: list[float | None] = field(default_factory=_empty_series)
    ldl_baseline: list[float | None] = field(default_factory=_empty_series)
    ldl_improved: list[float | None] = field(default_factory=_empty_series)
    sleep_baseline: list[float | None] = field(default_factory=_empty_series)
    sleep_improved: list[float | None] = field(default_factory=_empty_series)
    rhr_baseline: list[float | None] = field(default_factory=_empty_series)
    rhr_improved: list[float | None] = field(default_factory=_empty_series)
    meals_cost_baseline: list[float | None] = field(default_factory=_empty_series)
    meals_cost_improved: list[float | None] = field(default_factory=_empty_series)
    exercise_baseline: list[float | None] = field(default_factory=_empty_series)
    exercise_improved: list[float | None] = field(default_factory=_empty_series)
    savings_baseline: list[float | None] = field(default_factory=_empty_series)
    savings_improved: list[float | None] = field(default_factory=_empty_series)
    net_worth_baseline: list[float | None] = field(default_factory=_empty_series)
    net_worth_improved: list[float | None] = field(default_factory=_empty_series)
    junk_spend_baseline: list[float | None] = field(default_factory=_empty_series)
    junk_spend_improved: list[float | None] = field(default_factory=_empty_series)
    health_spend_baseline: list[float | None] = field(default_factory=_empty_series)
    health_spend_improved: list[float | None] = field(default_factory=_empty_series)
    debt_baseline: list[float | None] = field(default_factory=_empty_series)
    debt_improved: list[float | None] = field(default_factory=_empty_series)

    def pair(self, metric: str) -> tuple[list[float | None], list[float | None]]:
        """Return (baseline, improved) for a metric name in FORECAST_METRICS."""
        return getattr(self, f"{metric}_baseline"), getattr(self, f"{metric}_improved")

    def set_pair(
        self,
        metric: str,
        baseline: list[float | None],
        improved: list[float | None],
    ) -> None:
        setattr(self, f"{metric}_baseline", baseline)
        setattr(self, f"{metric}_improved", improved)

    def is_present(self, metric: str) -> bool:
        baseline, _ = self.pair(metric)
        return baseline[0] is not None


@dataclass
class SimulationResult:
    """Everything the engine derives from one snapshot."""

    scores: Scores
    forecast: Forecast
    health_trends: list[MetricTrend] = field(default_factory=list)
    money_trends: list[MetricTrend] = field(default_factory=list)
    health_insights: list[Insight] = field(default_factory=list)
    money_insights: list[Insight] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)
    config_version: str = ""

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict with the dashboard's camelCase keys."""
        return _camelize(asdict(self))


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _camelize(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {_camel(k): _camelize(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_camelize(v) for v in obj]
    return obj
