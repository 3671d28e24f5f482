"""Cross-domain recommendations pairing a behavior change with its impact.

Dollar figures are computed from the snapshot, or from the forecast where a
rule compares the two projected paths.
"""

from __future__ import annotations

from lifetwin.domains.twin.domain_logic.scoring import round_half_up
from lifetwin.domains.twin.domain_logic.simulation_config import (
    DEFAULT_CONFIG,
    SimulationConfig,
)
from lifetwin.domains.twin.domain_logic.twin_models import (
    Forecast,
    Recommendation,
    UserSnapshot,
)


def _month12_gap(forecast: Forecast, metric: str) -> float:
    """Improved minus baseline at the final month (0 when not forecast)."""
    baseline, improved = forecast.pair(metric)
    if baseline[-1] is None or improved[-1] is None:
        return 0
    return improved[-1] - baseline[-1]


def build_recommendations(
    snapshot: UserSnapshot,
    forecast: Forecast,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> list[Recommendation]:
    """Return at most ``max_recommendations`` suggestions, in priority order."""
    r = config.reporting.recommendations
    both = snapshot.body_active and snapshot.money_active
    recommendations: list[Recommendation] = []

    take_out = snapshot.get("eating_out_spend") + snapshot.get("late_night_food_spend")
    if both and take_out > r.take_out_spend:
        recommendations.append(Recommendation(
            title="Swap take-out for home cooking",
            health_impact="Controls glucose & sodium",
            money_impact=f"Saves approx ${round_half_up(take_out * r.take_out_saving_share)}/mo",
        ))

    alcohol = snapshot.get("alcohol_spend")
    if both and alcohol > r.alcohol_spend:
        recommendations.append(Recommendation(
            title="Limit alcohol to weekends",
            health_impact="Improves sleep & liver health",
            money_impact=f"Saves approx ${round_half_up(alcohol * r.alcohol_saving_share)}/mo",
        ))

    if (
        snapshot.body_active
        and snapshot.has("weight_kg")
        and snapshot.get("steps_per_day") < r.steps_target
    ):
        recommendations.append(Recommendation(
            title=f"Increase daily steps to {r.steps_target:,.0f}+",
            health_impact="Shifts weight trend by ~0.3kg/month",
        ))

    if snapshot.money_active and snapshot.has("monthly_income"):
        savings_gain = round_half_up(_month12_gap(forecast, "savings"))
        if savings_gain > r.savings_gain_min:
            recommendations.append(Recommendation(
                title="Apply Smart Spending Cuts",
                money_impact=f"Adds +${savings_gain:,} to yearly savings",
            ))

        debt_reduction = round_half_up(-_month12_gap(forecast, "debt"))
        if (
            snapshot.has("total_debt")
            and snapshot.get("debt_interest_rate") > r.debt_interest_high
            and debt_reduction > 0
        ):
            recommendations.append(Recommendation(
                title="Pay down high-interest debt first",
                money_impact=f"Cuts projected debt by ${debt_reduction:,} within a year",
            ))

    return recommendations[: r.max_recommendations]
