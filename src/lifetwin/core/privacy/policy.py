"""Privacy policy for controlling what twin data is handed to an AI chat.

The chat collaborator should generally operate on:
- the composite scores (0-100)
- trend statuses and insight titles
- month-12 endpoints of the two projected paths (standard and up)

Raw snapshot values (weights, labs, balances) are only placed into the
chat context when the user explicitly opts in.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Literal

from lifetwin.domains.twin.domain_logic.twin_models import (
    FORECAST_METRICS,
    SimulationResult,
    UserSnapshot,
)

PrivacyMode = Literal["strict", "standard", "explicit"]


def validate_privacy_mode(value: str | None, default: str = "strict") -> PrivacyMode:
    """Validate and default a privacy_mode parameter."""
    if value in (None, ""):
        value = default
    if value not in ("strict", "standard", "explicit"):
        raise ValueError("privacy_mode must be one of: strict | standard | explicit")
    return value  # type: ignore[return-value]


def _round_floats(obj: Any, ndigits: int = 2) -> Any:
    if isinstance(obj, float):
        return round(obj, ndigits)
    if isinstance(obj, dict):
        return {k: _round_floats(v, ndigits=ndigits) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_round_floats(v, ndigits=ndigits) for v in obj]
    return obj


def _month12_endpoints(result: SimulationResult) -> dict[str, dict[str, float]]:
    endpoints: dict[str, dict[str, float]] = {}
    for metric in FORECAST_METRICS:
        if not result.forecast.is_present(metric):
            continue
        baseline, improved = result.forecast.pair(metric)
        endpoints[metric] = {"baseline": baseline[-1], "improved": improved[-1]}
    return endpoints


def build_chat_context(
    *,
    snapshot: UserSnapshot,
    result: SimulationResult,
    privacy_mode: PrivacyMode,
) -> dict[str, Any]:
    """Build the minimized context passed to the chat collaborator."""
    base: dict[str, Any] = {
        "mode": snapshot.mode.value,
        "persona": snapshot.persona,
        "config_version": result.config_version,
        "scores": asdict(result.scores),
        "trend_status": {
            t.label: t.status for t in result.health_trends + result.money_trends
        },
        "insight_titles": [
            i.title for i in result.health_insights + result.money_insights
        ],
    }

    if privacy_mode == "strict":
        # No snapshot values, no forecast numbers.
        return base

    base.update(
        {
            "health_trends": [asdict(t) for t in result.health_trends],
            "money_trends": [asdict(t) for t in result.money_trends],
            "health_insights": [asdict(i) for i in result.health_insights],
            "money_insights": [asdict(i) for i in result.money_insights],
            "recommendations": [asdict(r) for r in result.recommendations],
            "month_12": _month12_endpoints(result),
        }
    )

    if privacy_mode == "standard":
        return _round_floats(base, ndigits=2)

    # explicit
    base["snapshot"] = snapshot.provided()
    base["forecast"] = {
        metric: dict(zip(("baseline", "improved"), result.forecast.pair(metric)))
        for metric in FORECAST_METRICS
        if result.forecast.is_present(metric)
    }
    return _round_floats(base, ndigits=2)
