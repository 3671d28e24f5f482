"""Digital twin engine: snapshot -> scores, dual-path forecast, trends, insights.

This is the main entry point. It is a pure function of the snapshot and the
configuration: no I/O, no clock, no shared state. Missing inputs are
handled by omission, never by raising.
"""

from __future__ import annotations

import logging

from lifetwin.domains.twin.domain_logic.forecaster import build_forecast
from lifetwin.domains.twin.domain_logic.insights import derive_insights, derive_trends
from lifetwin.domains.twin.domain_logic.recommendations import build_recommendations
from lifetwin.domains.twin.domain_logic.scoring import (
    combine_scores,
    score_body,
    score_money,
)
from lifetwin.domains.twin.domain_logic.simulation_config import (
    DEFAULT_CONFIG,
    SimulationConfig,
)
from lifetwin.domains.twin.domain_logic.twin_models import (
    Scores,
    SimulationResult,
    UserSnapshot,
)

logger = logging.getLogger(__name__)


def run_simulation(
    snapshot: UserSnapshot,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> SimulationResult:
    """Run the full projection for one snapshot."""
    body = score_body(snapshot, config) if snapshot.body_active else None
    money = score_money(snapshot, config) if snapshot.money_active else None
    scores = Scores(body=body, money=money, life=combine_scores(body, money, snapshot.mode))

    forecast = build_forecast(snapshot, config)
    health_trends, money_trends = derive_trends(snapshot, config)
    health_insights, money_insights = derive_insights(snapshot, config)

    logger.debug(
        "Simulation (mode=%s, config=%s): body=%s money=%s life=%s",
        snapshot.mode.value,
        config.version,
        scores.body,
        scores.money,
        scores.life,
    )

    return SimulationResult(
        scores=scores,
        forecast=forecast,
        health_trends=health_trends,
        money_trends=money_trends,
        health_insights=health_insights,
        money_insights=money_insights,
        recommendations=build_recommendations(snapshot, forecast, config),
        config_version=config.version,
    )
