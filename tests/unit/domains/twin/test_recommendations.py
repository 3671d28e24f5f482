"""Unit tests for cross-domain recommendations."""

from __future__ import annotations

from dataclasses import replace

from lifetwin.domains.twin.domain_logic.forecaster import build_forecast
from lifetwin.domains.twin.domain_logic.recommendations import build_recommendations
from lifetwin.domains.twin.domain_logic.simulation_config import DEFAULT_CONFIG
from lifetwin.domains.twin.domain_logic.twin_models import TwinMode


def _recommend(snapshot, config=DEFAULT_CONFIG):
    return build_recommendations(snapshot, build_forecast(snapshot, config), config)


class TestBuildRecommendations:
    def test_prediabetic_life_twin(self, prediabetic_snapshot):
        recs = _recommend(prediabetic_snapshot)
        assert [r.title for r in recs] == [
            "Swap take-out for home cooking",
            "Limit alcohol to weekends",
            "Increase daily steps to 8,000+",
            "Apply Smart Spending Cuts",
        ]
        assert recs[0].money_impact == "Saves approx $285/mo"
        assert recs[0].health_impact == "Controls glucose & sodium"
        assert recs[1].money_impact == "Saves approx $60/mo"
        assert recs[2].money_impact is None
        assert recs[3].money_impact == "Adds +$4,302 to yearly savings"

    def test_capped_at_max_recommendations(self, prediabetic_snapshot):
        recommendations = replace(DEFAULT_CONFIG.reporting.recommendations, max_recommendations=2)
        config = replace(
            DEFAULT_CONFIG,
            reporting=replace(DEFAULT_CONFIG.reporting, recommendations=recommendations),
        )
        assert len(_recommend(prediabetic_snapshot, config)) == 2

    def test_money_twin_gets_debt_paydown(self, prediabetic_snapshot):
        recs = _recommend(replace(prediabetic_snapshot, mode=TwinMode.MONEY))
        titles = [r.title for r in recs]
        assert titles == ["Apply Smart Spending Cuts", "Pay down high-interest debt first"]
        assert recs[1].health_impact is None
        assert recs[1].money_impact.startswith("Cuts projected debt by $")

    def test_body_twin_gets_only_body_advice(self, prediabetic_snapshot):
        recs = _recommend(replace(prediabetic_snapshot, mode=TwinMode.BODY))
        assert [r.title for r in recs] == ["Increase daily steps to 8,000+"]

    def test_healthy_snapshot_needs_nothing(self, healthy_snapshot):
        # The 10% discretionary cut only adds $480 a year.
        assert _recommend(healthy_snapshot) == []

    def test_cross_domain_needs_both_twins(self, junk_spend_snapshot):
        life = [r.title for r in _recommend(junk_spend_snapshot)]
        body = [r.title for r in _recommend(replace(junk_spend_snapshot, mode=TwinMode.BODY))]
        assert "Swap take-out for home cooking" in life
        assert "Swap take-out for home cooking" not in body
