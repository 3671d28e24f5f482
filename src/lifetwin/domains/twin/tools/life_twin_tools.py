"""MCP tools for running the digital twin simulation."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from fastmcp import Context, FastMCP

if TYPE_CHECKING:
    from lifetwin.core.config.settings import Settings
    from lifetwin.domains.twin.domain_logic.simulation_config import SimulationConfig

from lifetwin.core.privacy.policy import build_chat_context, validate_privacy_mode
from lifetwin.domains.twin.connectors.personas import get_persona_snapshot
from lifetwin.domains.twin.connectors.snapshot_parser import (
    parse_mode,
    snapshot_from_dict,
)
from lifetwin.domains.twin.domain_logic.engine import run_simulation

logger = logging.getLogger(__name__)


def register_life_twin_tools(
    mcp: FastMCP,
    config: SimulationConfig,
    settings: Settings,
) -> None:
    """Register the simulation tools on the MCP server."""

    @mcp.tool
    async def life_twin_simulation(
        ctx: Context,
        snapshot: dict[str, Any],
    ) -> str:
        """Score a body/money snapshot and project it 12 months forward.

        Returns composite scores, baseline vs improved monthly forecasts,
        metric trends, insights and cross-domain recommendations.

        Args:
            snapshot: Snapshot fields, camelCase (weightKg, monthlyIncome,
                twinType, ...) or snake_case. Omitted or zero fields are
                treated as not provided.
        """
        user_snapshot = snapshot_from_dict(snapshot)
        result = run_simulation(user_snapshot, config)
        logger.info(
            "life_twin_simulation: mode=%s fields=%d",
            user_snapshot.mode.value,
            len(user_snapshot.provided()),
        )
        return json.dumps(result.to_dict(), indent=2)

    @mcp.tool
    async def persona_simulation(
        ctx: Context,
        persona: str,
        mode: str = "life",
    ) -> str:
        """Run the simulation for a preset persona.

        Args:
            persona: One of 'custom', 'prediabetic', 'diabetic_type2'.
            mode: Which twin to run: 'body', 'money' or 'life' (default).
        """
        user_snapshot = replace(get_persona_snapshot(persona), mode=parse_mode(mode))
        result = run_simulation(user_snapshot, config)
        logger.info("persona_simulation: persona=%s mode=%s", persona, user_snapshot.mode.value)
        return json.dumps(
            {"persona": persona, **result.to_dict()},
            indent=2,
        )

    @mcp.tool
    async def twin_chat_context(
        ctx: Context,
        snapshot: dict[str, Any],
        privacy_mode: str | None = None,
    ) -> str:
        """Build the privacy-filtered context an AI chat may see for a snapshot.

        Args:
            snapshot: Snapshot fields, as for life_twin_simulation.
            privacy_mode: 'strict' (scores, statuses, insight titles),
                'standard' (adds trends, insights, recommendations and month-12
                endpoints) or 'explicit' (adds raw snapshot values and the full
                forecast). Defaults to the server's configured mode.
        """
        mode = validate_privacy_mode(privacy_mode, default=settings.default_privacy_mode)
        user_snapshot = snapshot_from_dict(snapshot)
        result = run_simulation(user_snapshot, config)
        context = build_chat_context(
            snapshot=user_snapshot,
            result=result,
            privacy_mode=mode,
        )
        return json.dumps({"privacy_mode": mode, "context": context}, indent=2)
