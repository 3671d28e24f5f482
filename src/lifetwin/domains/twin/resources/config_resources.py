"""MCP Resources exposing the active simulation configuration."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from fastmcp import FastMCP

from lifetwin.domains.twin.domain_logic.config_loader import config_to_dict

if TYPE_CHECKING:
    from lifetwin.domains.twin.domain_logic.simulation_config import SimulationConfig


def register_simulation_config_resources(mcp: FastMCP, config: SimulationConfig) -> None:
    """Register the simulation config resource on the MCP server."""

    @mcp.resource("config://twin/simulation")
    def simulation_config_resource() -> str:
        """Scoring thresholds, forecast physics and reporting cutoffs in use."""
        return json.dumps(
            {
                "version": config.version,
                "config": config_to_dict(config),
            },
            indent=2,
        )
