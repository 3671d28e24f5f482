"""LifeTwin MCP Server: application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from lifetwin.core.config.settings import get_settings
from lifetwin.domains.twin.domain_logic.config_loader import load_simulation_config
from lifetwin.domains.twin.domain_logic.simulation_config import (
    DEFAULT_CONFIG,
    SimulationConfig,
)
from lifetwin.domains.twin.prompts.twin_prompts import register_twin_prompts
from lifetwin.domains.twin.resources.config_resources import (
    register_simulation_config_resources,
)
from lifetwin.domains.twin.tools.life_twin_tools import register_life_twin_tools

logger = logging.getLogger(__name__)

SERVER_VERSION = "0.1.0"


def create_app(*, config_override: SimulationConfig | None = None) -> FastMCP:
    """Create and configure the LifeTwin MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Resolves the simulation config (override, YAML file, or defaults)
    3. Registers all tools, resources, and prompts
    """
    settings = get_settings()

    # --- Server instance ---
    server = FastMCP(
        "LifeTwin",
        instructions=(
            "LifeTwin digital twin server. Scores a body and money snapshot, "
            "projects baseline vs improved paths 12 months forward, and "
            "explains the result through trends, insights and cross-domain "
            "recommendations."
        ),
    )

    # --- Resolve simulation config ---
    if config_override is not None:
        config = config_override
    elif settings.simulation_config_path:
        config = load_simulation_config(settings.simulation_config_path)
    else:
        config = DEFAULT_CONFIG
        logger.info("Using default simulation config %s", config.version)

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": "LifeTwin",
            "version": SERVER_VERSION,
            "config_version": config.version,
            "default_privacy_mode": settings.default_privacy_mode,
        }

    register_life_twin_tools(server, config, settings)
    logger.info("Life twin simulation tools registered")

    # --- Register resources ---
    register_simulation_config_resources(server, config)

    # --- Register prompts ---
    register_twin_prompts(server)

    return server


# Module-level instance for FastMCP discovery ("...app.py:mcp").
# Lazy: only created when accessed (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
