"""LifeTwin server entry point: ``python -m lifetwin.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from lifetwin.core.config.settings import Settings, get_settings
from lifetwin.core.server.app import create_app

logger = logging.getLogger(__name__)

_LOOPBACK_NAMES = frozenset({"localhost", "ip6-localhost"})


def _is_loopback_host(host: str) -> bool:
    if host.lower() in _LOOPBACK_NAMES:
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def _check_bind(settings: Settings) -> None:
    """Snapshots carry lab results and finances, so stay on loopback by default."""
    if settings.twin_allow_insecure_bind or _is_loopback_host(settings.twin_host):
        return
    raise RuntimeError(
        f"TWIN_HOST={settings.twin_host} is a non-loopback address and the LifeTwin "
        "server has no authentication. Bind to 127.0.0.1, or set "
        "TWIN_ALLOW_INSECURE_BIND=true to expose snapshots on the network."
    )


def run() -> None:
    """Serve the simulation tools over Streamable HTTP."""
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.twin_log_level.upper(), logging.INFO))
    _check_bind(settings)

    mcp = create_app()
    logger.info(
        "LifeTwin listening on http://%s:%d (simulation config: %s, privacy default: %s)",
        settings.twin_host,
        settings.twin_port,
        settings.simulation_config_path or "built-in",
        settings.default_privacy_mode,
    )
    mcp.run(
        transport="streamable-http",
        host=settings.twin_host,
        port=settings.twin_port,
    )


if __name__ == "__main__":
    run()
