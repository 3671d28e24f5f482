"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """LifeTwin server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Default to loopback; snapshots carry health and financial data and
    # there is no auth layer.
    twin_host: str = "127.0.0.1"
    twin_port: int = 8001
    twin_log_level: str = "info"
    # Must be true to bind a non-loopback host.
    twin_allow_insecure_bind: bool = False

    # Simulation
    # Optional YAML file of overrides for the scoring/forecast/reporting tables.
    simulation_config_path: str = ""

    # Privacy
    default_privacy_mode: str = "strict"


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
