"""
Configuration settings using Pydantic BaseSettings.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Reliability core configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="RELIABILITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Weibull analysis
    default_time_units: str = "hours"

    # Monte Carlo simulation
    default_simulation_runs: int = 1000
    max_simulation_runs: int = 100_000  # upper bound enforced by request validation


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
