"""Configuration module for the SolarQuote estimator."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "solarquote-estimator"
    app_version: str = "v20261019-001"
    environment: str = "dev"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 7150
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Google API Keys
    google_gemini_api_key: str = ""
    google_maps_api_key: str = ""

    # Gemini narrative
    gemini_model: str = "gemini-3-pro-preview"
    gemini_temperature: float = 0.7

    # Geocoding (used when the Maps key is missing or the lookup fails)
    fallback_lat: float = 37.7749
    fallback_lng: float = -122.4194
    http_timeout_seconds: float = 30.0

    # Default estimation assumptions
    default_panel_wattage: float = 400
    default_panel_efficiency: float = 0.18
    default_electricity_rate: float = 0.25  # $/kWh
    default_cost_per_panel: float = 1200  # fully installed $
    default_avg_sun_hours: float = 4.5  # daily average

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
