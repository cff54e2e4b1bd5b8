"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    anthropic_api_key: str = ""
    boardread_env: str = "development"
    boardread_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Vision model
    model_vision: str = "claude-sonnet-4-5-20250929"
    max_tokens: int = 1500
    temperature: float = 0.3
    analyzer_timeout_s: float = 60.0

    # Retry loop
    max_retries: int = 2
    retry_backoff_ms: int = 100

    # Lazy-default score band on the model's 0-10 scale (calibrated, not derived)
    generic_band_low: float = 7.0
    generic_band_high: float = 7.5

    # Used when the request carries no usable distance
    default_viewing_distance_m: float = 100.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
