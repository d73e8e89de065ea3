"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Stage progress is logged at info
    geobraille_log_level: str = "info"

    # Simplification proportion, scaled by the printed cell count
    geobraille_simplify: float = 0.01

    # Row sampling threads
    geobraille_workers: int = 1

    # Format assumed for stdin when none is given
    geobraille_default_format: str = "geojson"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
