"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings

from momonga.catalog.store import DEFAULT_CATALOG_DIR


class Settings(BaseSettings):
    momonga_env: str = "development"
    momonga_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Catalog directory holding beans.json, types.json, questions.json
    catalog_dir: str = str(DEFAULT_CATALOG_DIR)

    # Pacing (ms)
    answer_cooldown_ms: int = 350
    gacha_spin_ms: int = 900

    # Chart defaults
    chart_size: float = 280.0
    chart_pixel_ratio: float = 1.0

    # In-memory visitor sessions
    session_limit: int = 1000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
