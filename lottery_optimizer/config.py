"""Application configuration using Pydantic Settings."""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/saved_games.db"

    # App
    APP_NAME: str = "Lottery Optimizer"
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_DIR: Path = Path("./logs")

    # Draw data source (CAIXA public API)
    DATA_SOURCE_URL: str = "https://servicebus2.caixa.gov.br/portaldeloterias/api"
    DRAW_FETCH_TIMEOUT: float = 60.0

    # Result checking
    RESULT_CHECK_ENABLED: bool = True
    RESULT_CHECK_INTERVAL_HOURS: float = 6.0
    RESULT_CHECK_JITTER_SECONDS: int = 0
    RETRY_ERRORED_ON_SWEEP: bool = False
    SWEEP_CONCURRENCY: int = 1

    # Analytics
    STREAK_ORDER: Literal["created_at", "draw"] = "created_at"


settings = Settings()
