from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    LOG_LEVEL: str = Field("info")
    LOG_PATH: str = ""

    # UI
    UI_PATH: str = ""
    CONSOLE_TAG: str = "console"
    UNKNOWN_WINDOW_POLICY: str = Field("ignore", pattern=r"^(ignore|create)$")

    # Scheduler
    TICK_INTERVAL_SEC: float = Field(1.0, gt=0)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
