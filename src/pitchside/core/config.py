from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # DB
    database_url: str = Field(
        default="sqlite+pysqlite:///./pitchside.db",
        validation_alias="DATABASE_URL",
    )
    db_echo: bool = False

    # api-football
    api_football_key: str | None = Field(default=None, repr=False)
    api_football_base_url: str = "https://v3.football.api-sports.io"
    api_football_timeout_s: float = 10.0

    store_ingested_payloads: bool = True

    log_level: str = "INFO"

    # -----------------------------
    # Required-key helpers
    # -----------------------------

    def require_api_football_key(self) -> str:
        if not self.api_football_key:
            raise RuntimeError(
                "API_FOOTBALL_KEY is not set. Set it in the environment or .env file."
            )
        return self.api_football_key


settings = Settings()
