from __future__ import annotations

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="WEATHERCHECK_",
        case_sensitive=False,
    )

    env: str = Field(default="development")
    debug: bool = Field(default=False)
    docs_enabled: bool = Field(default=True)

    secret_key: str = Field(min_length=32)

    trusted_hosts: list[str] = Field(default_factory=lambda: ["localhost", "127.0.0.1"])

    session_cookie: str = Field(default="weathercheck_session", min_length=1, max_length=64)
    session_max_age_seconds: int = Field(default=60 * 60 * 8, ge=60, le=60 * 60 * 24 * 30)
    max_sessions: int = Field(default=1000, ge=1, le=100_000)

    forecast_url: AnyHttpUrl = Field(default="https://api.open-meteo.com/v1/forecast")
    reverse_geocode_url: AnyHttpUrl = Field(
        default="https://api.bigdatacloud.net/data/reverse-geocode-client"
    )
    http_user_agent: str = Field(
        default="weathercheck/0.1 (contact: you@example.com)",
        min_length=3,
        max_length=256,
    )
    http_timeout_seconds: float = Field(default=10.0, ge=1.0, le=60.0)

    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)

    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"


def load_settings() -> Settings:
    return Settings()
