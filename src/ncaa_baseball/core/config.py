from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="NCAA_BASEBALL_",
        extra="ignore",
    )

    environment: str = "development"
    log_level: str | None = None

    # Provider priority, highest first (comma separated).
    data_sources: str = "espn,ncaa"

    # espn (fast provider, short TTL)
    espn_base_url: str = (
        "https://site.api.espn.com/apis/site/v2/sports/baseball/college-baseball"
    )
    espn_cache_ttl_s: float = 30.0

    # ncaa (public API with a hard 5 req/s policy)
    ncaa_base_url: str = "https://ncaa-api.henrygd.me"
    ncaa_cache_ttl_s: float = 300.0
    ncaa_max_requests_per_second: int = 3

    # http
    http_timeout_s: float = 10.0
    http_connect_timeout_s: float = 5.0

    @field_validator("ncaa_max_requests_per_second")
    @classmethod
    def _positive_rate(cls, value: int) -> int:
        if value < 1:
            raise ValueError("ncaa_max_requests_per_second must be >= 1")
        return value

    def source_order(self) -> list[str]:
        return [s.strip().lower() for s in self.data_sources.split(",") if s.strip()]


settings = Settings()
