"""
Application settings (Pydantic Settings).
"""
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

# .env next to backend/ (parent of templewatch/)
_env_path = Path(__file__).resolve().parent.parent / ".env"

DEFAULT_UPSTREAM_BASE_URL = "https://online.srjbtkshetra.org/api/v1"


class Settings(BaseSettings):
    # Fallback token when neither the request nor the cookie carries one (API_TOKEN in .env)
    api_token: str = Field("", validation_alias=AliasChoices("API_TOKEN", "NEXT_PUBLIC_API_TOKEN"))
    # Empty webhook disables delivery; the poll tick still runs
    slack_webhook_url: str = Field("", validation_alias=AliasChoices("SLACK_WEBHOOK_URL", "WEBHOOK_URL"))
    app_url: str = "https://your-app-url.com"

    upstream_base_url: str = DEFAULT_UPSTREAM_BASE_URL
    darshan_temple_id: str = "100001"
    upstream_timeout_seconds: float = 20.0
    upstream_max_workers: int = Field(4, ge=1, le=16)
    # explicit: summary.availableDatesList only; range: every day in startAndEndDates minus booked/blocked
    date_policy: Literal["explicit", "range"] = "explicit"

    # 0 = rely on an external cron hitting GET /poll
    poll_interval_seconds: int = Field(0, ge=0)
    log_level: str = "INFO"
    cors_origins: str = ""

    class Config:
        env_file = _env_path
        extra = "ignore"
        populate_by_name = True

    @field_validator("api_token", "slack_webhook_url", "app_url", "upstream_base_url", mode="after")
    @classmethod
    def strip_str(cls, v: str) -> str:
        return (v or "").strip()


settings = Settings()
