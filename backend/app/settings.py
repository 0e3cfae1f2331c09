from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_title: str = "Stealth Accumulation Scanner API"
    app_version: str = "1.0.0"

    # CORS
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Provider
    archive_base_url: str = "https://archives.nseindia.com/content/historical/EQUITIES"
    user_agent: str = (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/121 Safari/537.36"
    )
    referer: str = "https://www.nseindia.com/"
    request_timeout: float = 20.0  # seconds per fetch attempt

    # Session window
    target_sessions: int = 5
    max_lookback: int = 12  # extra weekday probes beyond target_sessions
    include_today: bool = False

    # Ranking
    min_coverage_days: int = 3
    top_n: int = 10
    liquidity_weight: float = 0.15
    equity_series: str = "EQ"
