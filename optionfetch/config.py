from __future__ import annotations

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Used only when the incoming request carries no api_key of its own.
    POLYGON_API_KEY: str | None = None
    POLYGON_BASE_URL: str = "https://api.polygon.io"
    POLYGON_TIMEOUT: float = 30.0

    # "chain": one snapshot request for the whole filtered chain.
    # "details": list contract tickers, then fetch each contract's snapshot.
    OPTIONFETCH_LOOKUP: str = "chain"

    LOG_LEVEL: str = "INFO"

    @property
    def polygon_api_key(self) -> str | None:
        return self.POLYGON_API_KEY

    @property
    def polygon_base_url(self) -> str:
        return self.POLYGON_BASE_URL.rstrip("/")

    @property
    def polygon_timeout(self) -> float:
        return self.POLYGON_TIMEOUT

    @property
    def lookup_mode(self) -> str:
        return (self.OPTIONFETCH_LOOKUP or "chain").strip().lower()

    @property
    def log_level(self) -> str:
        return (self.LOG_LEVEL or "INFO").strip().upper()


class QueryDefaults(BaseModel):
    ticker: str = "AAPL"
    api_key: str = "YOUR_API_KEY"
    limit: int = 10
    days_forward: int = 30
    contract_type: str = "call"

    # Provider-side page caps
    max_chain_limit: int = 250
    max_reference_limit: int = 1000
    # Listed options expire within a few years
    max_days_forward: int = 3650


LOOKUP_MODES = ("chain", "details")


def load_settings() -> Settings:
    return Settings()
