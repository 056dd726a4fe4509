"""Configuration schema — Pydantic models for config.yaml."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SourceConfig(BaseModel):
    base_url: str = "https://api.coingecko.com/api/v3"
    vs_currency: str = "usd"
    timeout_s: float = Field(default=15.0, gt=0)


class MonitorConfig(BaseModel):
    poll_interval_s: int = Field(default=30, gt=0)
    # Rolling window length per asset, used for charting.
    history_size: int = Field(default=20, gt=0)


class StorageConfig(BaseModel):
    url: str = "sqlite:///crypto_alert.db"
    key: str = "cryptoAlerts"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "json"


class AppConfig(BaseModel):
    assets: list[str] = Field(default_factory=lambda: ["bitcoin", "ethereum"])
    source: SourceConfig = Field(default_factory=SourceConfig)
    monitor: MonitorConfig = Field(default_factory=MonitorConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
