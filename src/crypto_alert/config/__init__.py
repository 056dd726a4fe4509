"""YAML configuration with CRYPTO_ALERT_* environment overrides."""

from crypto_alert.config.loader import load_config
from crypto_alert.config.schema import (
    AppConfig,
    LoggingConfig,
    MonitorConfig,
    SourceConfig,
    StorageConfig,
)

__all__ = [
    "AppConfig",
    "LoggingConfig",
    "MonitorConfig",
    "SourceConfig",
    "StorageConfig",
    "load_config",
]
