"""Config loader — reads YAML, applies CRYPTO_ALERT_* env var overrides."""

from __future__ import annotations

import os
from pathlib import Path

import yaml

from crypto_alert.config.schema import AppConfig

# env var -> (section, field)
_ENV_OVERRIDES = {
    "CRYPTO_ALERT_DATABASE_URL": ("storage", "url"),
    "CRYPTO_ALERT_LOG_LEVEL": ("logging", "level"),
    "CRYPTO_ALERT_LOG_FORMAT": ("logging", "format"),
    "CRYPTO_ALERT_POLL_INTERVAL": ("monitor", "poll_interval_s"),
}


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from a YAML file, then apply env var overrides.

    If *path* is None or the file doesn't exist, returns defaults.

    Environment variable overrides:
        CRYPTO_ALERT_DATABASE_URL   -> storage.url
        CRYPTO_ALERT_LOG_LEVEL      -> logging.level
        CRYPTO_ALERT_LOG_FORMAT     -> logging.format
        CRYPTO_ALERT_POLL_INTERVAL  -> monitor.poll_interval_s
    """
    data: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p) as f:
                data = yaml.safe_load(f) or {}

    for env_var, (section, field) in _ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            data.setdefault(section, {})[field] = value

    return AppConfig.model_validate(data)
