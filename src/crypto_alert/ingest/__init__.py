"""Price ingestion — rolling windows and the per-cycle ingest step."""

from crypto_alert.ingest.ingestor import IngestResult, PriceIngestor
from crypto_alert.ingest.series import DEFAULT_CAPACITY, RollingSeries

__all__ = [
    "DEFAULT_CAPACITY",
    "IngestResult",
    "PriceIngestor",
    "RollingSeries",
]
