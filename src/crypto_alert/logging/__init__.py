"""structlog setup shared by the CLI and the monitor."""

from crypto_alert.logging.setup import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
