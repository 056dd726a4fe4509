"""Presentation layer contract — observers for prices, charts and alerts."""

from crypto_alert.presentation.formatting import (
    describe_alert,
    format_change,
    format_currency,
    triggered_message,
)
from crypto_alert.presentation.listener import (
    ListenerGroup,
    LoggingPresenter,
    PresentationListener,
)

__all__ = [
    "ListenerGroup",
    "LoggingPresenter",
    "PresentationListener",
    "describe_alert",
    "format_change",
    "format_currency",
    "triggered_message",
]
