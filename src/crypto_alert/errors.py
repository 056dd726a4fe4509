"""Exception hierarchy for the alert engine and its collaborators."""

from __future__ import annotations


class CryptoAlertError(Exception):
    """Base class for all crypto-alert errors."""


class InvalidThreshold(CryptoAlertError, ValueError):
    """A user-supplied alert threshold is non-numeric, non-finite or <= 0."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid alert threshold: {value!r} (must be a positive number)")


class SourceUnavailable(CryptoAlertError):
    """The price source could not be fetched or its response could not be parsed."""


class PersistenceFailure(CryptoAlertError):
    """The durable key-value store rejected a read or write."""


class InvalidAsset(CryptoAlertError, ValueError):
    """A user-supplied alert asset is empty."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid alert asset: {value!r} (must be a coin id)")
