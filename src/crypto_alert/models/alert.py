"""Alert model — a one-shot price threshold on a single asset."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AlertCondition(str, Enum):
    """Direction in which the price must cross the threshold."""

    ABOVE = "above"
    BELOW = "below"

    @classmethod
    def _missing_(cls, value: object) -> AlertCondition | None:
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None

    def is_met(self, price: Decimal, threshold: Decimal) -> bool:
        """Both directions are inclusive of the threshold itself."""
        if self is AlertCondition.ABOVE:
            return price >= threshold
        return price <= threshold


class Alert(BaseModel):
    """A user-defined alert.

    Persisted records keep the browser-era field names (``coin`` for the
    asset, ``price`` for the threshold); both spellings are accepted on input.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    asset: str = Field(alias="coin", min_length=1)
    condition: AlertCondition
    threshold: Decimal = Field(alias="price", gt=0)
    triggered: bool = False

    def matches(self, price: Decimal) -> bool:
        return self.condition.is_met(price, self.threshold)

    def to_record(self) -> dict[str, Any]:
        """Serialize to the JSON-safe stored layout."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> Alert:
        return cls.model_validate(data)
