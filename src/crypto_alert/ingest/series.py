"""Rolling price window — bounded FIFO history for one asset."""

from __future__ import annotations

from collections import deque
from decimal import Decimal

DEFAULT_CAPACITY = 20


class RollingSeries:
    """
    Fixed-capacity FIFO buffer of prices.

    - Oldest value is evicted once the buffer holds ``capacity`` values
    - ``push(None)`` is ignored, so a missing price never shifts the window
    - Callers are still expected to filter out non-positive prices

    Usage:
        series = RollingSeries(capacity=20)
        series.push(Decimal("64000"))
        series.values()  # oldest first
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._values: deque[Decimal] = deque(maxlen=capacity)

    def push(self, value: Decimal | None) -> None:
        if value is None:
            return
        self._values.append(value)

    def values(self) -> list[Decimal]:
        return list(self._values)

    def latest(self) -> Decimal | None:
        return self._values[-1] if self._values else None

    def __len__(self) -> int:
        return len(self._values)
