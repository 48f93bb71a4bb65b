"""Capacity growth policy for gap buffers."""

from __future__ import annotations

import math
import os
import sys
from dataclasses import dataclass

from gap_engine.runtime.telemetry import ENV_PREFIX

from .errors import CapacityOverflowError

DEFAULT_GROWTH_FACTOR = 2.0
DEFAULT_MAX_CAPACITY = sys.maxsize


@dataclass(frozen=True, slots=True)
class GrowthPolicy:
    """Multiplicative growth with a hard ceiling on the slot count."""

    factor: float = DEFAULT_GROWTH_FACTOR
    max_capacity: int = DEFAULT_MAX_CAPACITY

    def __post_init__(self) -> None:
        if not math.isfinite(self.factor):
            raise ValueError(f"Growth factor must be finite, got {self.factor}")
        if not self.factor > 1:
            raise ValueError(f"Growth factor must be greater than 1, got {self.factor}")
        if self.max_capacity < 0:
            raise ValueError("max_capacity cannot be negative")

    @classmethod
    def from_env(cls) -> "GrowthPolicy":
        raw_factor = os.getenv(f"{ENV_PREFIX}GROWTH_FACTOR")
        raw_max = os.getenv(f"{ENV_PREFIX}MAX_CAPACITY")
        return cls(
            factor=float(raw_factor) if raw_factor else DEFAULT_GROWTH_FACTOR,
            max_capacity=int(raw_max) if raw_max else DEFAULT_MAX_CAPACITY,
        )

    def next_capacity(self, current: int, required: int) -> int:
        """Return the capacity to grow to from ``current`` slots.

        The result is at least ``required`` and strictly greater than
        ``current``. When plain multiplication overshoots ``max_capacity``
        but the ceiling still satisfies the request, the ceiling is used.
        """

        target = max(required, current + 1)
        if target > self.max_capacity:
            raise CapacityOverflowError(target, self.max_capacity)

        capacity = max(1, current)
        while capacity < target:
            capacity = max(capacity + 1, self._scale(capacity))
        return min(capacity, self.max_capacity)

    def _scale(self, capacity: int) -> int:
        if float(self.factor).is_integer():
            return capacity * int(self.factor)
        try:
            scaled = capacity * self.factor
        except OverflowError:
            return self.max_capacity
        if not math.isfinite(scaled):
            return self.max_capacity
        return math.ceil(scaled)
