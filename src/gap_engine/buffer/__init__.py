"""Gap buffer container, growth policy, and error types."""

from .errors import (
    AllocationError,
    BufferMutatedError,
    CapacityOverflowError,
    GapBufferError,
    IndexOutOfBoundsError,
)
from .gap import GapBuffer
from .growth import GrowthPolicy
from .state import BufferStats
from .validation import ensure_position, ensure_range

__all__ = [
    "GapBuffer",
    "GrowthPolicy",
    "BufferStats",
    "GapBufferError",
    "IndexOutOfBoundsError",
    "CapacityOverflowError",
    "AllocationError",
    "BufferMutatedError",
    "ensure_position",
    "ensure_range",
]
