"""Error taxonomy raised by gap buffer operations."""

from __future__ import annotations


class GapBufferError(RuntimeError):
    """Base class for every error raised by the buffer layer."""


class IndexOutOfBoundsError(GapBufferError, IndexError):
    """Raised when a logical position falls outside the valid range."""

    def __init__(self, message: str, *, position: int, length: int) -> None:
        super().__init__(message)
        self.position = position
        self.length = length


class CapacityOverflowError(GapBufferError, OverflowError):
    """Raised when growing would exceed the configured capacity ceiling."""

    def __init__(self, requested: int, limit: int) -> None:
        super().__init__(
            f"Capacity {requested} exceeds the maximum of {limit} slots"
        )
        self.requested = requested
        self.limit = limit


class AllocationError(GapBufferError, MemoryError):
    """Raised when slot storage cannot be allocated."""

    def __init__(self, capacity: int, *, reason: str | None = None) -> None:
        message = f"Unable to allocate {capacity} slots"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.capacity = capacity


class BufferMutatedError(GapBufferError):
    """Raised by an iterator whose buffer changed underneath it."""
