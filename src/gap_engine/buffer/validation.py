"""Validation helpers shared across buffer operations."""

from __future__ import annotations

from .errors import IndexOutOfBoundsError


def ensure_position(position: int, length: int, *, inclusive: bool = False) -> int:
    """Check ``position`` against ``[0, length)`` (or ``[0, length]`` when inclusive)."""

    position = _as_index(position)
    limit = length if inclusive else length - 1
    if position < 0 or position > limit:
        bounds = f"[0, {length}]" if inclusive else f"[0, {length})"
        raise IndexOutOfBoundsError(
            f"Position {position} out of range {bounds}",
            position=position,
            length=length,
        )
    return position


def ensure_range(start: int, count: int, length: int) -> tuple[int, int]:
    """Check that ``count`` elements starting at ``start`` exist."""

    start = ensure_position(start, length, inclusive=True)
    count = _as_index(count)
    if count < 0:
        raise ValueError(f"Count cannot be negative, got {count}")
    if start + count > length:
        raise IndexOutOfBoundsError(
            f"Range [{start}, {start + count}) exceeds length {length}",
            position=start + count,
            length=length,
        )
    return start, count


def _as_index(value: int) -> int:
    if isinstance(value, bool) or not hasattr(value, "__index__"):
        raise TypeError(f"Positions must be integers, not {type(value).__name__}")
    return value.__index__()
