"""Slot storage primitives backing the gap buffer.

Storage is a plain list. Slots inside the gap hold ``EMPTY`` and are never
read back.
"""

from __future__ import annotations

from typing import Any, List

from .errors import AllocationError

EMPTY: Any = None

Slots = List[Any]


def allocate(capacity: int) -> Slots:
    """Return ``capacity`` empty slots, mapping interpreter failures to ``AllocationError``."""

    try:
        return [EMPTY] * capacity
    except (MemoryError, OverflowError) as exc:
        raise AllocationError(capacity, reason=type(exc).__name__) from exc


def move_block(slots: Slots, src: int, dst: int, count: int) -> None:
    """Copy ``count`` slots from ``src`` to ``dst`` within the same list.

    The right-hand slice is materialized before assignment, so overlapping
    ranges behave like ``memmove``.
    """

    if count <= 0 or src == dst:
        return
    slots[dst : dst + count] = slots[src : src + count]


def clear_slots(slots: Slots, start: int, end: int) -> None:
    if end > start:
        slots[start:end] = [EMPTY] * (end - start)
