"""Snapshot types describing gap buffer layout."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BufferStats:
    """Lightweight snapshot of a buffer's layout and bookkeeping counters."""

    length: int
    capacity: int
    gap_start: int
    gap_end: int
    growth_count: int
    relocated: int
    version: int

    @property
    def gap_length(self) -> int:
        return self.gap_end - self.gap_start
