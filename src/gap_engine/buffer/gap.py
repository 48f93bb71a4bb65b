"""Gap buffer: a sequence optimized for edits clustered around one position.

Storage is a single slot list split into three regions::

    [ left segment | gap | right segment ]
    0          gap_start  gap_end       capacity

The gap is the buffer's implicit cursor. Inserting or deleting at the gap
is O(1); moving the gap costs the number of elements it crosses; growing
copies every element once and amortizes to O(1) per insertion.

Buffers are not synchronized. Callers sharing one across threads must
serialize access themselves.
"""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, List, Optional, TypeVar

from gap_engine.runtime import telemetry

from . import storage
from .errors import BufferMutatedError
from .growth import GrowthPolicy
from .state import BufferStats
from .validation import ensure_position, ensure_range

T = TypeVar("T")

LOGGER_NAME = "gap_engine.buffer"


class GapBuffer(Generic[T]):
    """Position-indexed sequence of arbitrary elements backed by a gap buffer."""

    def __init__(
        self,
        capacity: int = 0,
        *,
        policy: Optional[GrowthPolicy] = None,
        name: str = "default",
    ) -> None:
        if capacity < 0:
            raise ValueError(f"Capacity cannot be negative, got {capacity}")
        self.name = name
        self.policy = policy or GrowthPolicy.from_env()
        self._slots = storage.allocate(capacity)
        self._gap_start = 0
        self._gap_end = capacity
        self._version = 0
        self._growth_count = 0
        self._relocated = 0

    @classmethod
    def from_iterable(
        cls,
        items: Iterable[T],
        *,
        capacity: Optional[int] = None,
        policy: Optional[GrowthPolicy] = None,
        name: str = "default",
    ) -> "GapBuffer[T]":
        values = list(items)
        buffer = cls(
            max(len(values), capacity or 0), policy=policy, name=name
        )
        buffer.insert_many(0, values)
        return buffer

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        capacity: Optional[int] = None,
        policy: Optional[GrowthPolicy] = None,
        name: str = "default",
    ) -> "GapBuffer[str]":
        return cls.from_iterable(text, capacity=capacity, policy=policy, name=name)

    # ------------------------------------------------------------------
    # Queries

    def __len__(self) -> int:
        return len(self._slots) - (self._gap_end - self._gap_start)

    @property
    def length(self) -> int:
        return len(self)

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def gap_position(self) -> int:
        return self._gap_start

    @property
    def gap_length(self) -> int:
        return self._gap_end - self._gap_start

    def is_empty(self) -> bool:
        return len(self) == 0

    def get(self, pos: int) -> T:
        pos = ensure_position(pos, len(self))
        return self._slots[self._physical(pos)]

    def __getitem__(self, pos: int) -> T:
        return self.get(pos)

    def get_range(self, start: int, end: int) -> List[T]:
        """Return a copy of the elements at logical positions ``[start, end)``."""

        length = len(self)
        start = ensure_position(start, length, inclusive=True)
        end = ensure_position(end, length, inclusive=True)
        if end < start:
            raise ValueError(f"Range end {end} precedes start {start}")
        gap_start = self._gap_start
        result: List[T] = []
        if start < gap_start:
            result.extend(self._slots[start : min(end, gap_start)])
        if end > gap_start:
            shift = self._gap_end - gap_start
            result.extend(self._slots[max(start, gap_start) + shift : end + shift])
        return result

    def to_list(self) -> List[T]:
        return self._slots[: self._gap_start] + self._slots[self._gap_end :]

    def to_text(self) -> str:
        return "".join(str(item) for item in self)

    def __iter__(self) -> Iterator[T]:
        """Yield elements in logical order.

        The iterator is bound to the buffer's state when ``iter()`` is
        called. Mutating the buffer while it is live invalidates it; the
        next step that would yield an element raises ``BufferMutatedError``.
        """

        return self._iterate(self._version, len(self))

    def _iterate(self, version: int, length: int) -> Iterator[T]:
        for pos in range(length):
            if self._version != version:
                raise BufferMutatedError(
                    f"Buffer '{self.name}' changed during iteration"
                )
            yield self._slots[self._physical(pos)]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, GapBuffer):
            return self.to_list() == other.to_list()
        if isinstance(other, (list, tuple)):
            return self.to_list() == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} name={self.name!r} size={len(self)} "
            f"capacity={self.capacity} gap={self._gap_start}-{self._gap_end}>"
        )

    def stats(self) -> BufferStats:
        return BufferStats(
            length=len(self),
            capacity=self.capacity,
            gap_start=self._gap_start,
            gap_end=self._gap_end,
            growth_count=self._growth_count,
            relocated=self._relocated,
            version=self._version,
        )

    # ------------------------------------------------------------------
    # Mutations

    def move_gap_to(self, pos: int) -> None:
        """Relocate the gap so that its left edge sits at logical ``pos``."""

        pos = ensure_position(pos, len(self), inclusive=True)
        self._move_gap(pos)

    def insert(self, pos: int, item: T) -> None:
        pos = ensure_position(pos, len(self), inclusive=True)
        if self._gap_start == self._gap_end:
            self._grow(len(self) + 1)
        self._move_gap(pos)
        self._slots[self._gap_start] = item
        self._gap_start += 1
        self._touch()

    def insert_many(self, pos: int, items: Iterable[T]) -> int:
        """Insert ``items`` in order starting at ``pos``; return how many were added."""

        pos = ensure_position(pos, len(self), inclusive=True)
        values = list(items)
        count = len(values)
        if not count:
            return 0
        self.reserve(count)
        self._move_gap(pos)
        self._slots[self._gap_start : self._gap_start + count] = values
        self._gap_start += count
        self._touch()
        return count

    def delete(self, pos: int) -> T:
        """Remove and return the element at ``pos``."""

        pos = ensure_position(pos, len(self))
        self._move_gap(pos)
        item = self._slots[self._gap_end]
        self._slots[self._gap_end] = storage.EMPTY
        self._gap_end += 1
        self._touch()
        return item

    def delete_range(self, pos: int, count: int) -> List[T]:
        """Remove ``count`` elements starting at ``pos`` and return them."""

        pos, count = ensure_range(pos, count, len(self))
        if not count:
            return []
        self._move_gap(pos)
        end = self._gap_end + count
        removed = self._slots[self._gap_end : end]
        storage.clear_slots(self._slots, self._gap_end, end)
        self._gap_end = end
        self._touch()
        return removed

    def replace(self, pos: int, count: int, items: Iterable[T]) -> List[T]:
        """Swap ``count`` elements at ``pos`` for ``items``; return the removed ones."""

        pos, count = ensure_range(pos, count, len(self))
        values = list(items)
        if len(values) > count:
            self.reserve(len(values) - count)
        removed = self.delete_range(pos, count)
        self.insert_many(pos, values)
        return removed

    def clear(self) -> None:
        dropped = len(self)
        storage.clear_slots(self._slots, 0, self.capacity)
        self._gap_start = 0
        self._gap_end = self.capacity
        self._touch()
        telemetry.record_event(
            "gap_buffer::clear",
            level="debug",
            data={"buffer": self.name, "dropped": dropped},
            logger_name=LOGGER_NAME,
        )

    def reserve(self, additional: int) -> None:
        """Ensure the gap can absorb ``additional`` insertions without growing."""

        if additional < 0:
            raise ValueError(f"Cannot reserve a negative amount, got {additional}")
        if self.gap_length < additional:
            self._grow(len(self) + additional)

    # ------------------------------------------------------------------
    # Internals

    def _physical(self, pos: int) -> int:
        if pos < self._gap_start:
            return pos
        return pos + (self._gap_end - self._gap_start)

    def _touch(self) -> None:
        self._version += 1

    def _move_gap(self, pos: int) -> None:
        gap_start, gap_end = self._gap_start, self._gap_end
        if pos == gap_start:
            return

        slots = self._slots
        if pos > gap_start:
            count = pos - gap_start
            storage.move_block(slots, gap_end, gap_start, count)
            new_start, new_end = pos, gap_end + count
            storage.clear_slots(slots, max(gap_end, new_start), new_end)
        else:
            count = gap_start - pos
            new_start, new_end = pos, gap_end - count
            storage.move_block(slots, pos, new_end, count)
            storage.clear_slots(slots, new_start, min(gap_start, new_end))

        self._gap_start, self._gap_end = new_start, new_end
        self._relocated += count
        self._touch()
        if telemetry.is_enabled("debug"):
            telemetry.record_event(
                "gap_buffer::move_gap",
                level="debug",
                data={"buffer": self.name, "from": gap_start, "to": pos},
                logger_name=LOGGER_NAME,
            )

    def _grow(self, required: int) -> None:
        old_capacity = self.capacity
        new_capacity = self.policy.next_capacity(old_capacity, required)
        with telemetry.span(
            "gap_buffer::grow",
            logger_name=LOGGER_NAME,
            component="gap_buffer",
            metadata={
                "buffer": self.name,
                "old_capacity": old_capacity,
                "new_capacity": new_capacity,
            },
        ):
            new_slots = storage.allocate(new_capacity)
            tail = old_capacity - self._gap_end
            new_slots[: self._gap_start] = self._slots[: self._gap_start]
            new_slots[new_capacity - tail :] = self._slots[self._gap_end :]
            self._slots = new_slots
            self._gap_end = new_capacity - tail
            self._growth_count += 1
            self._touch()


__all__ = ["GapBuffer", "LOGGER_NAME"]
