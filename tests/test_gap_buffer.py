from __future__ import annotations

import pytest

from gap_engine.buffer import (
    BufferStats,
    GapBuffer,
    IndexOutOfBoundsError,
)


def make_buffer(text: str = "", *, capacity: int | None = None) -> GapBuffer[str]:
    return GapBuffer.from_text(text, capacity=capacity)


def test_new_buffer_is_all_gap() -> None:
    buffer: GapBuffer[str] = GapBuffer(4)

    assert len(buffer) == 0
    assert buffer.capacity == 4
    assert buffer.is_empty()
    assert buffer.stats() == BufferStats(
        length=0,
        capacity=4,
        gap_start=0,
        gap_end=4,
        growth_count=0,
        relocated=0,
        version=0,
    )


def test_zero_capacity_buffer() -> None:
    buffer: GapBuffer[str] = GapBuffer()

    assert buffer.capacity == 0
    buffer.insert(0, "a")
    assert buffer.to_list() == ["a"]
    assert buffer.capacity == 1


def test_negative_capacity_rejected() -> None:
    with pytest.raises(ValueError):
        GapBuffer(-1)


def test_insert_scenario() -> None:
    buffer: GapBuffer[str] = GapBuffer(4)

    buffer.insert(0, "a")
    assert buffer.to_list() == ["a"]
    buffer.insert(1, "b")
    assert buffer.to_list() == ["a", "b"]
    buffer.insert(0, "c")
    assert buffer.to_list() == ["c", "a", "b"]


def test_delete_scenario() -> None:
    buffer = make_buffer("cab", capacity=4)

    removed = buffer.delete(1)

    assert removed == "a"
    assert buffer.to_list() == ["c", "b"]
    assert len(buffer) == 2


def test_insert_then_get_returns_item_at_every_position() -> None:
    base = "abcd"
    for pos in range(len(base) + 1):
        buffer = make_buffer(base)
        buffer.insert(pos, "X")
        assert buffer.get(pos) == "X"
        assert buffer[pos] == "X"
        assert buffer.to_text() == base[:pos] + "X" + base[pos:]


def test_insert_many_keeps_order() -> None:
    buffer = make_buffer("held")

    inserted = buffer.insert_many(2, iter("llo wor"))

    assert inserted == 7
    assert buffer.to_text() == "hello world"


def test_insert_many_empty_is_noop() -> None:
    buffer = make_buffer("abc")
    before = buffer.stats()

    assert buffer.insert_many(1, []) == 0
    assert buffer.stats() == before


def test_delete_range_scenario() -> None:
    buffer = make_buffer("cabd")

    removed = buffer.delete_range(0, 2)

    assert removed == ["c", "a"]
    assert buffer.to_list() == ["b", "d"]


def test_delete_range_in_the_middle_after_gap_moves() -> None:
    buffer = make_buffer("12345678")
    buffer.move_gap_to(1)

    buffer.delete_range(3, 3)

    assert buffer.to_text() == "12378"


def test_delete_range_zero_count_is_noop() -> None:
    buffer = make_buffer("abc")
    before = buffer.stats()

    assert buffer.delete_range(3, 0) == []
    assert buffer.stats() == before


def test_delete_whole_content() -> None:
    buffer = make_buffer("12345678")

    buffer.delete_range(0, 8)

    assert buffer.is_empty()
    assert buffer.to_text() == ""
    assert buffer.gap_length == buffer.capacity


def test_replace_swaps_elements() -> None:
    buffer = make_buffer("hello world")

    removed = buffer.replace(6, 5, "there!")

    assert removed == list("world")
    assert buffer.to_text() == "hello there!"


def test_replace_out_of_range_leaves_buffer_untouched() -> None:
    buffer = make_buffer("abc")

    with pytest.raises(IndexOutOfBoundsError):
        buffer.replace(2, 5, "xyz")

    assert buffer.to_text() == "abc"


def test_move_gap_twice_is_idempotent() -> None:
    buffer = make_buffer("abcdef")

    buffer.move_gap_to(2)
    first = buffer.stats()
    buffer.move_gap_to(2)

    assert buffer.stats() == first
    assert buffer.gap_position == 2
    assert buffer.to_text() == "abcdef"


def test_move_gap_both_directions_preserves_content() -> None:
    buffer = make_buffer("abcdefgh", capacity=12)

    buffer.move_gap_to(6)
    assert buffer.to_text() == "abcdefgh"
    buffer.move_gap_to(1)
    assert buffer.to_text() == "abcdefgh"
    buffer.move_gap_to(8)
    assert buffer.to_text() == "abcdefgh"

    stats = buffer.stats()
    assert stats.gap_start == 8
    assert stats.gap_end == 12
    assert stats.relocated == 2 + 5 + 7


def test_appending_at_the_gap_never_relocates() -> None:
    buffer: GapBuffer[int] = GapBuffer()

    for value in range(100):
        buffer.insert(len(buffer), value)

    stats = buffer.stats()
    assert buffer.to_list() == list(range(100))
    assert stats.relocated == 0
    assert stats.capacity == 128
    assert stats.growth_count == 8


def test_deleted_slots_are_released() -> None:
    buffer = make_buffer("abcdef")

    buffer.delete_range(1, 3)
    buffer.move_gap_to(0)

    stats = buffer.stats()
    gap = buffer._slots[stats.gap_start : stats.gap_end]
    assert all(slot is None for slot in gap)


@pytest.mark.parametrize("pos", [3, 4, -1])
def test_get_out_of_bounds(pos: int) -> None:
    buffer = make_buffer("abc")

    with pytest.raises(IndexOutOfBoundsError) as excinfo:
        buffer.get(pos)

    assert isinstance(excinfo.value, IndexError)
    assert excinfo.value.length == 3


def test_insert_past_end_fails_without_mutation() -> None:
    buffer = make_buffer("abc")
    before = buffer.stats()

    with pytest.raises(IndexOutOfBoundsError):
        buffer.insert(4, "x")

    assert buffer.stats() == before


def test_delete_on_empty_buffer_fails() -> None:
    buffer: GapBuffer[str] = GapBuffer(2)

    with pytest.raises(IndexOutOfBoundsError):
        buffer.delete(0)


def test_delete_range_bounds() -> None:
    buffer = make_buffer("abcd")

    with pytest.raises(IndexOutOfBoundsError):
        buffer.delete_range(3, 2)
    with pytest.raises(ValueError):
        buffer.delete_range(0, -1)

    assert buffer.to_text() == "abcd"


def test_move_gap_out_of_range() -> None:
    buffer = make_buffer("abcd")

    with pytest.raises(IndexOutOfBoundsError):
        buffer.move_gap_to(5)


def test_non_integer_positions_rejected() -> None:
    buffer = make_buffer("abcd")

    with pytest.raises(TypeError):
        buffer.get("1")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        buffer.insert(1.0, "x")  # type: ignore[arg-type]


def test_get_range_spans_the_gap() -> None:
    buffer = make_buffer("abcdef", capacity=10)
    buffer.move_gap_to(3)

    assert buffer.get_range(1, 5) == list("bcde")
    assert buffer.get_range(0, 3) == list("abc")
    assert buffer.get_range(3, 6) == list("def")
    assert buffer.get_range(2, 2) == []

    with pytest.raises(ValueError):
        buffer.get_range(4, 2)
    with pytest.raises(IndexOutOfBoundsError):
        buffer.get_range(0, 7)


def test_clear_keeps_storage() -> None:
    buffer = make_buffer("abcdef")
    capacity = buffer.capacity

    buffer.clear()

    assert buffer.is_empty()
    assert buffer.capacity == capacity
    assert buffer.gap_length == capacity
    buffer.insert(0, "z")
    assert buffer.to_text() == "z"


def test_equality_and_repr() -> None:
    buffer = make_buffer("abc")
    other = GapBuffer.from_iterable(["a", "b", "c"], capacity=10)

    assert buffer == other
    assert buffer == ["a", "b", "c"]
    assert buffer == ("a", "b", "c")
    assert buffer != ["a", "b"]
    assert "size=3" in repr(buffer)
    assert "capacity=3" in repr(buffer)


def test_elements_need_not_be_hashable_or_comparable() -> None:
    first, second = {"a": 1}, [1, 2]
    buffer: GapBuffer[object] = GapBuffer(1)

    buffer.insert(0, first)
    buffer.insert(0, second)

    assert buffer.get(0) is second
    assert buffer.get(1) is first
