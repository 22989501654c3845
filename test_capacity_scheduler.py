import logging
from datetime import datetime

from studysync.scheduling import CapacityAwareScheduler, WorkItem, build_week_grid
from studysync.scheduling.utils.slot_utils import find_double_bookings, placement_summary


def slot_index(grid, block):
    """Position of a block's slot in the flattened Monday..Sunday grid."""
    index = 0
    for day in grid:
        for slot in day:
            if slot.day == block.day and slot.start_label == block.start:
                return index
            index += 1
    raise AssertionError(f"{block} not on grid")


def test_two_assignments_share_monday():
    items = [
        WorkItem(id=2, label="Wednesday essay", required_units=2, priority_key=datetime(2024, 1, 10, 10)),
        WorkItem(id=1, label="Monday quiz", required_units=2, priority_key=datetime(2024, 1, 8, 10)),
    ]
    blocks = CapacityAwareScheduler().schedule(items, build_week_grid())

    assert [(b.day, b.start, b.end, b.label) for b in blocks] == [
        ("Monday", "09:00", "09:30", "Monday quiz"),
        ("Monday", "09:30", "10:00", "Monday quiz"),
        ("Monday", "10:00", "10:30", "Wednesday essay"),
        ("Monday", "10:30", "11:00", "Wednesday essay"),
    ]


def test_earliest_priority_is_placed_first():
    grid = build_week_grid()
    late = WorkItem(id="late", label="late", required_units=30, priority_key=2)
    early = WorkItem(id="early", label="early", required_units=30, priority_key=1)
    blocks = CapacityAwareScheduler().schedule([late, early], grid)

    early_indices = [slot_index(grid, b) for b in blocks if b.item_id == "early"]
    late_indices = [slot_index(grid, b) for b in blocks if b.item_id == "late"]
    assert len(early_indices) == 30 and len(late_indices) == 30
    assert max(early_indices) < min(late_indices)


def test_equal_priorities_keep_input_order():
    items = [WorkItem(id=i, label=str(i), required_units=1, priority_key=0) for i in range(3)]
    blocks = CapacityAwareScheduler().schedule(items)
    assert [b.item_id for b in blocks] == [0, 1, 2]


def test_no_double_booking():
    items = [WorkItem(id=i, label=f"item {i}", required_units=17, priority_key=i) for i in range(8)]
    blocks = CapacityAwareScheduler().schedule(items, build_week_grid())
    assert find_double_bookings(blocks) == []


def test_overflow_is_partially_placed_without_error(caplog):
    caplog.set_level(logging.INFO)
    grid = build_week_grid()
    capacity = grid.capacity()
    items = [
        WorkItem(id="a", label="a", required_units=100, priority_key=1),
        WorkItem(id="b", label="b", required_units=100, priority_key=2),
    ]
    blocks = CapacityAwareScheduler().schedule(items, grid)

    assert len(blocks) == min(200, capacity)
    assert grid.free_capacity() == 0
    summary = placement_summary(items, blocks)
    assert summary[0]["placed_units"] == 100
    assert summary[1]["placed_units"] == capacity - 100
    assert summary[1]["unplaced_units"] == 200 - capacity
    assert "units unplaced" in caplog.text


def test_spills_across_days_and_skips_trimmed_weekend_hours():
    items = [WorkItem(id=1, label="big", required_units=5 * 24 + 1, priority_key=0)]
    blocks = CapacityAwareScheduler().schedule(items)
    assert blocks[-1].day == "Saturday"
    assert blocks[-1].start == "11:00"


def test_fractional_and_zero_units_book_at_least_one_slot():
    assert WorkItem(id=1, label="x", required_units=0).required_units == 1
    assert WorkItem(id=1, label="x", required_units=2.1).required_units == 3


def test_empty_input_places_nothing():
    assert CapacityAwareScheduler().schedule([]) == []
