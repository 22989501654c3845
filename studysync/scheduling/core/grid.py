"""
Week grid construction.

The grid only knows day names, never concrete dates, so building it twice
always yields the same shape.
"""

import logging
from datetime import datetime, time, timedelta
from typing import Iterator, List

from .constants import DAY_END, DAY_START, SLOT_MINUTES, WEEKDAYS, WEEKEND, WEEKEND_TRIM_SLOTS
from .time_slot import TimeSlot

logger = logging.getLogger(__name__)


class DaySlots:
    """Time-ordered slots for one weekday."""
    def __init__(self, day: str, slots: List[TimeSlot]):
        self.day = day
        self.slots = slots

    def free_slots(self) -> List[TimeSlot]:
        return [slot for slot in self.slots if not slot.occupied]

    def __len__(self):
        return len(self.slots)

    def __iter__(self) -> Iterator[TimeSlot]:
        return iter(self.slots)

    def __repr__(self):
        return f"DaySlots({self.day}, {len(self.slots)} slots, {len(self.free_slots())} free)"


class WeekGrid:
    """Seven DaySlots, Monday first. Owned by exactly one scheduling run."""
    def __init__(self, days: List[DaySlots]):
        self.days = days

    def __getitem__(self, index: int) -> DaySlots:
        return self.days[index]

    def __len__(self):
        return len(self.days)

    def __iter__(self) -> Iterator[DaySlots]:
        return iter(self.days)

    def capacity(self) -> int:
        return sum(len(day) for day in self.days)

    def free_capacity(self) -> int:
        return sum(len(day.free_slots()) for day in self.days)

    def __repr__(self):
        return f"WeekGrid({self.capacity()} slots, {self.free_capacity()} free)"


def build_day_slots(day: str, day_start: time = DAY_START, day_end: time = DAY_END) -> List[TimeSlot]:
    """Build consecutive half-hour slots for one day, trimming both ends on weekends."""
    anchor = datetime(2000, 1, 1)
    cursor = datetime.combine(anchor, day_start)
    end = datetime.combine(anchor, day_end)
    step = timedelta(minutes=SLOT_MINUTES)

    slots = []
    while cursor + step <= end:
        slots.append(TimeSlot(day, cursor.time(), (cursor + step).time()))
        cursor += step

    if day in WEEKEND:
        if len(slots) < WEEKEND_TRIM_SLOTS * 2:
            logger.warning(f"Skipping weekend trim for {day}: only {len(slots)} slots in window")
        else:
            slots = slots[WEEKEND_TRIM_SLOTS:len(slots) - WEEKEND_TRIM_SLOTS]

    return slots


def build_week_grid(day_start: time = DAY_START, day_end: time = DAY_END) -> WeekGrid:
    """Build a fresh, fully available grid for one week."""
    return WeekGrid([DaySlots(day, build_day_slots(day, day_start, day_end)) for day in WEEKDAYS])
