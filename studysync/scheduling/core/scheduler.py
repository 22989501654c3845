"""
Placement strategies that turn work items into booked blocks on a week grid.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from typing import Callable, Iterable, List, Optional

from .grid import WeekGrid, build_week_grid
from .time_slot import PlacedBlock, WorkItem

logger = logging.getLogger(__name__)

# ================================
# STRATEGY INTERFACE
# ================================

class PlacementStrategy(ABC):
    """
    Common contract for the schedulers.

    `schedule` owns the run: it allocates a fresh grid unless one is passed
    in, orders the items and asks `place` for each one in turn. Strategies
    keep no state between calls, so one instance can serve many requests.
    """

    def schedule(self, items: Iterable[WorkItem], grid: Optional[WeekGrid] = None) -> List[PlacedBlock]:
        if grid is None:
            grid = build_week_grid()
        return self._place_all(items, grid, self.place)

    def _place_all(self, items: Iterable[WorkItem], grid: WeekGrid, place: Callable) -> List[PlacedBlock]:
        blocks: List[PlacedBlock] = []
        for item in self.order(list(items)):
            blocks.extend(place(item, grid))
        return blocks

    def order(self, items: List[WorkItem]) -> List[WorkItem]:
        return items

    @abstractmethod
    def place(self, item: WorkItem, grid: WeekGrid) -> List[PlacedBlock]:
        ...

# ================================
# CAPACITY-AWARE FIRST FIT
# ================================

class CapacityAwareScheduler(PlacementStrategy):
    """
    Deadline-priority first fit across the whole week.

    Items are booked earliest-priority first into the first free slots,
    Monday morning onward. An item that does not fit is left partially
    placed; nothing is raised and nothing rolls over to another week.
    Placement never looks at the due date itself, so work can land on days
    after it is due.
    """

    def order(self, items: List[WorkItem]) -> List[WorkItem]:
        # sorted() is stable, equal keys keep input order
        return sorted(items, key=lambda item: item.priority_key)

    def place(self, item: WorkItem, grid: WeekGrid) -> List[PlacedBlock]:
        remaining = item.required_units
        blocks = []

        for day in grid:
            if remaining <= 0:
                break
            for slot in day:
                if remaining <= 0:
                    break
                if slot.occupied:
                    continue
                slot.occupied = True
                blocks.append(PlacedBlock.from_slot(slot, item))
                remaining -= 1

        if remaining > 0:
            logger.info(f"Week grid exhausted: {remaining} of {item.required_units} units unplaced for {item.label!r}")
        return blocks

# ================================
# ROUND ROBIN (OCCUPANCY IGNORED)
# ================================

@dataclass
class Cursor:
    """Day/slot position of one round-robin run."""
    day_index: int = 0
    slot_index: int = 0


class RoundRobinScheduler(PlacementStrategy):
    """
    Lays units end to end with a day/slot cursor that survives across items.

    The cursor belongs to a single `schedule` call; a bare `place` starts
    from Monday morning. Occupancy is neither read nor written, so blocks may
    overlap anything else on the calendar, including earlier blocks from this
    run once the cursor has wrapped around the week. Every unit is always
    placed.
    """

    def schedule(self, items: Iterable[WorkItem], grid: Optional[WeekGrid] = None) -> List[PlacedBlock]:
        if grid is None:
            grid = build_week_grid()
        return self._place_all(items, grid, partial(self.place, cursor=Cursor()))

    def place(self, item: WorkItem, grid: WeekGrid, cursor: Optional[Cursor] = None) -> List[PlacedBlock]:
        if cursor is None:
            cursor = Cursor()
        blocks = []
        remaining = item.required_units

        while remaining > 0:
            day = grid[cursor.day_index]
            slot = day.slots[cursor.slot_index]
            blocks.append(PlacedBlock.from_slot(slot, item))
            remaining -= 1

            cursor.slot_index += 1
            if cursor.slot_index >= len(day):
                cursor.slot_index = 0
                cursor.day_index = (cursor.day_index + 1) % len(grid)

        return blocks
