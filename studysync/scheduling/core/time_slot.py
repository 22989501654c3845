"""
Slot, work item and placed block representations for the scheduling system.
"""

import math
from dataclasses import dataclass, field
from datetime import time
from typing import Any


class TimeSlot:
    """
    One bookable half-hour cell of the week grid.

    `occupied` is scratch state: only the capacity-aware scheduler sets it,
    and only on a grid it built for the current run.
    """
    def __init__(self, day: str, start: time, end: time, occupied: bool = False):
        self.day = day
        self.start = start
        self.end = end
        self.occupied = occupied

    @property
    def start_label(self) -> str:
        return self.start.strftime("%H:%M")

    @property
    def end_label(self) -> str:
        return self.end.strftime("%H:%M")

    def __lt__(self, other):
        return self.start < other.start

    def __repr__(self):
        if self.occupied:
            return f"BookedSlot({self.day} {self.start_label} - {self.end_label})"
        return f"AvailableSlot({self.day} {self.start_label} - {self.end_label})"


@dataclass
class WorkItem:
    """A unit of schedulable work measured in half-hour units."""
    id: Any
    label: str
    required_units: int
    priority_key: Any = 0

    def __post_init__(self):
        # Fractional or non-positive requests still book at least one slot
        self.required_units = max(1, math.ceil(self.required_units))

    @classmethod
    def from_step(cls, index: int, text: str, duration_hours: float) -> "WorkItem":
        """Build a work item from a weighted plan step; insertion order is the priority."""
        return cls(id=index, label=text, required_units=math.ceil(duration_hours * 2), priority_key=index)


@dataclass(frozen=True)
class PlacedBlock:
    day: str
    start: str
    end: str
    label: str
    item_id: Any = field(default=None, compare=False)

    @classmethod
    def from_slot(cls, slot: TimeSlot, item: WorkItem) -> "PlacedBlock":
        return cls(day=slot.day, start=slot.start_label, end=slot.end_label, label=item.label, item_id=item.id)

    def as_dict(self) -> dict:
        return {"day": self.day, "start": self.start, "end": self.end, "label": self.label, "item_id": self.item_id}
