"""
Helpers for presenting and auditing placed blocks.
"""

from collections import Counter, OrderedDict
from typing import Any, Dict, Iterable, List

from ..core.constants import WEEKDAYS
from ..core.time_slot import PlacedBlock, WorkItem


def group_blocks_by_day(blocks: Iterable[Any]) -> Dict[str, List[Any]]:
    """Bucket blocks into the seven-column week view, keeping their order."""
    week: Dict[str, List[Any]] = OrderedDict((day, []) for day in WEEKDAYS)
    for block in blocks:
        day = block["day"] if isinstance(block, dict) else block.day
        if day in week:
            week[day].append(block)
    return week


def placement_summary(items: Iterable[WorkItem], blocks: Iterable[PlacedBlock]) -> List[dict]:
    """Requested versus placed units per item, in the items' order."""
    placed = Counter(block.item_id for block in blocks)
    summary = []
    for item in items:
        placed_units = placed.get(item.id, 0)
        summary.append({
            "item_id": item.id,
            "label": item.label,
            "requested_units": item.required_units,
            "placed_units": placed_units,
            "unplaced_units": max(0, item.required_units - placed_units),
        })
    return summary


def find_double_bookings(blocks: Iterable[PlacedBlock]) -> List[tuple]:
    """(day, start) pairs that hold more than one block."""
    counts = Counter((block.day, block.start) for block in blocks)
    return [key for key, count in counts.items() if count > 1]
