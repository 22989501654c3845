"""
Fixed shape of the weekly availability grid.
"""

from datetime import time

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
WEEKEND = {"Saturday", "Sunday"}

SLOT_MINUTES = 30
DAY_START = time(9, 0)
DAY_END = time(21, 0)

# Weekend days lose this many slots at each end of the weekday window
WEEKEND_TRIM_SLOTS = 4
