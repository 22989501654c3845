"""
StudySync Scheduling System

Weekly time-block placement for assignments and topic plans.
Works without the web layer or a database; callers own the output.
"""

from .core.grid import WeekGrid, DaySlots, build_week_grid
from .core.scheduler import PlacementStrategy, CapacityAwareScheduler, RoundRobinScheduler
from .core.time_slot import TimeSlot, WorkItem, PlacedBlock
from .core.constants import WEEKDAYS
from .algorithms.step_weighting import TopicType, Step, classify_topic, weight_steps, distribute_hours

__version__ = "1.0.0"
