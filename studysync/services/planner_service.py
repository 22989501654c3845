"""
Weekly planner service: feeds assignments and topic-plan steps to the
scheduling core and persists what it places.

Every call builds its own grid; nothing about a run is kept in memory.
"""

import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models import Assignment, BlockSource, PlannerBlock, TopicPlan
from ..scheduling import CapacityAwareScheduler, RoundRobinScheduler, WorkItem, build_week_grid
from ..scheduling.algorithms.step_weighting import finite_hours, round_half_up
from ..scheduling.utils.slot_utils import group_blocks_by_day, placement_summary
from .assignment_service import open_assignments

logger = logging.getLogger(__name__)

DEFAULT_EFFORT_HOURS = 2


def effort_units(effort_hours: Optional[float]) -> int:
    """Half-hour units for an assignment; missing or zero effort counts as two hours."""
    hours = finite_hours(effort_hours, DEFAULT_EFFORT_HOURS)
    return max(1, int(round_half_up(hours * 2)))


def work_item_for_assignment(assignment: Assignment) -> WorkItem:
    return WorkItem(
        id=assignment.id,
        label=assignment.display_title,
        required_units=effort_units(assignment.effort),
        priority_key=assignment.due,
    )


def work_items_for_steps(steps: List[dict]) -> List[WorkItem]:
    return [WorkItem.from_step(index, step["text"], float(step["duration"])) for index, step in enumerate(steps)]


class PlannerService:
    """Runs the placement strategies on behalf of the planner routes."""

    def plan_week(self, db: Session, user_id: int) -> dict:
        """Replace the user's stored week plan with a fresh capacity-aware placement."""
        items = [work_item_for_assignment(a) for a in open_assignments(db, user_id)]
        blocks = CapacityAwareScheduler().schedule(items, build_week_grid())
        summary = placement_summary(items, blocks)
        unplaced = sum(entry["unplaced_units"] for entry in summary)

        db.query(PlannerBlock).filter(PlannerBlock.user_id == user_id).delete()
        rows = [
            PlannerBlock(
                user_id=user_id,
                day=block.day,
                start=block.start,
                end=block.end,
                label=block.label,
                source=BlockSource.ASSIGNMENT,
                source_id=block.item_id,
                position=position,
            )
            for position, block in enumerate(blocks)
        ]
        db.add_all(rows)
        db.commit()

        logger.info(f"Planned {len(blocks)} blocks for {len(items)} assignments of user {user_id} ({unplaced} units unplaced)")
        return {
            "blocks": rows,
            "week": group_blocks_by_day(rows),
            "summary": summary,
            "unplaced_units": unplaced,
        }

    def stored_blocks(self, db: Session, user_id: int) -> List[PlannerBlock]:
        return db.query(PlannerBlock).filter(PlannerBlock.user_id == user_id).order_by(PlannerBlock.position.asc(), PlannerBlock.id.asc()).all()

    def stored_week(self, db: Session, user_id: int) -> dict:
        blocks = self.stored_blocks(db, user_id)
        return {"blocks": blocks, "week": group_blocks_by_day(blocks)}

    def clear(self, db: Session, user_id: int) -> int:
        removed = db.query(PlannerBlock).filter(PlannerBlock.user_id == user_id).delete()
        db.commit()
        return removed

    def append_topic_plan(self, db: Session, user_id: int, plan: TopicPlan) -> List[PlannerBlock]:
        """Round-robin the plan's steps onto the week and add them after the stored blocks."""
        items = work_items_for_steps(plan.steps or [])
        blocks = RoundRobinScheduler().schedule(items, build_week_grid())

        last_position = db.query(func.max(PlannerBlock.position)).filter(PlannerBlock.user_id == user_id).scalar()
        start_position = 0 if last_position is None else last_position + 1
        rows = [
            PlannerBlock(
                user_id=user_id,
                day=block.day,
                start=block.start,
                end=block.end,
                label=block.label,
                source=BlockSource.TOPIC_PLAN,
                source_id=plan.id,
                position=start_position + offset,
            )
            for offset, block in enumerate(blocks)
        ]
        db.add_all(rows)
        db.commit()

        logger.info(f"Appended {len(rows)} topic-plan blocks for plan {plan.id} of user {user_id}")
        return rows


# Stateless; safe to share between requests
planner_service = PlannerService()
