"""
Topic plan generation.

Turns a free-text topic and an effort estimate into an outline, key
questions, research queries and a weighted step list. The step list is the
only part the scheduling core consumes.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models import Assignment, TopicPlan
from ..scheduling.algorithms.step_weighting import TopicType, classify_topic, normalize_total_hours, weight_steps

logger = logging.getLogger(__name__)

DEFAULT_EFFORT_HOURS = 2
DEFAULT_DUE_IN = timedelta(days=3)

OUTLINES = {
    TopicType.LAB: ["Title & Objective", "Background", "Materials/Setup", "Procedure", "Results", "Analysis", "Conclusion", "References"],
    TopicType.REPORT: ["Abstract", "Introduction", "Methodology", "Results", "Discussion", "Conclusion", "References"],
    TopicType.DESIGN: ["Problem Definition", "Requirements", "Concepts", "Selection & Justification", "Detailed Design", "Validation", "Conclusion"],
    TopicType.PRESENTATION: ["Title Slide", "Agenda", "Context", "Method/Approach", "Findings", "Implications", "Q&A"],
    TopicType.RESEARCH: ["Problem Statement", "Literature Review", "Method/Approach", "Experiments/Analysis", "Findings", "Conclusion", "Future Work"],
}


def build_key_questions(topic: str, topic_type: TopicType) -> List[str]:
    questions = [
        f"What is the goal and success criteria for {topic}?",
        f"What prior work or standards exist for {topic}?",
        f"What constraints, assumptions, and inputs affect {topic}?",
        f"What methods or models are most appropriate for {topic}?",
        f"How will results be validated and interpreted for {topic}?",
        f"What are risks, limitations, and future improvements for {topic}?",
    ]
    if topic_type == TopicType.DESIGN:
        questions.append(f"What trade-offs drive design choices for {topic}?")
    if topic_type == TopicType.LAB:
        questions.append(f"How to ensure repeatability and accuracy for {topic}?")
    return questions


def build_queries(topic: str) -> List[str]:
    return [
        f"{topic} methodology best practices",
        f"{topic} recent papers PDF",
        f"{topic} case study engineering",
        f"{topic} equations formulas standards",
        f"{topic} failure modes limitations",
        f"{topic} examples datasets",
    ]


def generate_plan(topic: str, effort_hours: float, due: datetime) -> dict:
    """Plan content for a topic, without touching the database."""
    topic_type = classify_topic(topic)
    steps = weight_steps(topic_type, effort_hours)
    return {
        "topic": topic,
        "topic_type": topic_type.value,
        "total_hours": normalize_total_hours(effort_hours),
        "due": due,
        "outline": list(OUTLINES[topic_type]),
        "key_questions": build_key_questions(topic, topic_type),
        "steps": [step.as_dict() for step in steps],
        "queries": build_queries(topic),
    }


def create_topic_plan(db: Session, user_id: int, topic: str, assignment: Optional[Assignment] = None) -> TopicPlan:
    """Generate and store a plan; effort and due date come from the assignment when given."""
    effort = DEFAULT_EFFORT_HOURS
    due = datetime.utcnow() + DEFAULT_DUE_IN
    if assignment is not None:
        effort = assignment.effort or DEFAULT_EFFORT_HOURS
        due = assignment.due

    content = generate_plan(topic, effort, due)
    plan = TopicPlan(user_id=user_id, assignment_id=assignment.id if assignment else None, **content)
    db.add(plan)
    db.commit()
    db.refresh(plan)

    logger.info(f"Generated {content['topic_type']} plan {plan.id} with {len(content['steps'])} steps for user {user_id}")
    return plan
