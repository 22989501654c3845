"""
Step weighting: split a target number of hours across a fixed set of work
phases in proportion to their weights.

Each topic type has its own template. Durations are rounded half-up to one
decimal and never drop below half an hour, so the rounded durations do not
necessarily add back up to the target.
"""

import enum
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Sequence, Tuple

MIN_STEP_HOURS = 0.5

# Every float at or above 2**52 is a whole number
INTEGRAL_FLOAT = 2.0 ** 52


class TopicType(str, enum.Enum):
    LAB = "lab"
    REPORT = "report"
    DESIGN = "design"
    PRESENTATION = "presentation"
    RESEARCH = "research"


# Checked in this order; the first keyword found in the topic wins
_KEYWORD_ORDER = [TopicType.LAB, TopicType.REPORT, TopicType.DESIGN, TopicType.PRESENTATION]


@dataclass(frozen=True)
class Step:
    text: str
    duration: float

    def as_dict(self) -> dict:
        return {"text": self.text, "duration": self.duration}


def classify_topic(topic: str) -> TopicType:
    """Classify free text by substring keyword match, defaulting to research."""
    lowered = (topic or "").lower()
    for topic_type in _KEYWORD_ORDER:
        if topic_type.value in lowered:
            return topic_type
    return TopicType.RESEARCH


def _template(topic_type: TopicType) -> List[Tuple[str, int]]:
    approach = "Develop and compare concepts" if topic_type == TopicType.DESIGN else "Develop methodology/approach"
    main_work = "Run experiments and collect data" if topic_type == TopicType.LAB else "Draft main content"
    return [
        ("Clarify assignment requirements", 1),
        ("Gather references and sources", 2),
        ("Outline structure and sections", 1),
        (approach, 2),
        (main_work, 3),
        ("Analyze results and refine", 2),
        ("Write-up and formatting", 2),
        ("Review, revise, and finalize", 1),
    ]


STEP_TEMPLATES: Dict[TopicType, List[Tuple[str, int]]] = {topic_type: _template(topic_type) for topic_type in TopicType}


def round_half_up(value: float, places: int = 0) -> float:
    """Round like a calculator does: halves go up, not to even."""
    if not math.isfinite(value) or abs(value) >= INTEGRAL_FLOAT:
        # Non-finite, or already a whole number
        return value
    if places == 0:
        return float(math.floor(value + 0.5))
    exponent = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP))


def finite_hours(hours, default: float) -> float:
    """Missing, zero or non-finite hours fall back to `default`."""
    if not hours or not math.isfinite(hours):
        return default
    return hours


def normalize_total_hours(effort_hours: float) -> int:
    return max(1, int(round_half_up(finite_hours(effort_hours, 0))))


def distribute_hours(weighted_steps: Sequence[Tuple[str, int]], total_hours: float) -> List[Step]:
    """Spread `total_hours` over the steps by weight, keeping their order."""
    total_weight = sum(weight for _, weight in weighted_steps)
    if total_weight <= 0:
        return [Step(text, MIN_STEP_HOURS) for text, _ in weighted_steps]

    steps = []
    for text, weight in weighted_steps:
        share = round_half_up(weight / total_weight * total_hours, 1)
        steps.append(Step(text, max(MIN_STEP_HOURS, share)))
    return steps


def weight_steps(topic_type: TopicType, effort_hours: float) -> List[Step]:
    """Ordered step list for a topic type and a target effort in hours."""
    return distribute_hours(STEP_TEMPLATES[topic_type], normalize_total_hours(effort_hours))


def step_units(step: Step) -> int:
    """Half-hour units a step occupies on the grid."""
    return math.ceil(step.duration * 2)
