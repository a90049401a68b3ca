"""Learning goal generation for weak or under-observed pattern types."""

from datetime import datetime
from typing import Optional

from progression.models import AgentRecord
from shared_types import LearningPatternType, LearningStrategy, Priority
from timeutil import utcnow

from .models import LearningGoal, LearningPattern, Milestone

TARGET_EFFECTIVENESS = 0.7
MIN_OBSERVATIONS = 3
MAX_GOALS = 3

MILESTONES = (
    ("Initial assessment", 0.3),
    ("Basic competency", 0.5),
    ("Target mastery", 0.7),
)

DEFAULT_APPROACHES = (
    "Practice through conversation",
    "Observe successful patterns",
    "Reflect on outcomes",
)


def _priority(score: float) -> Priority:
    if score < 0.3:
        return Priority.HIGH
    if score < 0.5:
        return Priority.MEDIUM
    return Priority.LOW


def generate_learning_goals(
    agent: AgentRecord,
    patterns: list[LearningPattern],
    now: Optional[datetime] = None,
) -> list[LearningGoal]:
    """Propose up to three effectiveness goals.

    A type qualifies when its mean effectiveness is below 0.5 (unobserved
    types count as 0.5) or it has fewer than three observations.
    """
    now = now or utcnow()
    scores: dict[LearningPatternType, list[float]] = {t: [] for t in LearningPatternType}
    for p in patterns:
        scores[p.type].append(p.effectiveness)

    goals = []
    for pattern_type, values in scores.items():
        avg = sum(values) / len(values) if values else 0.5
        if avg >= 0.5 and len(values) >= MIN_OBSERVATIONS:
            continue

        goals.append(LearningGoal(
            agent_id=agent.id,
            title=f"Improve {pattern_type.label}",
            description=(
                f"Focus on developing better {pattern_type.label} capabilities "
                "through practice and observation."
            ),
            category=pattern_type,
            target_metric="effectiveness",
            current_value=avg,
            target_value=TARGET_EFFECTIVENESS,
            progress_percentage=avg / TARGET_EFFECTIVENESS * 100,
            milestones=[
                Milestone(
                    description=desc,
                    target_value=target,
                    achieved=avg >= target,
                    achieved_at=now if avg >= target else None,
                )
                for desc, target in MILESTONES
            ],
            strategy=LearningStrategy.EXPLORATION,
            approaches=list(DEFAULT_APPROACHES),
            priority=_priority(avg),
            created_at=now,
        ))

    return goals[:MAX_GOALS]
