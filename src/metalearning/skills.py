"""Per-category skill progression driven by observed patterns."""

from datetime import datetime
from typing import Optional

from shared_types import LearningPatternType, PatternOutcome
from timeutil import utcnow

from .models import LearningPattern, LevelHistoryEntry, SkillProgression

MAX_SKILL_LEVEL = 10
XP_PER_LEVEL = 100
NEUTRAL_XP = 3
MINUTES_PER_PATTERN = 5


def update_skill_progression(
    existing: Optional[SkillProgression],
    patterns: list[LearningPattern],
    category: LearningPatternType,
    now: Optional[datetime] = None,
) -> SkillProgression:
    """Award XP for patterns in ``category`` and roll over levels.

    The level cost is fixed at the starting level for the whole batch, so a
    large batch can climb several levels at the same price.
    """
    now = now or utcnow()
    relevant = [p for p in patterns if p.type == category]

    gained = 0.0
    for p in relevant:
        if p.outcome == PatternOutcome.POSITIVE:
            gained += 10 * p.effectiveness
        elif p.outcome == PatternOutcome.NEUTRAL:
            gained += NEUTRAL_XP

    base = existing or SkillProgression(
        skill_name=category.label.title(),
        category=category,
        level_history=[LevelHistoryEntry(level=1, achieved_at=now)],
        last_practiced=now,
    )

    cost = base.current_level * XP_PER_LEVEL
    level = base.current_level
    remaining = base.experience_points + gained
    history = list(base.level_history)
    while remaining >= cost and level < MAX_SKILL_LEVEL:
        remaining -= cost
        level += 1
        history.append(LevelHistoryEntry(
            level=level,
            achieved_at=now,
            triggering_event=f"Reached level {level} in {category}",
        ))

    return base.model_copy(update={
        "current_level": level,
        "experience_points": remaining,
        "points_to_next_level": level * XP_PER_LEVEL,
        "level_history": history,
        "practice_time": base.practice_time + len(relevant) * MINUTES_PER_PATTERN,
        "last_practiced": now,
        "consistency_score": min(base.consistency_score + 0.05, 1.0),
    })
