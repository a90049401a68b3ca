"""Learning events summarising what a batch of patterns taught the agent."""

from datetime import datetime
from typing import Optional

from shared_types import LearningEventType, PatternOutcome
from timeutil import utcnow

from .models import LearningEvent, LearningPattern

MAX_LESSONS = 5


def create_learning_event(
    agent_id: str,
    event_type: LearningEventType,
    description: str,
    patterns: list[LearningPattern],
    emotional_context: str = "neutral",
    now: Optional[datetime] = None,
) -> LearningEvent:
    lessons = []
    for p in patterns:
        if p.outcome == PatternOutcome.POSITIVE:
            lessons.append(f"{p.type.label} works well in this context")
        elif p.outcome == PatternOutcome.NEGATIVE:
            lessons.append(f"Need to improve {p.type.label} approach")

    new = [p for p in patterns if p.observation_count == 1]
    reinforced = [p for p in patterns if p.observation_count > 1]
    positive = sum(1 for p in patterns if p.outcome == PatternOutcome.POSITIVE)
    value = min((len(new) * 0.3 + len(reinforced) * 0.1 + positive * 0.2) / 2, 1.0)

    return LearningEvent(
        agent_id=agent_id,
        event_type=event_type,
        description=description,
        lessons_learned=lessons[:MAX_LESSONS],
        patterns_reinforced=[p.id for p in reinforced],
        new_patterns_discovered=[p.id for p in new],
        emotional_context=emotional_context,
        learning_value=value,
        timestamp=now or utcnow(),
    )
