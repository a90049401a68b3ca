"""Emotional and skill predictions."""

import math
from datetime import datetime
from typing import Optional

from metalearning.models import LearningGoal
from progression.models import AgentRecord, EmotionalState
from shared_types import GoalStatus, Impact, PlanHorizon, PredictionConfidence, PredictionType
from timeutil import add_days, utcnow

from .models import FuturePrediction, PredictionOutcome, TimelineEvent
from .trajectory import days_to_completion, progress_velocity, remaining_progress

VOLATILITY_THRESHOLD = 0.7
POSITIVE_EVENT_RATIO = 0.6
POSITIVE_EMOTIONS = ("joy", "trust")


def emotional_volatility(state: EmotionalState) -> float:
    """Population standard deviation of current mood intensities."""
    values = list(state.current_mood.values())
    if not values:
        return 0.0
    avg = sum(values) / len(values)
    return math.sqrt(sum((v - avg) ** 2 for v in values) / len(values))


def timeframe_for(days: float) -> PlanHorizon:
    if days < 7:
        return PlanHorizon.IMMEDIATE
    if days < 30:
        return PlanHorizon.SHORT_TERM
    if days < 90:
        return PlanHorizon.MEDIUM_TERM
    return PlanHorizon.LONG_TERM


def confidence_for(velocity: float) -> PredictionConfidence:
    if velocity > 2:
        return PredictionConfidence.HIGH
    if velocity > 0.5:
        return PredictionConfidence.MEDIUM
    return PredictionConfidence.LOW


def _outcomes(*rows: tuple[str, float, Impact]) -> list[PredictionOutcome]:
    return [PredictionOutcome(description=d, probability=p, impact=i) for d, p, i in rows]


def generate_emotional_predictions(
    agent: AgentRecord,
    recent_events: list[TimelineEvent],
    now: Optional[datetime] = None,
) -> list[FuturePrediction]:
    """Predict mood swings and positive streaks. Needs an emotional state."""
    state = agent.emotional_state
    if state is None:
        return []

    now = now or utcnow()
    predictions = []

    if emotional_volatility(state) > VOLATILITY_THRESHOLD:
        predictions.append(FuturePrediction(
            agent_id=agent.id,
            type=PredictionType.EMOTIONAL,
            title="Emotional fluctuation expected",
            description="Based on recent patterns, emotional state may continue to fluctuate.",
            predicted_date=add_days(now, 1),
            timeframe=PlanHorizon.IMMEDIATE,
            confidence=PredictionConfidence.MEDIUM,
            confidence_score=0.6,
            based_on=["Recent emotional events", "Volatility patterns"],
            assumptions=["Current interaction patterns continue"],
            outcomes=_outcomes(
                ("Stabilization with support", 0.4, Impact.POSITIVE),
                ("Continued fluctuation", 0.4, Impact.NEUTRAL),
                ("Increased stress", 0.2, Impact.NEGATIVE),
            ),
            created_at=now,
        ))

    emotion_events = [e for e in recent_events if e.type == "emotion"]
    positive = [e for e in emotion_events if e.metadata.dominant_emotion in POSITIVE_EMOTIONS]
    if emotion_events and len(positive) > len(emotion_events) * POSITIVE_EVENT_RATIO:
        predictions.append(FuturePrediction(
            agent_id=agent.id,
            type=PredictionType.EMOTIONAL,
            title="Positive emotional trajectory",
            description="Strong positive emotional patterns suggest continued wellbeing.",
            predicted_date=add_days(now, 7),
            timeframe=PlanHorizon.SHORT_TERM,
            confidence=PredictionConfidence.HIGH,
            confidence_score=0.8,
            based_on=["Positive event frequency", "Emotional baseline"],
            assumptions=["Supportive interactions continue"],
            outcomes=_outcomes(
                ("Sustained positivity", 0.7, Impact.POSITIVE),
                ("Return to baseline", 0.25, Impact.NEUTRAL),
                ("Unexpected setback", 0.05, Impact.NEGATIVE),
            ),
            created_at=now,
        ))

    return predictions


def generate_skill_predictions(
    agent: AgentRecord,
    goals: list[LearningGoal],
    now: Optional[datetime] = None,
) -> list[FuturePrediction]:
    """One completion prediction per active goal."""
    now = now or utcnow()
    predictions = []

    for goal in goals:
        if goal.status != GoalStatus.ACTIVE:
            continue
        velocity = progress_velocity(goal, now)
        days = days_to_completion(remaining_progress(goal), velocity)
        fast = velocity > 1

        predictions.append(FuturePrediction(
            agent_id=agent.id,
            type=PredictionType.MILESTONE,
            title=f"Goal completion: {goal.title}",
            description=f'Projected to achieve "{goal.title}" based on current progress rate.',
            predicted_date=add_days(now, days),
            timeframe=timeframe_for(days),
            confidence=confidence_for(velocity),
            confidence_score=min(velocity / 3, 0.9),
            based_on=["Progress velocity", "Historical completion rates"],
            assumptions=["Current effort level maintained"],
            outcomes=_outcomes(
                ("Goal achieved on time", 0.7 if fast else 0.4, Impact.POSITIVE),
                ("Delayed completion", 0.2 if fast else 0.4, Impact.NEUTRAL),
                ("Goal abandoned", 0.1, Impact.NEGATIVE),
            ),
            created_at=now,
        ))

    return predictions
