"""Pydantic records for trajectories, predictions and future plans."""

import uuid
from typing import Any, Optional

from pydantic import BaseModel, Field

from shared_types import (
    ActivityType,
    Impact,
    InsightType,
    Outlook,
    PlanHorizon,
    PredictionConfidence,
    PredictionType,
    Priority,
    TrajectoryStatus,
)
from timeutil import UTCDateTime, utcnow


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class TimelineEventMetadata(BaseModel):
    emotional_state: Optional[dict[str, Any]] = None
    topics: list[str] = Field(default_factory=list)

    @property
    def dominant_emotion(self) -> Optional[str]:
        if not self.emotional_state:
            return None
        return self.emotional_state.get("dominant_emotion")


class TimelineEvent(BaseModel):
    id: str = Field(default_factory=lambda: new_id("event"))
    type: str = ""
    title: str = ""
    timestamp: UTCDateTime = Field(default_factory=utcnow)
    importance: float = 0.5
    metadata: TimelineEventMetadata = Field(default_factory=TimelineEventMetadata)


class MilestoneProjection(BaseModel):
    description: str
    projected_date: UTCDateTime
    importance: float = 0.7


class RiskFactor(BaseModel):
    factor: str
    severity: Priority
    mitigation: Optional[str] = None


class GoalTrajectory(BaseModel):
    goal_id: str
    goal_title: str
    current_progress: float
    status: TrajectoryStatus
    projected_completion_date: UTCDateTime
    original_target_date: Optional[UTCDateTime] = None
    days_ahead: int = 0  # positive = ahead of schedule
    progress_velocity: float
    required_velocity: float
    upcoming_milestones: list[MilestoneProjection] = Field(default_factory=list)
    risk_factors: list[RiskFactor] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class PredictionOutcome(BaseModel):
    description: str
    probability: float
    impact: Impact


class FuturePrediction(BaseModel):
    id: str = Field(default_factory=lambda: new_id("pred"))
    agent_id: str
    type: PredictionType
    title: str
    description: str = ""
    predicted_date: UTCDateTime
    timeframe: PlanHorizon
    confidence: PredictionConfidence
    confidence_score: float
    based_on: list[str] = Field(default_factory=list)
    assumptions: list[str] = Field(default_factory=list)
    outcomes: list[PredictionOutcome] = Field(default_factory=list)
    is_active: bool = True
    created_at: UTCDateTime = Field(default_factory=utcnow)

    @property
    def leading_impact(self) -> Optional[Impact]:
        return self.outcomes[0].impact if self.outcomes else None


class ScheduledActivity(BaseModel):
    id: str = Field(default_factory=lambda: new_id("act"))
    agent_id: str
    title: str
    description: str = ""
    type: ActivityType
    scheduled_for: UTCDateTime
    duration: int  # minutes
    is_recurring: bool = False
    recurrence_pattern: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    is_optional: bool = False
    prerequisites: list[str] = Field(default_factory=list)
    blocked_by: list[str] = Field(default_factory=list)
    status: str = "scheduled"
    created_at: UTCDateTime = Field(default_factory=utcnow)


class SuggestedGoal(BaseModel):
    title: str
    description: str
    rationale: str
    suggested_priority: Priority = Priority.MEDIUM


class PlanInsight(BaseModel):
    type: InsightType
    title: str
    description: str
    actionable: bool
    suggested_action: Optional[str] = None


class PlanSummary(BaseModel):
    overall_outlook: Outlook
    key_focus_areas: list[str] = Field(default_factory=list)
    biggest_opportunity: str
    biggest_risk: str


class FuturePlan(BaseModel):
    agent_id: str
    plan_horizon: PlanHorizon
    generated_at: UTCDateTime
    valid_until: UTCDateTime
    active_goals: list[GoalTrajectory] = Field(default_factory=list)
    suggested_goals: list[SuggestedGoal] = Field(default_factory=list)
    predictions: list[FuturePrediction] = Field(default_factory=list)
    upcoming_activities: list[ScheduledActivity] = Field(default_factory=list)
    insights: list[PlanInsight] = Field(default_factory=list)
    summary: PlanSummary
