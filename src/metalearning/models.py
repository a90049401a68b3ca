"""Pydantic records for meta-learning: patterns, adaptations, goals, profile."""

import uuid
from typing import Optional

from pydantic import BaseModel, Field

from shared_types import (
    AdaptationType,
    GoalStatus,
    LearningEventType,
    LearningPatternType,
    LearningStrategy,
    MessageRole,
    PatternOutcome,
    Priority,
    RecommendationType,
)
from timeutil import UTCDateTime, utcnow


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class ConversationMessage(BaseModel):
    content: str = ""
    role: MessageRole = MessageRole.USER
    timestamp: UTCDateTime = Field(default_factory=utcnow)


class PatternExample(BaseModel):
    input: str = ""
    output: str = ""
    timestamp: UTCDateTime = Field(default_factory=utcnow)
    success: bool = False


class LearningPattern(BaseModel):
    id: str = Field(default_factory=lambda: new_id("pattern"))
    agent_id: str = ""
    type: LearningPatternType
    pattern: str = ""
    trigger: str = ""
    outcome: PatternOutcome = PatternOutcome.NEUTRAL
    frequency: float = Field(default=0.0, ge=0, le=1)
    effectiveness: float = Field(default=0.5, ge=0, le=1)
    confidence: float = Field(default=0.0, ge=0, le=1)
    contexts: list[str] = Field(default_factory=list)
    related_patterns: list[str] = Field(default_factory=list)
    examples: list[PatternExample] = Field(default_factory=list)
    first_observed: UTCDateTime = Field(default_factory=utcnow)
    last_observed: UTCDateTime = Field(default_factory=utcnow)
    observation_count: int = Field(default=1, ge=1)


class LearningAdaptation(BaseModel):
    id: str = Field(default_factory=lambda: new_id("adapt"))
    agent_id: str = ""
    adaptation_type: AdaptationType = AdaptationType.BEHAVIOR
    description: str = ""
    previous_state: str = "Default behavior"
    current_state: str = ""
    triggering_patterns: list[str] = Field(default_factory=list)
    triggering_events: list[str] = Field(default_factory=list)
    impact_score: float = 0.0
    affected_areas: list[LearningPatternType] = Field(default_factory=list)
    is_active: bool = True
    can_revert: bool = True
    timestamp: UTCDateTime = Field(default_factory=utcnow)


class Milestone(BaseModel):
    description: str
    target_value: float
    achieved: bool = False
    achieved_at: Optional[UTCDateTime] = None


class LearningGoal(BaseModel):
    id: str = Field(default_factory=lambda: new_id("goal"))
    agent_id: str = ""
    title: str
    description: str = ""
    category: LearningPatternType = LearningPatternType.TOPIC_INTEREST
    target_metric: str = "effectiveness"
    current_value: float = 0.0
    target_value: float = 0.7
    progress_percentage: float = Field(default=0.0, ge=0)
    milestones: list[Milestone] = Field(default_factory=list)
    strategy: LearningStrategy = LearningStrategy.EXPLORATION
    approaches: list[str] = Field(default_factory=list)
    status: GoalStatus = GoalStatus.ACTIVE
    priority: Priority = Priority.MEDIUM
    created_at: UTCDateTime = Field(default_factory=utcnow)
    target_date: Optional[UTCDateTime] = None
    achieved_at: Optional[UTCDateTime] = None


class LearningCapabilities(BaseModel):
    speed_of_learning: float = 0.0
    retention_rate: float = 0.0
    transferability: float = 0.0
    adaptability: float = 0.0
    creativity: float = 0.5


class LearningPreferences(BaseModel):
    preferred_strategy: LearningStrategy = LearningStrategy.EXPLORATION
    best_learning_contexts: list[str] = Field(default_factory=list)
    optimal_session_duration: int = 15
    preferred_feedback_style: str = "immediate"


class LearningProfile(BaseModel):
    agent_id: str = ""
    capabilities: LearningCapabilities = Field(default_factory=LearningCapabilities)
    preferences: LearningPreferences = Field(default_factory=LearningPreferences)
    strengths: list[LearningPatternType] = Field(default_factory=list)
    weaknesses: list[LearningPatternType] = Field(default_factory=list)
    active_focus_areas: list[LearningPatternType] = Field(default_factory=list)
    total_learning_hours: float = 0.0
    patterns_discovered: int = 0
    adaptations_made: int = 0
    goals_achieved: int = 0
    last_updated: UTCDateTime = Field(default_factory=utcnow)


class LearningRecommendation(BaseModel):
    type: RecommendationType
    title: str
    description: str
    priority: Priority
    related_pattern_ids: list[str] = Field(default_factory=list)


class LearningStats(BaseModel):
    total_patterns: int = 0
    positive_patterns: int = 0
    negative_patterns: int = 0
    adaptations_this_week: int = 0
    learning_streak: int = 1
    most_improved_area: Optional[LearningPatternType] = None
    needs_attention_area: Optional[LearningPatternType] = None


class MetaLearningState(BaseModel):
    agent_id: str
    profile: LearningProfile
    active_patterns: list[LearningPattern] = Field(default_factory=list)
    active_goals: list[LearningGoal] = Field(default_factory=list)
    recent_adaptations: list[LearningAdaptation] = Field(default_factory=list)
    stats: LearningStats = Field(default_factory=LearningStats)
    recommendations: list[LearningRecommendation] = Field(default_factory=list)
    last_updated: UTCDateTime = Field(default_factory=utcnow)


class LevelHistoryEntry(BaseModel):
    level: int
    achieved_at: UTCDateTime = Field(default_factory=utcnow)
    triggering_event: Optional[str] = None


class SkillProgression(BaseModel):
    skill_name: str
    category: LearningPatternType
    current_level: int = Field(default=1, ge=1, le=10)
    experience_points: float = 0.0
    points_to_next_level: int = 100
    level_history: list[LevelHistoryEntry] = Field(default_factory=list)
    practice_time: int = 0  # minutes
    last_practiced: UTCDateTime = Field(default_factory=utcnow)
    consistency_score: float = Field(default=0.5, ge=0, le=1)


class LearningEvent(BaseModel):
    id: str = Field(default_factory=lambda: new_id("event"))
    agent_id: str
    event_type: LearningEventType
    description: str = ""
    lessons_learned: list[str] = Field(default_factory=list)
    patterns_reinforced: list[str] = Field(default_factory=list)
    new_patterns_discovered: list[str] = Field(default_factory=list)
    emotional_context: str = "neutral"
    learning_value: float = 0.0
    timestamp: UTCDateTime = Field(default_factory=utcnow)
