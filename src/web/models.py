"""Pydantic request/response schemas for the web API."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from metalearning.models import LearningAdaptation, LearningGoal, LearningPattern, MetaLearningState
from progression.models import AgentRecord, LevelInfo, LockedAchievementView, UnlockedAchievementView
from shared_types import LearningPatternType, MessageRole, Priority

# --- Agents ---


class AgentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    id: Optional[str] = Field(None, min_length=1, max_length=64)
    dynamic_traits: dict[str, float] = Field(default_factory=dict)


class AgentDetail(BaseModel):
    agent: AgentRecord
    level: LevelInfo
    stats_summary: dict[str, int | str]


class MessageCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=10_000)
    role: MessageRole = MessageRole.USER
    emotions_detected: int = Field(default=0, ge=0)


class MessageResponse(BaseModel):
    unlocked: list[str]
    xp_gained: int
    leveled_up: bool
    level: int
    experience_points: int


class ActivityCreate(BaseModel):
    kind: str


# --- Achievements / skills ---


class AchievementsResponse(BaseModel):
    level: LevelInfo
    unlocked: list[UnlockedAchievementView]
    locked: list[LockedAchievementView]


class SkillAllocate(BaseModel):
    skill: str = Field(..., min_length=1, max_length=100)
    points: int


# --- Learning ---


class AnalyzeResponse(BaseModel):
    patterns: list[LearningPattern]
    learning_value: float = 0.0


class AdaptationCreate(BaseModel):
    description: str = Field(..., min_length=1, max_length=1000)
    pattern_ids: list[str] = Field(default_factory=list)


class LearningResponse(BaseModel):
    state: MetaLearningState
    adaptations: list[LearningAdaptation]


# --- Goals ---


class GoalCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    category: LearningPatternType = LearningPatternType.TOPIC_INTEREST
    priority: Priority = Priority.MEDIUM
    progress_percentage: float = Field(default=0.0, ge=0, le=100)
    target_date: Optional[datetime] = None


class GoalProgressUpdate(BaseModel):
    progress_percentage: float = Field(..., ge=0, le=100)


class GoalsResponse(BaseModel):
    goals: list[LearningGoal]


# --- Timeline ---


class TimelineEventCreate(BaseModel):
    type: str = Field(..., min_length=1, max_length=50)
    title: str = ""
    importance: float = Field(default=0.5, ge=0, le=1)
    dominant_emotion: Optional[str] = Field(None, max_length=50)
    topics: list[str] = Field(default_factory=list)
