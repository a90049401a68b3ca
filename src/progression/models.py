"""Pydantic records for agent statistics, progress and achievements."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shared_types import (
    AchievementCategory,
    AchievementRarity,
    RequirementType,
    ThresholdCondition,
)
from timeutil import UTCDateTime, utcnow, utctoday


class AgentStats(BaseModel):
    """Cumulative interaction counters. Only the stats accumulator mutates these."""

    conversation_count: int = 0
    total_messages: int = 0
    unique_topics: list[str] = Field(default_factory=list)
    unique_words: int = 0  # vocabulary estimate, see stats.estimate_new_words
    questions_asked: int = 0
    emotion_recognitions: int = 0
    relationships_formed: int = 0
    dreams_generated: int = 0
    creative_works_created: int = 0
    journal_entries: int = 0
    science_topics: int = 0
    art_topics: int = 0
    philosophy_topics: int = 0
    helpful_responses: int = 0
    longest_conversation: int = 0
    consecutive_days: int = 0
    last_active_date: Optional[date] = Field(default_factory=utctoday)

    @field_validator("last_active_date", mode="before")
    @classmethod
    def lenient_date(cls, v):
        # Unparseable dates are kept as None and treated as a broken streak.
        if v is None or isinstance(v, date):
            return v
        try:
            return date.fromisoformat(str(v)[:10])
        except ValueError:
            return None


class UnlockedAchievement(BaseModel):
    unlocked_at: UTCDateTime = Field(default_factory=utcnow)


class AgentProgress(BaseModel):
    level: int = Field(default=1, ge=1)
    experience_points: int = Field(default=0, ge=0)
    next_level_xp: int = 400
    achievements: dict[str, UnlockedAchievement] = Field(default_factory=dict)
    skill_points: int = Field(default=0, ge=0)
    allocated_skills: dict[str, int] = Field(default_factory=dict)


class AchievementRequirement(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: RequirementType
    metric: str
    target: int
    condition: Optional[ThresholdCondition] = None


class Achievement(BaseModel):
    """Immutable catalog entry."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    category: AchievementCategory
    icon: str = ""
    rarity: AchievementRarity
    requirement: AchievementRequirement
    reward_xp: int


class Interaction(BaseModel):
    """One message-level event folded into AgentStats."""

    message_content: str = ""
    is_user_message: bool = True
    topics: list[str] = Field(default_factory=list)
    is_question: bool = False
    is_helpful: bool = False
    emotions_detected: int = 0


class EmotionalState(BaseModel):
    current_mood: dict[str, float] = Field(default_factory=dict)
    emotional_baseline: dict[str, float] = Field(default_factory=dict)
    dominant_emotion: str = "trust"
    last_updated: UTCDateTime = Field(default_factory=utcnow)


class AgentRecord(BaseModel):
    """Full agent document as read from storage."""

    id: str
    name: str = ""
    stats: AgentStats = Field(default_factory=AgentStats)
    progress: AgentProgress = Field(default_factory=AgentProgress)
    dynamic_traits: dict[str, float] = Field(default_factory=dict)
    emotional_state: Optional[EmotionalState] = None
    version: int = 0


class UnlockResult(BaseModel):
    progress: AgentProgress
    leveled_up: bool
    old_level: int
    new_level: int
    total_xp_gained: int
    unlocked: list[str] = Field(default_factory=list)


class AllocationResult(BaseModel):
    progress: AgentProgress
    success: bool
    message: str


class LevelInfo(BaseModel):
    level: int
    xp: int
    next_level_xp: int
    progress_percent: int
    skill_points: int
    is_max_level: bool


class UnlockedAchievementView(Achievement):
    unlocked_at: UTCDateTime


class LockedAchievementView(Achievement):
    progress: int = 0
