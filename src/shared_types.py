"""Shared enums and types for the progression engine."""

from enum import StrEnum


class AchievementCategory(StrEnum):
    CONVERSATIONAL = "conversational"
    KNOWLEDGE = "knowledge"
    PERSONALITY = "personality"
    RELATIONSHIP = "relationship"
    SPECIAL = "special"


class AchievementRarity(StrEnum):
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class RequirementType(StrEnum):
    COUNT = "count"
    THRESHOLD = "threshold"
    COMBINATION = "combination"


class ThresholdCondition(StrEnum):
    GREATER = "greater"
    LESS = "less"
    EQUAL = "equal"


class LearningPatternType(StrEnum):
    TOPIC_INTEREST = "topic_interest"
    COMMUNICATION_STYLE = "communication_style"
    EMOTIONAL_RESPONSE = "emotional_response"
    PROBLEM_SOLVING = "problem_solving"
    MEMORY_RETENTION = "memory_retention"
    RELATIONSHIP_BUILDING = "relationship_building"

    @property
    def label(self) -> str:
        """Human-readable name, e.g. 'topic interest'."""
        return self.value.replace("_", " ")


class LearningStrategy(StrEnum):
    EXPLORATION = "exploration"
    EXPLOITATION = "exploitation"
    IMITATION = "imitation"
    EXPERIMENTATION = "experimentation"
    REFLECTION = "reflection"


class PatternOutcome(StrEnum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class AdaptationType(StrEnum):
    BEHAVIOR = "behavior"
    KNOWLEDGE = "knowledge"
    STYLE = "style"
    PREFERENCE = "preference"


class GoalStatus(StrEnum):
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class Priority(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TrajectoryStatus(StrEnum):
    ON_TRACK = "on_track"
    AT_RISK = "at_risk"
    BEHIND = "behind"
    AHEAD = "ahead"
    BLOCKED = "blocked"


class PlanHorizon(StrEnum):
    IMMEDIATE = "immediate"
    SHORT_TERM = "short_term"
    MEDIUM_TERM = "medium_term"
    LONG_TERM = "long_term"


class PredictionConfidence(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    SPECULATIVE = "speculative"


class PredictionType(StrEnum):
    EMOTIONAL = "emotional"
    BEHAVIORAL = "behavioral"
    RELATIONAL = "relational"
    SKILL = "skill"
    MILESTONE = "milestone"


class Impact(StrEnum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class InsightType(StrEnum):
    OPPORTUNITY = "opportunity"
    WARNING = "warning"
    MILESTONE = "milestone"
    TREND = "trend"


class ActivityType(StrEnum):
    LEARNING = "learning"
    CREATIVE = "creative"
    SOCIAL = "social"
    REFLECTION = "reflection"
    CHALLENGE = "challenge"


class RecommendationType(StrEnum):
    FOCUS_AREA = "focus_area"
    GOAL = "goal"
    STRATEGY = "strategy"
    ADAPTATION = "adaptation"


class LearningEventType(StrEnum):
    CONVERSATION = "conversation"
    FEEDBACK = "feedback"
    OBSERVATION = "observation"
    REFLECTION = "reflection"
    CHALLENGE = "challenge"


class MessageRole(StrEnum):
    USER = "user"
    AGENT = "agent"


class Outlook(StrEnum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    CONCERNING = "concerning"
