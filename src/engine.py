"""Progression engine facade exposing every engine operation.

The engine is synchronous and does no I/O. Callers own persistence and
serialise read-modify-write per agent (see agents.pipeline).
"""

from datetime import date, datetime
from typing import Optional

import structlog

from lexicon import DEFAULT_LEXICON, Lexicon
from metalearning import events, goals, patterns, profile, skills
from metalearning.models import (
    ConversationMessage,
    LearningAdaptation,
    LearningEvent,
    LearningGoal,
    LearningPattern,
    LearningProfile,
    MetaLearningState,
    SkillProgression,
)
from planning import planner, trajectory
from planning.models import FuturePlan, GoalTrajectory, TimelineEvent
from progression import stats as stats_ops
from progression.achievements import AchievementService
from progression.models import (
    Achievement,
    AgentProgress,
    AgentRecord,
    AgentStats,
    AllocationResult,
    Interaction,
    LevelInfo,
    UnlockResult,
)
from shared_types import LearningEventType, LearningPatternType, PlanHorizon

logger = structlog.get_logger()

DEFAULT_CONVERSATION_WINDOW = 50


class ProgressionEngine:
    """Facade over the achievement, meta-learning and planning sub-engines."""

    def __init__(
        self,
        lexicon: Lexicon = DEFAULT_LEXICON,
        conversation_window: int = DEFAULT_CONVERSATION_WINDOW,
    ):
        self.lexicon = lexicon
        self.conversation_window = conversation_window
        self.achievements = AchievementService()

    # Achievements & leveling

    def check_achievements(self, agent: AgentRecord) -> list[Achievement]:
        return self.achievements.check_achievements(agent)

    def unlock_achievements(
        self, progress: AgentProgress, achievements: list[Achievement], agent_id: Optional[str] = None
    ) -> UnlockResult:
        return self.achievements.unlock_achievements(progress, achievements, agent_id=agent_id)

    def check_and_unlock(self, agent: AgentRecord) -> UnlockResult:
        """Check the catalog and apply any new unlocks in one step."""
        return self.unlock_achievements(agent.progress, self.check_achievements(agent), agent_id=agent.id)

    def allocate_skill_points(self, progress: AgentProgress, skill: str, points: int) -> AllocationResult:
        return self.achievements.allocate_skill_points(progress, skill, points)

    def get_level_info(self, progress: AgentProgress) -> LevelInfo:
        return self.achievements.get_level_info(progress)

    # Stats

    def update_stats_from_interaction(
        self, stats: Optional[AgentStats], interaction: Interaction, today: Optional[date] = None
    ) -> AgentStats:
        return stats_ops.update_stats_from_interaction(stats, interaction, today=today, lexicon=self.lexicon)

    def start_conversation(self, stats: Optional[AgentStats]) -> AgentStats:
        return stats_ops.start_conversation(stats)

    def update_longest_conversation(self, stats: Optional[AgentStats], message_count: int) -> AgentStats:
        return stats_ops.update_longest_conversation(stats, message_count)

    def record_relationship(self, stats: Optional[AgentStats]) -> AgentStats:
        return stats_ops.record_relationship(stats)

    def record_dream(self, stats: Optional[AgentStats]) -> AgentStats:
        return stats_ops.record_dream(stats)

    def record_creative_work(self, stats: Optional[AgentStats]) -> AgentStats:
        return stats_ops.record_creative_work(stats)

    def record_journal_entry(self, stats: Optional[AgentStats]) -> AgentStats:
        return stats_ops.record_journal_entry(stats)

    # Meta-learning

    def detect_patterns_from_conversation(
        self, messages: list[ConversationMessage], agent_id: str, now: Optional[datetime] = None
    ) -> list[LearningPattern]:
        """Detect patterns over the most recent ``conversation_window`` messages."""
        window = messages[-self.conversation_window:] if self.conversation_window > 0 else messages
        if len(window) < len(messages):
            logger.debug("conversation_window_applied", agent_id=agent_id, kept=len(window), total=len(messages))
        return patterns.detect_patterns_from_conversation(window, agent_id, now=now, lexicon=self.lexicon)

    def merge_patterns(
        self, existing: list[LearningPattern], observed: list[LearningPattern]
    ) -> tuple[list[LearningPattern], list[LearningPattern]]:
        return patterns.merge_patterns(existing, observed)

    def create_adaptation(
        self, agent_id: str, observed: list[LearningPattern], description: str
    ) -> LearningAdaptation:
        return patterns.create_adaptation(agent_id, observed, description)

    def create_learning_profile(
        self,
        agent: AgentRecord,
        learned: list[LearningPattern],
        adaptations: list[LearningAdaptation],
        learning_goals: Optional[list[LearningGoal]] = None,
        now: Optional[datetime] = None,
    ) -> LearningProfile:
        return profile.create_learning_profile(
            agent, learned, adaptations, learning_goals, now=now, lexicon=self.lexicon
        )

    def get_meta_learning_state(
        self,
        agent: AgentRecord,
        learned: list[LearningPattern],
        adaptations: list[LearningAdaptation],
        learning_goals: list[LearningGoal],
        now: Optional[datetime] = None,
    ) -> MetaLearningState:
        return profile.get_meta_learning_state(
            agent, learned, adaptations, learning_goals, now=now, lexicon=self.lexicon
        )

    def generate_learning_goals(self, agent: AgentRecord, learned: list[LearningPattern]) -> list[LearningGoal]:
        return goals.generate_learning_goals(agent, learned)

    def update_skill_progression(
        self, existing: Optional[SkillProgression], learned: list[LearningPattern], category: LearningPatternType
    ) -> SkillProgression:
        return skills.update_skill_progression(existing, learned, category)

    def create_learning_event(
        self,
        agent_id: str,
        event_type: LearningEventType,
        description: str,
        learned: list[LearningPattern],
        emotional_context: str = "neutral",
    ) -> LearningEvent:
        return events.create_learning_event(agent_id, event_type, description, learned, emotional_context)

    # Planning

    def analyze_goal_trajectory(self, goal: LearningGoal, now: Optional[datetime] = None) -> GoalTrajectory:
        return trajectory.analyze_goal_trajectory(goal, now)

    def generate_future_plan(
        self,
        agent: AgentRecord,
        learning_goals: list[LearningGoal],
        recent_events: Optional[list[TimelineEvent]] = None,
        horizon: PlanHorizon = PlanHorizon.SHORT_TERM,
        now: Optional[datetime] = None,
    ) -> FuturePlan:
        return planner.generate_future_plan(agent, learning_goals, recent_events or [], horizon, now)
