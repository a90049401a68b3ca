"""Read-compute-write orchestration around the progression engine.

Every mutation of an agent document goes through ``_mutate``: it holds a
per-agent lock, reads the current record, applies a pure engine step and
writes back conditionally on the version read, retrying on conflicts with
writers in other processes.
"""

import re
import threading
from collections import defaultdict
from datetime import date
from typing import Callable, Optional

import structlog
from pydantic import BaseModel, Field

from engine import ProgressionEngine
from metalearning.models import (
    ConversationMessage,
    LearningAdaptation,
    LearningEvent,
    LearningGoal,
    LearningPattern,
    SkillProgression,
)
from progression.models import AgentRecord, AllocationResult, Interaction
from progression.stats import RECORDERS
from shared_types import LearningEventType, LearningPatternType, MessageRole

from .store import AgentStore, StaleRecordError

logger = structlog.get_logger()

MAX_TOPICS = 6
MIN_TOPIC_LENGTH = 4
HELPFUL_MIN_CHARS = 40
_NON_ALNUM = re.compile(r"[^a-z0-9\s]")


class ProgressUpdate(BaseModel):
    """Outcome of a mutation that may unlock achievements."""

    agent: AgentRecord
    unlocked: list[str] = Field(default_factory=list)
    xp_gained: int = 0
    leveled_up: bool = False


class AnalysisResult(BaseModel):
    patterns: list[LearningPattern] = Field(default_factory=list)
    event: Optional[LearningEvent] = None


class AgentPipeline:
    """Applies engine operations to stored agents."""

    def __init__(self, store: AgentStore, engine: Optional[ProgressionEngine] = None, max_write_retries: int = 3):
        self.store = store
        self.engine = engine or ProgressionEngine()
        self.max_write_retries = max(1, max_write_retries)
        self._locks: dict[str, threading.Lock] = defaultdict(threading.Lock)
        self._locks_guard = threading.Lock()

    def _lock_for(self, agent_id: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks[agent_id]

    def _mutate(self, agent_id: str, step: Callable[[AgentRecord], AgentRecord]) -> AgentRecord:
        attempt = 0
        with self._lock_for(agent_id):
            while True:
                attempt += 1
                updated = step(self.store.get_agent(agent_id))
                try:
                    return self.store.save_agent(updated)
                except StaleRecordError:
                    logger.warning("agent_write_conflict", agent_id=agent_id, attempt=attempt)
                    if attempt >= self.max_write_retries:
                        raise

    # Text features

    def extract_topics(self, text: str) -> list[str]:
        words = _NON_ALNUM.sub(" ", text.lower()).split()
        topics: list[str] = []
        for word in words:
            if len(word) < MIN_TOPIC_LENGTH or word in self.engine.lexicon.stop_words:
                continue
            if word not in topics:
                topics.append(word)
            if len(topics) >= MAX_TOPICS:
                break
        return topics

    def is_question(self, text: str) -> bool:
        if "?" in text:
            return True
        words = text.strip().split()
        return bool(words) and words[0].lower() in self.engine.lexicon.question_prefixes

    # Operations

    def process_message(
        self,
        agent_id: str,
        content: str,
        role: MessageRole = MessageRole.USER,
        emotions_detected: int = 0,
        today: Optional[date] = None,
    ) -> ProgressUpdate:
        """Store a chat message and fold it into the agent's progression.

        The first user message of a day starts a new conversation. Longest
        conversation tracks the number of messages stored for the agent today.
        The message is stored only once the progression write succeeds.
        """
        message = ConversationMessage(content=content, role=role)
        today = today or message.timestamp.date()
        self.store.get_agent(agent_id)
        todays_messages = self.store.count_messages_on(agent_id, today) + 1

        interaction = Interaction(
            message_content=content,
            is_user_message=role == MessageRole.USER,
            topics=self.extract_topics(content),
            is_question=self.is_question(content),
            is_helpful=role == MessageRole.AGENT and len(content.strip()) >= HELPFUL_MIN_CHARS,
            emotions_detected=emotions_detected,
        )
        outcome: dict = {}

        def step(agent: AgentRecord) -> AgentRecord:
            stats = agent.stats
            first_today = stats.total_messages == 0 or stats.last_active_date != today
            stats = self.engine.update_stats_from_interaction(stats, interaction, today=today)
            if role == MessageRole.USER and first_today:
                stats = self.engine.start_conversation(stats)
            stats = self.engine.update_longest_conversation(stats, todays_messages)
            return self._apply_unlocks(agent.model_copy(update={"stats": stats}), outcome)

        agent = self._mutate(agent_id, step)
        self.store.add_message(agent_id, message)
        logger.info("message_processed", agent_id=agent_id, role=str(role), topics=len(interaction.topics))
        return ProgressUpdate(agent=agent, **outcome)

    def record_activity(self, agent_id: str, kind: str) -> ProgressUpdate:
        """Bump a content counter (dream, journal_entry, ...) and check unlocks."""
        recorder = RECORDERS.get(kind)
        if recorder is None:
            raise ValueError(f"Unknown activity '{kind}'. Use one of: {', '.join(RECORDERS)}")
        outcome: dict = {}

        def step(agent: AgentRecord) -> AgentRecord:
            updated = agent.model_copy(update={"stats": recorder(agent.stats)})
            return self._apply_unlocks(updated, outcome)

        agent = self._mutate(agent_id, step)
        return ProgressUpdate(agent=agent, **outcome)

    def allocate_skill(self, agent_id: str, skill: str, points: int) -> AllocationResult:
        result: dict = {}

        def step(agent: AgentRecord) -> AgentRecord:
            allocation = self.engine.allocate_skill_points(agent.progress, skill, points)
            result["allocation"] = allocation
            return agent.model_copy(update={"progress": allocation.progress})

        self._mutate(agent_id, step)
        return result["allocation"]

    def _apply_unlocks(self, agent: AgentRecord, outcome: dict) -> AgentRecord:
        unlock = self.engine.check_and_unlock(agent)
        outcome.update(
            unlocked=unlock.unlocked,
            xp_gained=unlock.total_xp_gained,
            leveled_up=unlock.leveled_up,
        )
        return agent.model_copy(update={"progress": unlock.progress})

    # Meta-learning

    def analyze_conversation(
        self, agent_id: str, messages: Optional[list[ConversationMessage]] = None
    ) -> AnalysisResult:
        """Detect patterns in ``messages`` (default: stored history) and merge them in."""
        agent = self.store.get_agent(agent_id)
        if messages is None:
            messages = self.store.get_messages(agent_id, limit=self.engine.conversation_window)

        with self._lock_for(agent_id):
            observed = self.engine.detect_patterns_from_conversation(messages, agent_id)
            if not observed:
                return AnalysisResult()
            _, changed = self.engine.merge_patterns(self.store.get_patterns(agent_id), observed)
            self.store.save_patterns(agent_id, changed)

        emotional_context = agent.emotional_state.dominant_emotion if agent.emotional_state else "trust"
        event = self.engine.create_learning_event(
            agent_id,
            LearningEventType.CONVERSATION,
            "Analyzed conversation for learning patterns",
            changed,
            emotional_context,
        )
        self.store.save_learning_event(event)
        return AnalysisResult(patterns=changed, event=event)

    def generate_goals(self, agent_id: str) -> list[LearningGoal]:
        agent = self.store.get_agent(agent_id)
        goals = self.engine.generate_learning_goals(agent, self.store.get_patterns(agent_id))
        for goal in goals:
            self.store.save_goal(goal)
        return goals

    def update_skill(self, agent_id: str, category: LearningPatternType) -> SkillProgression:
        self.store.get_agent(agent_id)
        with self._lock_for(agent_id):
            existing = next((s for s in self.store.get_skills(agent_id) if s.category == category), None)
            skill = self.engine.update_skill_progression(existing, self.store.get_patterns(agent_id), category)
            self.store.save_skill(agent_id, skill)
        return skill

    def create_adaptation(self, agent_id: str, description: str, pattern_ids: list[str]) -> LearningAdaptation:
        self.store.get_agent(agent_id)
        wanted = set(pattern_ids)
        selected = [p for p in self.store.get_patterns(agent_id) if p.id in wanted]
        adaptation = self.engine.create_adaptation(agent_id, selected, description)
        self.store.save_adaptation(adaptation)
        logger.info("adaptation_created", agent_id=agent_id, type=str(adaptation.adaptation_type))
        return adaptation

    def add_goal(self, goal: LearningGoal) -> LearningGoal:
        self.store.get_agent(goal.agent_id)
        self.store.save_goal(goal)
        logger.info("learning_goal_added", agent_id=goal.agent_id, goal_id=goal.id)
        return goal
