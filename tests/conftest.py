"""Shared test fixtures for agentprog."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from agents import AgentPipeline, AgentStore  # noqa: E402
from engine import ProgressionEngine  # noqa: E402
from metalearning.models import ConversationMessage, LearningGoal, LearningPattern, Milestone  # noqa: E402
from observability import metrics  # noqa: E402
from progression.models import AgentRecord, AgentStats  # noqa: E402
from shared_types import LearningPatternType, MessageRole, PatternOutcome  # noqa: E402

FIXED_NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def agent():
    """Fresh agent with default stats and progress."""
    return AgentRecord(id="agent-1", name="Ada", stats=AgentStats(last_active_date=FIXED_NOW.date()))


@pytest.fixture
def conversation():
    """Short positive conversation that triggers communication_style."""
    return [
        ConversationMessage(content="Can you explain photosynthesis in detail?", role=MessageRole.USER,
                            timestamp=FIXED_NOW - timedelta(minutes=3)),
        ConversationMessage(content="Plants turn light into sugar through chlorophyll.", role=MessageRole.AGENT,
                            timestamp=FIXED_NOW - timedelta(minutes=2)),
        ConversationMessage(content="Thank you, that was great and helpful!", role=MessageRole.USER,
                            timestamp=FIXED_NOW - timedelta(minutes=1)),
    ]


@pytest.fixture
def make_pattern():
    """Factory for stored patterns."""

    def _make(pattern_type=LearningPatternType.TOPIC_INTEREST, effectiveness=0.5,
              outcome=PatternOutcome.NEUTRAL, observation_count=1, last_observed=FIXED_NOW, **kwargs):
        return LearningPattern(
            agent_id="agent-1",
            type=pattern_type,
            effectiveness=effectiveness,
            outcome=outcome,
            observation_count=observation_count,
            first_observed=last_observed,
            last_observed=last_observed,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_goal():
    """Factory for learning goals created relative to FIXED_NOW."""

    def _make(progress=0.0, age_days=10, target_in_days=30, **kwargs):
        return LearningGoal(
            agent_id="agent-1",
            title=kwargs.pop("title", "Learn Spanish"),
            progress_percentage=progress,
            created_at=FIXED_NOW - timedelta(days=age_days),
            target_date=FIXED_NOW + timedelta(days=target_in_days) if target_in_days is not None else None,
            **kwargs,
        )

    return _make


@pytest.fixture
def sample_goals(make_goal):
    return [
        make_goal(progress=80, title="Ahead goal", category=LearningPatternType.TOPIC_INTEREST),
        make_goal(progress=2, title="Behind goal", category=LearningPatternType.PROBLEM_SOLVING,
                  milestones=[Milestone(description="Halfway", target_value=50)]),
    ]


@pytest.fixture
def store(tmp_path):
    return AgentStore(tmp_path / "agents.db")


@pytest.fixture
def engine():
    return ProgressionEngine()


@pytest.fixture
def pipeline(store, engine):
    return AgentPipeline(store, engine)
