"""Tests for learning event creation."""

import pytest

from metalearning.events import create_learning_event
from shared_types import LearningEventType, LearningPatternType, PatternOutcome


class TestCreateLearningEvent:
    def test_lessons_and_value(self, make_pattern, now):
        new_positive = make_pattern(LearningPatternType.TOPIC_INTEREST, outcome=PatternOutcome.POSITIVE)
        reinforced_negative = make_pattern(LearningPatternType.MEMORY_RETENTION, outcome=PatternOutcome.NEGATIVE,
                                           observation_count=4)
        event = create_learning_event(
            "agent-1", LearningEventType.CONVERSATION, "Analyzed", [new_positive, reinforced_negative],
            emotional_context="joy", now=now,
        )
        assert event.lessons_learned == [
            "topic interest works well in this context",
            "Need to improve memory retention approach",
        ]
        assert event.new_patterns_discovered == [new_positive.id]
        assert event.patterns_reinforced == [reinforced_negative.id]
        # (0.3 + 0.1 + 0.2) / 2
        assert event.learning_value == pytest.approx(0.3)
        assert event.emotional_context == "joy"
        assert event.timestamp == now

    def test_value_capped(self, make_pattern):
        patterns = [make_pattern(outcome=PatternOutcome.POSITIVE) for _ in range(10)]
        event = create_learning_event("a", LearningEventType.REFLECTION, "", patterns)
        assert event.learning_value == 1.0

    def test_empty(self):
        event = create_learning_event("a", LearningEventType.OBSERVATION, "", [])
        assert event.learning_value == 0
        assert event.lessons_learned == []
