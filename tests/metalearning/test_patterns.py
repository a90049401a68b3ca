"""Tests for learning pattern detection and merging."""

from datetime import timedelta

import pytest

from lexicon import Lexicon
from metalearning.models import ConversationMessage
from metalearning.patterns import (
    create_adaptation,
    detect_patterns_from_conversation,
    detect_strategy,
    determine_outcome,
    merge_pattern,
    merge_patterns,
)
from observability import metrics
from shared_types import AdaptationType, LearningPatternType, LearningStrategy, MessageRole, PatternOutcome


def _msgs(*texts):
    return [ConversationMessage(content=t, role=MessageRole.USER) for t in texts]


class TestDetermineOutcome:
    def test_positive_needs_margin_over_one(self):
        assert determine_outcome(_msgs("thank you")) == PatternOutcome.NEUTRAL
        assert determine_outcome(_msgs("thank you", "great")) == PatternOutcome.POSITIVE

    def test_negative(self):
        assert determine_outcome(_msgs("wrong", "that is bad", "confused")) == PatternOutcome.NEGATIVE

    def test_empty_is_neutral(self):
        assert determine_outcome([]) == PatternOutcome.NEUTRAL


class TestDetectStrategy:
    def test_reflection(self):
        assert detect_strategy("Let me think about it and reflect") == LearningStrategy.REFLECTION

    def test_defaults_to_exploration(self):
        assert detect_strategy("zzz") == LearningStrategy.EXPLORATION


class TestDetectPatterns:
    def test_summarize_thank_you_transcript(self, conversation, now):
        patterns = detect_patterns_from_conversation(conversation, "agent-1", now=now)
        assert [p.type for p in patterns] == [LearningPatternType.COMMUNICATION_STYLE]
        pattern = patterns[0]
        assert pattern.outcome == PatternOutcome.POSITIVE
        assert pattern.effectiveness == 0.7
        assert pattern.trigger == "explain, detail"
        assert pattern.confidence == 0.4
        assert pattern.observation_count == 1
        assert pattern.first_observed == now
        assert pattern.contexts == ["Can you explain photosynthesis in detail?"]
        assert all(e.success for e in pattern.examples)
        assert metrics.get("patterns_detected") == 1

    def test_empty_conversation(self):
        assert detect_patterns_from_conversation([], "agent-1") == []

    def test_confidence_capped(self):
        text = "interested curious fascinated learn more tell me about what is"
        patterns = detect_patterns_from_conversation(_msgs(text), "a")
        topic = next(p for p in patterns if p.type == LearningPatternType.TOPIC_INTEREST)
        assert topic.confidence == 0.9
        assert topic.frequency == 1.0

    def test_custom_lexicon(self):
        lexicon = Lexicon(
            version="test",
            pattern_keywords={LearningPatternType.MEMORY_RETENTION: ("zebra",)},
        )
        patterns = detect_patterns_from_conversation(_msgs("a zebra walks"), "a", lexicon=lexicon)
        assert [p.type for p in patterns] == [LearningPatternType.MEMORY_RETENTION]


class TestMergePatterns:
    def test_weighted_mean_and_confidence(self, make_pattern, now):
        existing = make_pattern(effectiveness=0.4, observation_count=3, confidence=0.5,
                                contexts=["a"], last_observed=now - timedelta(days=1))
        observed = make_pattern(effectiveness=0.8, confidence=0.2, contexts=["a", "b"],
                                outcome=PatternOutcome.POSITIVE)
        merged = merge_pattern(existing, observed)
        assert merged.observation_count == 4
        assert merged.effectiveness == pytest.approx(0.5)
        assert merged.confidence == pytest.approx(0.55)
        assert merged.contexts == ["a", "b"]
        assert merged.last_observed == now
        assert merged.outcome == PatternOutcome.POSITIVE
        assert merged.id == existing.id

    def test_confidence_ceiling(self, make_pattern):
        merged = merge_pattern(make_pattern(confidence=0.93), make_pattern())
        assert merged.confidence == 0.95

    def test_contexts_keep_last_ten(self, make_pattern):
        existing = make_pattern(contexts=[f"c{i}" for i in range(9)])
        merged = merge_pattern(existing, make_pattern(contexts=["x", "y", "z"]))
        assert len(merged.contexts) == 10
        assert merged.contexts[-1] == "z"
        assert "c0" not in merged.contexts

    def test_merge_by_type(self, make_pattern):
        stored = [make_pattern(LearningPatternType.TOPIC_INTEREST)]
        observed = [
            make_pattern(LearningPatternType.TOPIC_INTEREST),
            make_pattern(LearningPatternType.PROBLEM_SOLVING),
        ]
        merged, changed = merge_patterns(stored, observed)
        assert len(merged) == 2
        assert len(changed) == 2
        assert merged[0].id == stored[0].id
        assert merged[0].observation_count == 2
        assert changed[1].type == LearningPatternType.PROBLEM_SOLVING


class TestCreateAdaptation:
    def test_type_from_dominant_pattern(self, make_pattern, now):
        patterns = [
            make_pattern(LearningPatternType.COMMUNICATION_STYLE, effectiveness=0.7, contexts=["ctx"]),
            make_pattern(LearningPatternType.COMMUNICATION_STYLE, effectiveness=0.9),
        ]
        adaptation = create_adaptation("agent-1", patterns, "Use shorter answers", now=now)
        assert adaptation.adaptation_type == AdaptationType.STYLE
        assert adaptation.current_state == "Use shorter answers"
        assert abs(adaptation.impact_score - 0.3) < 1e-9
        assert adaptation.affected_areas == [LearningPatternType.COMMUNICATION_STYLE]
        assert adaptation.triggering_events == ["ctx"]
        assert adaptation.timestamp == now

    def test_no_patterns(self):
        adaptation = create_adaptation("agent-1", [], "Nothing")
        assert adaptation.adaptation_type == AdaptationType.BEHAVIOR
        assert adaptation.impact_score == 0.0
