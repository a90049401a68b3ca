"""Tests for learning profiles and meta-learning state."""

from datetime import timedelta

import pytest

from metalearning.models import LearningAdaptation
from metalearning.profile import (
    create_learning_profile,
    generate_recommendations,
    get_meta_learning_state,
    mean_effectiveness_by_type,
    preferred_strategy,
)
from shared_types import GoalStatus, LearningPatternType, LearningStrategy, PatternOutcome, RecommendationType

T = LearningPatternType


class TestCreateLearningProfile:
    def test_empty_inputs(self, agent, now):
        profile = create_learning_profile(agent, [], [], now=now)
        caps = profile.capabilities
        assert caps.speed_of_learning == 0
        assert caps.retention_rate == 0
        assert caps.adaptability == 0
        assert caps.creativity == 0.5
        assert profile.strengths == []
        assert profile.weaknesses == []
        assert profile.preferences.preferred_strategy == LearningStrategy.EXPLORATION

    def test_capabilities(self, agent, make_pattern, now):
        patterns = [
            make_pattern(T.TOPIC_INTEREST, observation_count=2),
            make_pattern(T.PROBLEM_SOLVING, last_observed=now - timedelta(days=3), related_patterns=["x"]),
        ]
        adaptations = [
            LearningAdaptation(impact_score=0.2),
            LearningAdaptation(impact_score=-0.1),
        ]
        agent.dynamic_traits["adaptability"] = 0.6
        caps = create_learning_profile(agent, patterns, adaptations, now=now).capabilities
        assert caps.speed_of_learning == 0.5
        assert caps.retention_rate == 0.5
        assert caps.transferability == 0.5
        assert caps.adaptability == 0.5
        assert caps.creativity == pytest.approx(0.8)

    def test_strengths_and_weaknesses(self, agent, make_pattern, now):
        patterns = [
            make_pattern(T.EMOTIONAL_RESPONSE, effectiveness=0.9),
            make_pattern(T.EMOTIONAL_RESPONSE, effectiveness=0.7),
            make_pattern(T.MEMORY_RETENTION, effectiveness=0.2),
            make_pattern(T.TOPIC_INTEREST, effectiveness=0.5),
        ]
        profile = create_learning_profile(agent, patterns, [], now=now)
        assert profile.strengths == [T.EMOTIONAL_RESPONSE]
        assert profile.weaknesses == [T.MEMORY_RETENTION]
        assert profile.active_focus_areas == [T.MEMORY_RETENTION]
        assert profile.patterns_discovered == 4
        assert profile.total_learning_hours == pytest.approx(0.4)

    def test_goals_achieved_counts_completed(self, agent, make_goal, now):
        goals = [make_goal(status=GoalStatus.COMPLETED), make_goal(), make_goal(status=GoalStatus.ABANDONED)]
        assert create_learning_profile(agent, [], [], goals, now=now).goals_achieved == 1

    def test_best_contexts_from_positive_patterns(self, agent, make_pattern, now):
        patterns = [
            make_pattern(outcome=PatternOutcome.POSITIVE, contexts=["good one", "good one"]),
            make_pattern(outcome=PatternOutcome.NEGATIVE, contexts=["bad one"]),
        ]
        profile = create_learning_profile(agent, patterns, [], now=now)
        assert profile.preferences.best_learning_contexts == ["good one"]


class TestHelpers:
    def test_mean_by_type(self, make_pattern):
        means = mean_effectiveness_by_type([make_pattern(effectiveness=0.2), make_pattern(effectiveness=0.6)])
        assert means == {T.TOPIC_INTEREST: pytest.approx(0.4)}

    def test_preferred_strategy_votes_on_contexts(self, make_pattern):
        patterns = [make_pattern(contexts=["let me reflect and think about it", "ponder this"])]
        assert preferred_strategy(patterns) == LearningStrategy.REFLECTION


class TestRecommendations:
    def test_weakness_and_adaptability(self, agent, make_pattern, now):
        patterns = [make_pattern(T.MEMORY_RETENTION, effectiveness=0.1, outcome=PatternOutcome.NEGATIVE)]
        profile = create_learning_profile(agent, patterns, [], now=now)
        recs = generate_recommendations(patterns, profile)
        types = [r.type for r in recs]
        assert types == [RecommendationType.FOCUS_AREA, RecommendationType.STRATEGY, RecommendationType.ADAPTATION]
        assert recs[0].title == "Focus on memory retention"
        assert recs[0].related_pattern_ids == [patterns[0].id]

    def test_capped_at_five(self, agent, make_pattern, make_goal, now):
        patterns = [make_pattern(t, effectiveness=0.1) for t in LearningPatternType]
        profile = create_learning_profile(agent, patterns, [], [make_goal(status=GoalStatus.COMPLETED)], now=now)
        assert len(generate_recommendations(patterns, profile)) == 5


class TestMetaLearningState:
    def test_state(self, agent, make_pattern, make_goal, now):
        patterns = [
            make_pattern(T.TOPIC_INTEREST, effectiveness=0.9, outcome=PatternOutcome.POSITIVE),
            make_pattern(T.PROBLEM_SOLVING, effectiveness=0.2, outcome=PatternOutcome.NEGATIVE,
                         last_observed=now - timedelta(days=2)),
        ]
        adaptations = [
            LearningAdaptation(timestamp=now - timedelta(days=1)),
            LearningAdaptation(timestamp=now - timedelta(days=10), is_active=False),
        ]
        goals = [make_goal(), make_goal(status=GoalStatus.PAUSED)]
        state = get_meta_learning_state(agent, patterns, adaptations, goals, now=now)

        assert state.stats.total_patterns == 2
        assert state.stats.positive_patterns == 1
        assert state.stats.negative_patterns == 1
        assert state.stats.adaptations_this_week == 1
        assert state.stats.most_improved_area == T.TOPIC_INTEREST
        assert state.stats.needs_attention_area == T.PROBLEM_SOLVING
        assert state.stats.learning_streak == 1
        assert [p.type for p in state.active_patterns] == [T.TOPIC_INTEREST]
        assert len(state.active_goals) == 1
        assert len(state.recent_adaptations) == 1

    def test_no_patterns(self, agent, now):
        state = get_meta_learning_state(agent, [], [], [], now=now)
        assert state.stats.most_improved_area is None
        assert state.stats.needs_attention_area is None
