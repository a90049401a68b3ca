"""Tests for learning goal generation."""

from metalearning.goals import generate_learning_goals
from shared_types import LearningPatternType, Priority


class TestGenerateLearningGoals:
    def test_no_patterns_gives_three_goals(self, agent, now):
        goals = generate_learning_goals(agent, [], now=now)
        assert len(goals) == 3
        first = goals[0]
        assert first.category == LearningPatternType.TOPIC_INTEREST
        assert first.title == "Improve topic interest"
        assert first.current_value == 0.5
        assert first.progress_percentage == 0.5 / 0.7 * 100
        assert first.priority == Priority.LOW
        assert [m.achieved for m in first.milestones] == [True, True, False]
        assert first.milestones[0].achieved_at == now

    def test_well_observed_types_skipped(self, agent, make_pattern, now):
        patterns = [make_pattern(t, effectiveness=0.8) for t in LearningPatternType for _ in range(3)]
        assert generate_learning_goals(agent, patterns, now=now) == []

    def test_weak_type_gets_high_priority(self, agent, make_pattern, now):
        strong = [make_pattern(t, effectiveness=0.8) for t in LearningPatternType for _ in range(3)
                  if t != LearningPatternType.MEMORY_RETENTION]
        weak = [make_pattern(LearningPatternType.MEMORY_RETENTION, effectiveness=0.2)] * 3
        goals = generate_learning_goals(agent, strong + weak, now=now)
        assert len(goals) == 1
        assert goals[0].category == LearningPatternType.MEMORY_RETENTION
        assert goals[0].priority == Priority.HIGH
        assert not any(m.achieved for m in goals[0].milestones)
