"""Tests for per-category skill progression."""

import pytest

from metalearning.models import SkillProgression
from metalearning.skills import update_skill_progression
from shared_types import LearningPatternType, PatternOutcome

T = LearningPatternType


class TestUpdateSkillProgression:
    def test_new_skill(self, make_pattern, now):
        patterns = [make_pattern(T.PROBLEM_SOLVING, effectiveness=0.5, outcome=PatternOutcome.POSITIVE)]
        skill = update_skill_progression(None, patterns, T.PROBLEM_SOLVING, now=now)
        assert skill.skill_name == "Problem Solving"
        assert skill.current_level == 1
        assert skill.experience_points == 5
        assert skill.practice_time == 5
        assert skill.consistency_score == pytest.approx(0.55)
        assert [h.level for h in skill.level_history] == [1]

    def test_other_categories_ignored(self, make_pattern, now):
        patterns = [make_pattern(T.TOPIC_INTEREST, outcome=PatternOutcome.POSITIVE)]
        skill = update_skill_progression(None, patterns, T.PROBLEM_SOLVING, now=now)
        assert skill.experience_points == 0
        assert skill.practice_time == 0

    def test_level_rollover(self, make_pattern, now):
        existing = SkillProgression(skill_name="Memory", category=T.MEMORY_RETENTION, experience_points=98)
        patterns = [make_pattern(T.MEMORY_RETENTION, outcome=PatternOutcome.NEUTRAL)]
        skill = update_skill_progression(existing, patterns, T.MEMORY_RETENTION, now=now)
        assert skill.current_level == 2
        assert skill.experience_points == 1
        assert skill.points_to_next_level == 200
        assert skill.level_history[-1].triggering_event == "Reached level 2 in memory_retention"

    def test_negative_patterns_earn_nothing(self, make_pattern, now):
        patterns = [make_pattern(T.MEMORY_RETENTION, outcome=PatternOutcome.NEGATIVE)]
        skill = update_skill_progression(None, patterns, T.MEMORY_RETENTION, now=now)
        assert skill.experience_points == 0

    def test_capped_at_level_ten(self, make_pattern, now):
        existing = SkillProgression(skill_name="Bond", category=T.RELATIONSHIP_BUILDING, current_level=10,
                                    experience_points=5000)
        skill = update_skill_progression(existing, [], T.RELATIONSHIP_BUILDING, now=now)
        assert skill.current_level == 10
