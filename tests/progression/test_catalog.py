"""Tests for the static achievement catalog."""

import pytest
from pydantic import ValidationError

from progression.catalog import (
    ACHIEVEMENT_COUNTS,
    ACHIEVEMENTS,
    COMBINATION_PREDICATES,
    METRIC_READERS,
    get_achievement_by_id,
    get_achievements_by_category,
    get_achievements_by_rarity,
)
from progression.models import AgentProgress, AgentStats
from shared_types import AchievementCategory, AchievementRarity, RequirementType


class TestCatalog:
    def test_forty_unique_achievements(self):
        ids = [a.id for a in ACHIEVEMENTS]
        assert len(ids) == 40
        assert len(set(ids)) == 40

    def test_every_metric_is_readable(self):
        """Non-combination requirements reference a known metric."""
        for a in ACHIEVEMENTS:
            if a.requirement.type == RequirementType.COMBINATION:
                assert a.requirement.metric in COMBINATION_PREDICATES
            else:
                assert a.requirement.metric in METRIC_READERS

    def test_lookup_by_id(self):
        first = get_achievement_by_id("first_words")
        assert first.reward_xp == 10
        assert first.requirement.metric == "conversationCount"
        assert get_achievement_by_id("nope") is None

    def test_by_category(self):
        relationship = get_achievements_by_category(AchievementCategory.RELATIONSHIP)
        assert {a.id for a in relationship} == {
            "first_friend", "social_butterfly", "community_builder", "influencer", "trusted_ally",
        }

    def test_by_rarity_matches_counts(self):
        for rarity in AchievementRarity:
            assert len(get_achievements_by_rarity(rarity)) == ACHIEVEMENT_COUNTS[rarity]
        assert sum(ACHIEVEMENT_COUNTS.values()) == len(ACHIEVEMENTS)

    def test_achievements_are_frozen(self):
        with pytest.raises(ValidationError):
            ACHIEVEMENTS[0].reward_xp = 1


class TestCombinationPredicates:
    def test_renaissance_needs_all_three(self):
        predicate = COMBINATION_PREDICATES["renaissance_combo"]
        progress = AgentProgress()
        assert not predicate(AgentStats(science_topics=50, art_topics=50, philosophy_topics=49), progress)
        assert predicate(AgentStats(science_topics=50, art_topics=50, philosophy_topics=50), progress)

    def test_philosophical_reflection_needs_level(self):
        predicate = COMBINATION_PREDICATES["philosophical_reflection"]
        stats = AgentStats(philosophy_topics=25)
        assert not predicate(stats, AgentProgress(level=9))
        assert predicate(stats, AgentProgress(level=10))
