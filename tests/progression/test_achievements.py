"""Tests for achievement checks, unlocking and skill allocation."""

from unittest.mock import patch

from observability import metrics
from progression.achievements import AchievementService, check_requirement, get_metric_value
from progression.catalog import get_achievement_by_id
from progression.models import (
    Achievement,
    AgentProgress,
    AgentRecord,
    AgentStats,
    UnlockedAchievement,
)


def _service():
    return AchievementService()


class TestCheckAchievements:
    def test_first_conversation_qualifies_for_first_words(self, agent):
        agent.stats.conversation_count = 1
        ids = [a.id for a in _service().check_achievements(agent)]
        assert ids == ["first_words"]

    def test_already_unlocked_excluded(self, agent):
        agent.stats.conversation_count = 1
        agent.progress.achievements["first_words"] = UnlockedAchievement()
        assert _service().check_achievements(agent) == []

    def test_threshold_greater_is_strict(self):
        streak = get_achievement_by_id("consistent_presence")
        progress = AgentProgress()
        assert not check_requirement(streak, AgentStats(consecutive_days=7), progress)
        assert check_requirement(streak, AgentStats(consecutive_days=8), progress)

    def test_legendary_needs_exact_level(self):
        legendary = get_achievement_by_id("legendary")
        assert check_requirement(legendary, AgentStats(), AgentProgress(level=50))
        assert not check_requirement(legendary, AgentStats(), AgentProgress(level=49))

    def test_unknown_combination_is_false_and_logged(self):
        bogus = Achievement.model_validate({
            "id": "bogus", "name": "Bogus", "description": "", "category": "special",
            "rarity": "common", "reward_xp": 1,
            "requirement": {"type": "combination", "metric": "no_such_combo", "target": 1},
        })
        with patch("progression.achievements.logger") as logger:
            assert not check_requirement(bogus, AgentStats(), AgentProgress())
        logger.warning.assert_called_once()
        assert logger.warning.call_args.args[0] == "unknown_combination_requirement"

    def test_unknown_metric_reads_zero(self):
        with patch("progression.achievements.logger") as logger:
            assert get_metric_value("madeUp", AgentStats(), AgentProgress()) == 0
        assert logger.warning.call_args.args[0] == "unknown_achievement_metric"


class TestUnlockAchievements:
    def test_first_words_scenario(self):
        """Fresh agent with one conversation earns 10 XP and stays level 1."""
        record = AgentRecord(id="a", stats=AgentStats(conversation_count=1))
        service = _service()
        result = service.unlock_achievements(record.progress, service.check_achievements(record))
        assert result.total_xp_gained == 10
        assert result.progress.experience_points == 10
        assert result.new_level == 1
        assert not result.leveled_up
        assert "first_words" in result.progress.achievements

    def test_level_up_grants_skill_points(self):
        service = _service()
        batch = [get_achievement_by_id(i) for i in ("conversationalist", "master_communicator")]
        result = service.unlock_achievements(AgentProgress(), batch)
        # 400 XP -> level 2
        assert result.progress.experience_points == 400
        assert result.new_level == 2
        assert result.leveled_up
        assert result.progress.skill_points == 1
        assert result.progress.next_level_xp == 900
        assert metrics.get("level_ups") == 1
        assert metrics.get("achievements_unlocked") == 2

    def test_replay_is_idempotent(self):
        service = _service()
        batch = [get_achievement_by_id("first_words")]
        first = service.unlock_achievements(AgentProgress(), batch)
        second = service.unlock_achievements(first.progress, batch)
        assert second.total_xp_gained == 0
        assert second.unlocked == []
        assert second.progress.experience_points == first.progress.experience_points

    def test_never_decreases_level(self):
        """Stored level above the XP-derived level is kept."""
        service = _service()
        progress = AgentProgress(level=5, experience_points=0, skill_points=2)
        result = service.unlock_achievements(progress, [get_achievement_by_id("first_words")])
        assert result.new_level == 5
        assert result.progress.skill_points == 2

    def test_input_not_mutated(self):
        progress = AgentProgress()
        _service().unlock_achievements(progress, [get_achievement_by_id("first_words")])
        assert progress.achievements == {}
        assert progress.experience_points == 0

    def test_logs_unlocks(self):
        with patch("progression.achievements.logger") as logger:
            _service().unlock_achievements(AgentProgress(), [get_achievement_by_id("first_words")], agent_id="a")
        logger.info.assert_called_once()
        assert logger.info.call_args.args[0] == "achievements_unlocked"
        assert logger.info.call_args.kwargs["agent_id"] == "a"
        assert logger.info.call_args.kwargs["count"] == 1


class TestAllocateSkillPoints:
    def test_success(self):
        result = _service().allocate_skill_points(AgentProgress(skill_points=3), "empathy", 2)
        assert result.success
        assert result.message == "Allocated 2 point(s) to empathy"
        assert result.progress.skill_points == 1
        assert result.progress.allocated_skills == {"empathy": 2}

    def test_not_enough_points_leaves_state(self):
        progress = AgentProgress(skill_points=1)
        result = _service().allocate_skill_points(progress, "empathy", 2)
        assert not result.success
        assert result.message == "Not enough skill points available"
        assert result.progress == progress

    def test_cap_per_skill(self):
        progress = AgentProgress(skill_points=5, allocated_skills={"empathy": 4})
        result = _service().allocate_skill_points(progress, "empathy", 2)
        assert not result.success
        assert result.message == "Maximum 5 points can be allocated to a skill"
        assert result.progress.skill_points == 5

    def test_non_positive_rejected(self):
        for points in (0, -3):
            result = _service().allocate_skill_points(AgentProgress(skill_points=5), "empathy", points)
            assert not result.success
            assert result.progress.skill_points == 5


class TestViews:
    def test_level_info(self):
        info = _service().get_level_info(AgentProgress(level=2, experience_points=650, skill_points=1,
                                                       next_level_xp=900))
        assert info.progress_percent == 50
        assert info.next_level_xp == 900
        assert not info.is_max_level

    def test_level_info_first_level_consistent(self):
        service = _service()
        previous = -1
        for xp in (0, 99, 100, 150, 399):
            info = service.get_level_info(AgentProgress(experience_points=xp))
            assert (info.level, info.next_level_xp) == (1, 400)
            assert info.progress_percent == xp * 100 // 400
            assert info.progress_percent >= previous
            previous = info.progress_percent

    def test_achievement_progress_capped(self):
        chatterbox = get_achievement_by_id("chatterbox")
        service = _service()
        assert service.get_achievement_progress(chatterbox, AgentStats(conversation_count=5)) == 50
        assert service.get_achievement_progress(chatterbox, AgentStats(conversation_count=50)) == 100

    def test_locked_sorted_by_progress(self):
        service = _service()
        locked = service.get_locked_achievements(AgentProgress(), AgentStats(conversation_count=5))
        assert len(locked) == 40
        assert locked[0].progress >= locked[-1].progress
        assert locked[0].id == "first_words"

    def test_unlocked_newest_first(self, now):
        from datetime import timedelta

        progress = AgentProgress(achievements={
            "first_words": UnlockedAchievement(unlocked_at=now - timedelta(days=2)),
            "chatterbox": UnlockedAchievement(unlocked_at=now),
            "retired_id": UnlockedAchievement(unlocked_at=now),
        })
        views = _service().get_unlocked_achievements(progress)
        assert [v.id for v in views] == ["chatterbox", "first_words"]

    def test_stats_summary_keys(self):
        summary = _service().get_stats_summary(AgentStats(conversation_count=3, unique_topics=["a", "b"]))
        assert summary["conversation_count"] == 3
        assert summary["unique_topics"] == 2
        assert all(key == key.lower() and " " not in key for key in summary)
