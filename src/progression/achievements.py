"""Achievement evaluation, unlocking and skill-point allocation."""

from typing import Optional

import structlog

from observability import metrics
from shared_types import RequirementType, ThresholdCondition
from timeutil import utcnow

from .catalog import ACHIEVEMENTS, COMBINATION_PREDICATES, METRIC_READERS, get_achievement_by_id
from .leveling import (
    MAX_LEVEL,
    calculate_level_progress,
    calculate_next_level_xp,
    progress_level,
)
from .models import (
    Achievement,
    AgentProgress,
    AgentRecord,
    AgentStats,
    AllocationResult,
    LevelInfo,
    LockedAchievementView,
    UnlockedAchievement,
    UnlockedAchievementView,
    UnlockResult,
)

logger = structlog.get_logger()

MAX_POINTS_PER_SKILL = 5


def get_metric_value(metric: str, stats: AgentStats, progress: AgentProgress) -> int:
    reader = METRIC_READERS.get(metric)
    if reader is None:
        logger.warning("unknown_achievement_metric", metric=metric)
        return 0
    return reader(stats, progress)


def check_requirement(achievement: Achievement, stats: AgentStats, progress: AgentProgress) -> bool:
    req = achievement.requirement

    if req.type == RequirementType.COMBINATION:
        predicate = COMBINATION_PREDICATES.get(req.metric)
        if predicate is None:
            logger.warning("unknown_combination_requirement", achievement_id=achievement.id, metric=req.metric)
            return False
        return bool(predicate(stats, progress))

    value = get_metric_value(req.metric, stats, progress)
    if req.type == RequirementType.COUNT:
        return value >= req.target

    if req.condition == ThresholdCondition.GREATER:
        return value > req.target
    if req.condition == ThresholdCondition.LESS:
        return value < req.target
    if req.condition == ThresholdCondition.EQUAL:
        return value == req.target
    return value >= req.target


class AchievementService:
    """Stateless evaluator over the achievement catalog."""

    def __init__(self, catalog: tuple[Achievement, ...] = ACHIEVEMENTS):
        self.catalog = catalog

    def check_achievements(self, agent: AgentRecord) -> list[Achievement]:
        """Return catalog entries the agent now qualifies for but hasn't unlocked."""
        unlocked = agent.progress.achievements
        return [
            a for a in self.catalog
            if a.id not in unlocked and check_requirement(a, agent.stats, agent.progress)
        ]

    def unlock_achievements(
        self,
        progress: AgentProgress,
        achievements: list[Achievement],
        agent_id: Optional[str] = None,
    ) -> UnlockResult:
        """Apply unlocks to a copy of ``progress``.

        Already-unlocked ids are skipped, so replaying a batch is harmless.
        Level is recomputed once at the end and never decreases; each level
        gained grants one skill point.
        """
        updated = progress.model_copy(deep=True)
        old_level = updated.level
        now = utcnow()
        xp_gained = 0
        newly: list[str] = []

        for achievement in achievements:
            if achievement.id in updated.achievements:
                continue
            updated.achievements[achievement.id] = UnlockedAchievement(unlocked_at=now)
            updated.experience_points += achievement.reward_xp
            xp_gained += achievement.reward_xp
            newly.append(achievement.id)

        new_level = max(old_level, progress_level(updated.experience_points))
        leveled_up = new_level > old_level
        if leveled_up:
            updated.skill_points += new_level - old_level
            metrics.counter("level_ups", new_level - old_level)
        updated.level = new_level
        updated.next_level_xp = calculate_next_level_xp(new_level)

        if newly:
            metrics.counter("achievements_unlocked", len(newly))
            logger.info(
                "achievements_unlocked",
                agent_id=agent_id,
                count=len(newly),
                xp_gained=xp_gained,
                level=new_level,
            )

        return UnlockResult(
            progress=updated,
            leveled_up=leveled_up,
            old_level=old_level,
            new_level=new_level,
            total_xp_gained=xp_gained,
            unlocked=newly,
        )

    def allocate_skill_points(self, progress: AgentProgress, skill: str, points: int) -> AllocationResult:
        if points <= 0:
            return AllocationResult(progress=progress, success=False, message="Points must be a positive number")
        if points > progress.skill_points:
            return AllocationResult(progress=progress, success=False, message="Not enough skill points available")

        current = progress.allocated_skills.get(skill, 0)
        if current + points > MAX_POINTS_PER_SKILL:
            return AllocationResult(
                progress=progress,
                success=False,
                message=f"Maximum {MAX_POINTS_PER_SKILL} points can be allocated to a skill",
            )

        updated = progress.model_copy(deep=True)
        updated.skill_points -= points
        updated.allocated_skills[skill] = current + points
        return AllocationResult(progress=updated, success=True, message=f"Allocated {points} point(s) to {skill}")

    def get_level_info(self, progress: AgentProgress) -> LevelInfo:
        return LevelInfo(
            level=progress.level,
            xp=progress.experience_points,
            next_level_xp=progress.next_level_xp,
            progress_percent=calculate_level_progress(progress.experience_points),
            skill_points=progress.skill_points,
            is_max_level=progress.level >= MAX_LEVEL,
        )

    def get_achievement_progress(self, achievement: Achievement, stats: AgentStats,
                                 progress: Optional[AgentProgress] = None) -> int:
        """Percent toward the achievement's target, 0-100.

        Combination requirements report 100 when satisfied and 0 otherwise.
        """
        progress = progress or AgentProgress()
        req = achievement.requirement
        if req.type == RequirementType.COMBINATION:
            return 100 if check_requirement(achievement, stats, progress) else 0
        if req.target <= 0:
            return 0
        value = get_metric_value(req.metric, stats, progress)
        return min(100, int(value / req.target * 100))

    def get_unlocked_achievements(self, progress: AgentProgress) -> list[UnlockedAchievementView]:
        """Unlocked achievements, newest first. Ids no longer in the catalog are skipped."""
        views = []
        for achievement_id, unlocked in progress.achievements.items():
            achievement = get_achievement_by_id(achievement_id)
            if achievement is None:
                continue
            views.append(UnlockedAchievementView(**achievement.model_dump(), unlocked_at=unlocked.unlocked_at))
        return sorted(views, key=lambda v: v.unlocked_at, reverse=True)

    def get_locked_achievements(self, progress: AgentProgress, stats: AgentStats) -> list[LockedAchievementView]:
        views = [
            LockedAchievementView(**a.model_dump(), progress=self.get_achievement_progress(a, stats, progress))
            for a in self.catalog
            if a.id not in progress.achievements
        ]
        return sorted(views, key=lambda v: v.progress, reverse=True)

    def get_stats_summary(self, stats: AgentStats) -> dict[str, int | str]:
        return {
            "conversation_count": stats.conversation_count,
            "total_messages": stats.total_messages,
            "unique_topics": len(stats.unique_topics),
            "vocabulary_size": stats.unique_words,
            "relationships_formed": stats.relationships_formed,
            "consecutive_days": stats.consecutive_days,
            "last_active_date": stats.last_active_date.isoformat() if stats.last_active_date else "",
        }
