"""Achievements, leveling and the stats accumulator."""

from .achievements import AchievementService
from .catalog import ACHIEVEMENT_COUNTS, ACHIEVEMENTS, RARITY_XP_MULTIPLIER, get_achievement_by_id
from .leveling import MAX_LEVEL, calculate_level, calculate_level_progress, calculate_next_level_xp
from .models import Achievement, AgentProgress, AgentRecord, AgentStats, Interaction

__all__ = [
    "AchievementService",
    "ACHIEVEMENTS",
    "ACHIEVEMENT_COUNTS",
    "RARITY_XP_MULTIPLIER",
    "get_achievement_by_id",
    "MAX_LEVEL",
    "calculate_level",
    "calculate_level_progress",
    "calculate_next_level_xp",
    "Achievement",
    "AgentProgress",
    "AgentRecord",
    "AgentStats",
    "Interaction",
]
