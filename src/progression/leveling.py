"""XP → level arithmetic.

level = min(floor(sqrt(xp / 100)), 50). The raw formula is 0 below 100 XP;
stored progress never goes below level 1 (see progress_level).
"""

import math

MAX_LEVEL = 50
BASE_XP_PER_LEVEL = 100


def calculate_level(xp: float) -> int:
    """Raw level for an XP total (0 below 100 XP)."""
    if xp <= 0:
        return 0
    return min(math.isqrt(int(xp) // BASE_XP_PER_LEVEL), MAX_LEVEL)


def progress_level(xp: float) -> int:
    """Level as stored on AgentProgress: raw level with a floor of 1."""
    return max(1, calculate_level(xp))


def level_threshold(level: int) -> int:
    """XP at which `level` starts."""
    return level * level * BASE_XP_PER_LEVEL


def calculate_next_level_xp(current_level: int) -> int:
    if current_level >= MAX_LEVEL:
        return 0
    return level_threshold(current_level + 1)


def calculate_level_progress(xp: float) -> int:
    """Percent of the way from the stored level threshold to the next, 0-100.

    Level 1 spans 0 to 400 XP since stored progress starts at level 1.
    """
    current = progress_level(xp)
    if current >= MAX_LEVEL:
        return 100

    floor_xp = level_threshold(current) if current > 1 else 0
    span = level_threshold(current + 1) - floor_xp
    percent = math.floor((xp - floor_xp) / span * 100)
    return max(0, min(100, percent))
