"""
XP and Leveling System

Computes XP awards for answered problems and maps cumulative XP to levels.

Leveling Curve:
- Level 1 covers 0-99 XP
- Reaching level 2 costs 100 XP
- Each further level costs 20% more than the one before it,
  rounded to the nearest XP: 100, 120, 144, 173, 207, ...

XP Award Rules:
- Correct answer: 10 XP x difficulty
- Incorrect answer: 2 XP x difficulty
- Streak bonus: 10% of the award per streak day (day one included)
"""

from typing import Any, Dict, Optional
import math
import logging

logger = logging.getLogger(__name__)

XP_FOR_CORRECT_ANSWER = 10
XP_FOR_INCORRECT_ANSWER = 2
STREAK_BONUS_PERCENT = 10

BASE_LEVEL_XP = 100
LEVEL_GROWTH_FACTOR = 1.2

# Highest difficulty the API accepts
MAX_DIFFICULTY = 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (2.5 -> 3, not 2)"""
    return int(math.floor(value + 0.5))


def compute_base_xp(is_correct: bool, difficulty: Optional[float] = 1) -> int:
    """
    XP for one answer before any streak bonus

    Args:
        is_correct: Whether the answer was right
        difficulty: Linear multiplier; missing, non-positive or non-finite counts as 1

    Returns:
        round(base * difficulty)
    """
    if difficulty is None or not math.isfinite(difficulty) or difficulty <= 0:
        difficulty = 1

    base = XP_FOR_CORRECT_ANSWER if is_correct else XP_FOR_INCORRECT_ANSWER
    return round_half_up(base * difficulty)


def compute_streak_bonus(xp_earned: int, streak: int) -> int:
    """Bonus XP on top of xp_earned for the given streak length"""
    if xp_earned <= 0 or streak <= 0:
        return 0
    # floor(xp * streak * 0.10) in integer arithmetic
    return (xp_earned * streak * STREAK_BONUS_PERCENT) // 100


def xp_for_level_step(level: int) -> int:
    """XP needed to go from level-1 to level"""
    if level <= 1:
        return 0
    return round_half_up(BASE_LEVEL_XP * LEVEL_GROWTH_FACTOR ** (level - 2))


def xp_threshold_for_level(level: int) -> int:
    """Cumulative XP required to reach a level (0 for level 1 and below)"""
    total = 0
    for step in range(2, level + 1):
        total += xp_for_level_step(step)
    return total


def level_for_xp(xp: int) -> int:
    """Highest level whose cumulative threshold is <= xp"""
    level = 1
    next_threshold = xp_for_level_step(2)

    while xp >= next_threshold:
        level += 1
        next_threshold += xp_for_level_step(level + 1)

    return level


def calculate_level_progress(total_xp: int) -> Dict[str, Any]:
    """
    Calculate level and progress within it from total XP

    Returns:
        {
            'current_level': int,
            'xp_in_current_level': int,
            'xp_to_next_level': int,
            'level_progress': int (percentage of the current level's band),
            'total_xp_for_next_level': int
        }
    """
    total_xp = max(0, total_xp)
    level = level_for_xp(total_xp)

    current_threshold = xp_threshold_for_level(level)
    next_threshold = current_threshold + xp_for_level_step(level + 1)
    band = next_threshold - current_threshold
    xp_in_level = total_xp - current_threshold

    return {
        "current_level": level,
        "xp_in_current_level": xp_in_level,
        "xp_to_next_level": next_threshold - total_xp,
        "level_progress": round_half_up(100 * xp_in_level / band) if band > 0 else 0,
        "total_xp_for_next_level": next_threshold,
    }
