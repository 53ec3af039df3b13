"""
Gamification rules for the practice app

Pure functions, no I/O:
- XP calculation and the leveling curve
- Daily streak tracking
- Achievement evaluation
"""

from practice_rewards.gamification.xp_system import (
    compute_base_xp,
    compute_streak_bonus,
    level_for_xp,
    xp_threshold_for_level,
    calculate_level_progress,
)
from practice_rewards.gamification.streak_system import update_streak
from practice_rewards.gamification.achievement_system import (
    evaluate,
    calculate_accuracy,
    achievement_progress,
)

__all__ = [
    "compute_base_xp",
    "compute_streak_bonus",
    "level_for_xp",
    "xp_threshold_for_level",
    "calculate_level_progress",
    "update_streak",
    "evaluate",
    "calculate_accuracy",
    "achievement_progress",
]
