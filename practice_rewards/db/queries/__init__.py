"""
Database queries - re-exported so callers can import from practice_rewards.db.queries.

Module organization:
- rewards.py: per-user rewards record (XP, streak, level, totals)
- achievements.py: achievement catalog and earned achievements
"""

from practice_rewards.db.queries.rewards import (
    get_rewards_record,
    upsert_rewards_record,
    modify_rewards_record,
)

from practice_rewards.db.queries.achievements import (
    get_all_achievements,
    get_user_achievements,
    get_earned_achievement_ids,
    add_user_achievements,
)

__all__ = [
    "get_rewards_record",
    "upsert_rewards_record",
    "modify_rewards_record",
    "get_all_achievements",
    "get_user_achievements",
    "get_earned_achievement_ids",
    "add_user_achievements",
]
