"""Achievement database queries"""
import logging
from practice_rewards.db.connection import db

logger = logging.getLogger(__name__)


async def get_all_achievements() -> list[dict]:
    """
    Get all achievement definitions

    Returns:
        Achievements ordered by type, then required value
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                SELECT id::text AS id, achievement_type, required_value, name, description, icon
                FROM achievements
                ORDER BY achievement_type, required_value
                """
            )
            rows = await cur.fetchall()
            return [dict(row) for row in rows]


async def get_user_achievements(user_id: str) -> list[dict]:
    """
    Get user's earned achievements

    Returns:
        Rows ordered by earned_at DESC
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                SELECT user_id, achievement_id::text AS achievement_id, earned_at
                FROM user_achievements
                WHERE user_id = %s
                ORDER BY earned_at DESC
                """,
                (user_id,)
            )
            rows = await cur.fetchall()
            return [dict(row) for row in rows]


async def get_earned_achievement_ids(user_id: str) -> set[str]:
    """IDs of the achievements the user has earned"""
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                "SELECT achievement_id::text AS achievement_id FROM user_achievements WHERE user_id = %s",
                (user_id,)
            )
            rows = await cur.fetchall()
            return {row['achievement_id'] for row in rows}


async def add_user_achievements(user_id: str, achievement_ids: list[str]) -> int:
    """
    Record earned achievements for a user

    Already-earned achievements are skipped, earned_at is never overwritten.

    Returns:
        Number of newly inserted rows
    """
    if not achievement_ids:
        return 0

    async with db.connection() as conn:
        async with conn.transaction():
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    INSERT INTO user_achievements (user_id, achievement_id)
                    SELECT %s, unnest(%s::uuid[])
                    ON CONFLICT (user_id, achievement_id) DO NOTHING
                    RETURNING achievement_id
                    """,
                    (user_id, list(achievement_ids))
                )
                inserted = await cur.fetchall()

    if inserted:
        logger.info(f"User {user_id} earned {len(inserted)} achievement(s)")
    return len(inserted)
