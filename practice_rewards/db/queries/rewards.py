"""Rewards record database queries"""
import logging
from typing import Any, Callable, Optional
from psycopg import sql
from practice_rewards.db.connection import db
from practice_rewards.gamification.xp_system import level_for_xp
from practice_rewards.models.rewards import RewardsRecord

logger = logging.getLogger(__name__)

RECORD_COLUMNS = (
    "user_id",
    "xp_points",
    "current_streak",
    "last_activity_date",
    "current_level",
    "total_problems_solved",
    "total_correct_answers",
    "updated_at",
)

# Columns callers may set directly
WRITABLE_COLUMNS = frozenset(RECORD_COLUMNS) - {"user_id", "updated_at", "current_level"}

_SELECT_COLUMNS = sql.SQL(", ").join(sql.Identifier(c) for c in RECORD_COLUMNS)


def _prepare_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Drop unknown columns and keep current_level in step with xp_points"""
    unknown = set(fields) - WRITABLE_COLUMNS
    if unknown:
        raise ValueError(f"Unknown rewards columns: {sorted(unknown)}")

    prepared = dict(fields)
    if "xp_points" in prepared:
        prepared["current_level"] = level_for_xp(prepared["xp_points"])
    return prepared


async def get_rewards_record(user_id: str) -> Optional[dict]:
    """
    Get user rewards record

    Returns:
        Row dict or None if the user has no record yet
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                sql.SQL("SELECT {} FROM user_rewards WHERE user_id = %s").format(_SELECT_COLUMNS),
                (user_id,)
            )
            row = await cur.fetchone()
            return dict(row) if row else None


async def upsert_rewards_record(user_id: str, fields: Optional[dict[str, Any]] = None) -> dict:
    """
    Create the user's record if missing, optionally overwriting fields

    The unique key on user_id makes concurrent first calls collapse into one row.

    Args:
        user_id: User identifier
        fields: Column values to write; current_level follows xp_points

    Returns:
        The stored row
    """
    prepared = _prepare_fields(fields or {})
    columns = ["user_id", *prepared.keys()]
    values = [user_id, *prepared.values()]

    insert = sql.SQL("INSERT INTO user_rewards ({cols}) VALUES ({vals})").format(
        cols=sql.SQL(", ").join(sql.Identifier(c) for c in columns),
        vals=sql.SQL(", ").join(sql.Placeholder() for _ in columns),
    )

    if prepared:
        conflict = sql.SQL(" ON CONFLICT (user_id) DO UPDATE SET {sets}, updated_at = CURRENT_TIMESTAMP").format(
            sets=sql.SQL(", ").join(
                sql.SQL("{col} = EXCLUDED.{col}").format(col=sql.Identifier(c)) for c in prepared
            )
        )
    else:
        conflict = sql.SQL(" ON CONFLICT (user_id) DO NOTHING")

    async with db.connection() as conn:
        async with conn.transaction():
            async with conn.cursor() as cur:
                await cur.execute(insert + conflict, values)
                if cur.rowcount:
                    logger.info(f"Wrote rewards record for user {user_id}")
                await cur.execute(
                    sql.SQL("SELECT {} FROM user_rewards WHERE user_id = %s").format(_SELECT_COLUMNS),
                    (user_id,)
                )
                row = await cur.fetchone()
                return dict(row)


async def modify_rewards_record(
    user_id: str,
    apply: Callable[[RewardsRecord], RewardsRecord]
) -> dict:
    """
    Read-modify-write the user's record in one transaction

    The row is created if missing and locked with FOR UPDATE, so concurrent
    submissions for the same user are applied one after the other.

    Args:
        user_id: User identifier
        apply: Receives the current record, returns the record to store

    Returns:
        The stored row
    """
    async with db.connection() as conn:
        async with conn.transaction():
            async with conn.cursor() as cur:
                await cur.execute(
                    "INSERT INTO user_rewards (user_id) VALUES (%s) ON CONFLICT (user_id) DO NOTHING",
                    (user_id,)
                )
                await cur.execute(
                    sql.SQL("SELECT {} FROM user_rewards WHERE user_id = %s FOR UPDATE").format(_SELECT_COLUMNS),
                    (user_id,)
                )
                current = RewardsRecord(**(await cur.fetchone()))

                updated = apply(current)
                prepared = _prepare_fields(
                    updated.model_dump(include=set(WRITABLE_COLUMNS))
                )

                await cur.execute(
                    sql.SQL(
                        "UPDATE user_rewards SET {sets}, updated_at = CURRENT_TIMESTAMP "
                        "WHERE user_id = %s RETURNING {cols}"
                    ).format(
                        sets=sql.SQL(", ").join(
                            sql.SQL("{} = %s").format(sql.Identifier(c)) for c in prepared
                        ),
                        cols=_SELECT_COLUMNS,
                    ),
                    (*prepared.values(), user_id)
                )
                row = await cur.fetchone()
                return dict(row)
