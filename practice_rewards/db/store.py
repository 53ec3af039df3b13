"""
Rewards persistence interface

RewardsService only talks to a RewardsStore. PostgresRewardsStore is the
production implementation; InMemoryRewardsStore (practice_rewards.gamification.memory_store)
backs tests and local runs.
"""
import logging
from functools import wraps
from typing import Any, Callable, Optional, Protocol

import psycopg

from practice_rewards.db import queries
from practice_rewards.db.connection import db
from practice_rewards.exceptions import wrap_external_exception
from practice_rewards.models.rewards import (
    AchievementDefinition,
    RewardsRecord,
    UserAchievement,
)

logger = logging.getLogger(__name__)

RecordUpdate = Callable[[RewardsRecord], RewardsRecord]


class RewardsStore(Protocol):
    """Operations the rewards engine needs from persistence"""

    async def read_record(self, user_id: str) -> Optional[RewardsRecord]: ...

    async def upsert_record(self, user_id: str, fields: Optional[dict[str, Any]] = None) -> RewardsRecord: ...

    async def modify_record(self, user_id: str, apply: RecordUpdate) -> RewardsRecord: ...

    async def list_achievement_catalog(self) -> list[AchievementDefinition]: ...

    async def list_earned_achievement_ids(self, user_id: str) -> set[str]: ...

    async def list_earned_achievements(self, user_id: str) -> list[UserAchievement]: ...

    async def insert_earned_achievements(self, user_id: str, achievement_ids: list[str]) -> int: ...

    async def ping(self) -> bool: ...


def _translate_errors(operation: str):
    """Re-raise driver errors as PersistenceUnavailableError / QueryError"""
    def decorator(func):
        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            try:
                return await func(self, *args, **kwargs)
            except (psycopg.Error, TimeoutError, OSError) as e:
                user_id = args[0] if args else kwargs.get("user_id")
                raise wrap_external_exception(e, operation=operation, user_id=user_id) from e
        return wrapper
    return decorator


class PostgresRewardsStore:
    """RewardsStore backed by PostgreSQL through practice_rewards.db.queries"""

    @_translate_errors("read_record")
    async def read_record(self, user_id: str) -> Optional[RewardsRecord]:
        row = await queries.get_rewards_record(user_id)
        return RewardsRecord(**row) if row else None

    @_translate_errors("upsert_record")
    async def upsert_record(self, user_id: str, fields: Optional[dict[str, Any]] = None) -> RewardsRecord:
        row = await queries.upsert_rewards_record(user_id, fields)
        return RewardsRecord(**row)

    @_translate_errors("modify_record")
    async def modify_record(self, user_id: str, apply: RecordUpdate) -> RewardsRecord:
        row = await queries.modify_rewards_record(user_id, apply)
        return RewardsRecord(**row)

    @_translate_errors("list_achievement_catalog")
    async def list_achievement_catalog(self) -> list[AchievementDefinition]:
        rows = await queries.get_all_achievements()
        return [AchievementDefinition(**row) for row in rows]

    @_translate_errors("list_earned_achievement_ids")
    async def list_earned_achievement_ids(self, user_id: str) -> set[str]:
        return await queries.get_earned_achievement_ids(user_id)

    @_translate_errors("list_earned_achievements")
    async def list_earned_achievements(self, user_id: str) -> list[UserAchievement]:
        rows = await queries.get_user_achievements(user_id)
        return [UserAchievement(**row) for row in rows]

    @_translate_errors("insert_earned_achievements")
    async def insert_earned_achievements(self, user_id: str, achievement_ids: list[str]) -> int:
        return await queries.add_user_achievements(user_id, achievement_ids)

    async def ping(self) -> bool:
        return await db.ping()
