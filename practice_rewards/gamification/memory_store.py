"""
In-memory rewards store

Implements the RewardsStore interface without a database. Used by the test
suite and for local runs (REWARDS_STORE=memory). Nothing is persisted across
restarts.
"""

import asyncio
import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Optional

from practice_rewards.db.store import RecordUpdate
from practice_rewards.gamification.xp_system import level_for_xp
from practice_rewards.models.rewards import (
    AchievementDefinition,
    RewardsRecord,
    UserAchievement,
)

logger = logging.getLogger(__name__)


class InMemoryRewardsStore:
    """Process-local store; record updates are serialized per user with an asyncio.Lock"""

    def __init__(self, catalog: Optional[list[AchievementDefinition]] = None, latency: float = 0.0):
        self._records: dict[str, RewardsRecord] = {}
        self._earned: dict[str, dict[str, UserAchievement]] = defaultdict(dict)
        self._catalog: list[AchievementDefinition] = list(catalog or [])
        self._locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        # Simulated round-trip time between read and write
        self.latency = latency

    async def _io(self) -> None:
        await asyncio.sleep(self.latency)

    def record_count(self) -> int:
        return len(self._records)

    async def read_record(self, user_id: str) -> Optional[RewardsRecord]:
        await self._io()
        record = self._records.get(user_id)
        return record.model_copy() if record else None

    async def upsert_record(self, user_id: str, fields: Optional[dict[str, Any]] = None) -> RewardsRecord:
        async with self._locks[user_id]:
            record = self._records.get(user_id) or RewardsRecord.empty(user_id)
            if fields:
                update = dict(fields)
                if "xp_points" in update:
                    update["current_level"] = level_for_xp(update["xp_points"])
                update["updated_at"] = datetime.now(timezone.utc)
                record = RewardsRecord(**{**record.model_dump(), **update})
            elif user_id not in self._records:
                logger.info(f"Created new rewards record for user {user_id}")
            self._records[user_id] = record
            return record.model_copy()

    async def modify_record(self, user_id: str, apply: RecordUpdate) -> RewardsRecord:
        async with self._locks[user_id]:
            current = self._records.get(user_id) or RewardsRecord.empty(user_id)
            await self._io()

            updated = apply(current.model_copy())
            updated = updated.model_copy(update={
                "user_id": user_id,
                "current_level": level_for_xp(updated.xp_points),
                "updated_at": datetime.now(timezone.utc),
            })

            self._records[user_id] = updated
            return updated.model_copy()

    async def list_achievement_catalog(self) -> list[AchievementDefinition]:
        await self._io()
        return sorted(self._catalog, key=lambda a: (a.achievement_type, a.required_value))

    async def list_earned_achievement_ids(self, user_id: str) -> set[str]:
        await self._io()
        return set(self._earned[user_id])

    async def list_earned_achievements(self, user_id: str) -> list[UserAchievement]:
        await self._io()
        earned = list(self._earned[user_id].values())
        earned.sort(key=lambda a: a.earned_at, reverse=True)
        return earned

    async def insert_earned_achievements(self, user_id: str, achievement_ids: list[str]) -> int:
        await self._io()
        inserted = 0
        for achievement_id in achievement_ids:
            if achievement_id in self._earned[user_id]:
                continue
            self._earned[user_id][achievement_id] = UserAchievement(
                user_id=user_id,
                achievement_id=achievement_id,
                earned_at=datetime.now(timezone.utc),
            )
            inserted += 1
        return inserted

    async def ping(self) -> bool:
        return True
