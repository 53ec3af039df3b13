"""
RewardsService - Rewards Business Logic

Composes the XP calculator, streak tracker, leveling curve and achievement
evaluator into the operations the practice flow and dashboards call.
"""

import logging
from datetime import date, datetime
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from practice_rewards.config import REWARDS_TIMEZONE
from practice_rewards.db.store import RewardsStore
from practice_rewards.gamification import (
    achievement_progress,
    calculate_accuracy,
    calculate_level_progress,
    compute_base_xp,
    compute_streak_bonus,
    evaluate,
    update_streak,
)
from practice_rewards.models.rewards import (
    AchievementDefinition,
    AchievementsOverview,
    EarnedAchievement,
    LockedAchievement,
    RewardAwardResult,
    RewardsRecord,
    RewardsSummary,
)

logger = logging.getLogger(__name__)


def today_in_timezone(tz_name: str = REWARDS_TIMEZONE) -> date:
    """Current calendar date in the configured timezone"""
    return datetime.now(ZoneInfo(tz_name)).date()


class RewardsService:
    """
    Service for the rewards engine.

    Responsibilities:
    - Applying one answered problem to the user's rewards record
    - Unlocking achievements after each update (best effort)
    - Building the dashboard summary and achievement lists
    """

    def __init__(self, store: RewardsStore, clock: Optional[Callable[[], date]] = None):
        """
        Initialize RewardsService.

        Args:
            store: Persistence for records and achievements
            clock: Returns today's date; defaults to the configured timezone
        """
        self.store = store
        self.clock = clock or today_in_timezone
        logger.debug("RewardsService initialized")

    async def record_answer(
        self,
        user_id: Optional[str],
        is_correct: bool,
        difficulty: Optional[float] = 1
    ) -> Optional[RewardAwardResult]:
        """
        Apply one answered problem to the user's rewards.

        Args:
            user_id: Answering user; None for anonymous callers
            is_correct: Whether the answer was right
            difficulty: Problem difficulty (XP multiplier)

        Returns:
            The award, or None when there is no user

        Raises:
            PersistenceUnavailableError: If the record update could not be stored
        """
        if not user_id:
            logger.debug("Answer recorded without a user; skipping rewards")
            return None

        today = self.clock()
        award = {}

        def apply(record: RewardsRecord) -> RewardsRecord:
            new_streak = update_streak(record.last_activity_date, today, record.current_streak)
            base_xp = compute_base_xp(is_correct, difficulty)
            streak_bonus = compute_streak_bonus(base_xp, new_streak)

            award.update(
                base_xp=base_xp,
                streak_bonus=streak_bonus,
                xp_earned=base_xp + streak_bonus,
                current_streak=new_streak,
                old_level=record.current_level,
            )

            return record.model_copy(update={
                "xp_points": record.xp_points + base_xp + streak_bonus,
                "current_streak": new_streak,
                "last_activity_date": today,
                "total_problems_solved": record.total_problems_solved + 1,
                "total_correct_answers": record.total_correct_answers + (1 if is_correct else 0),
            })

        updated = await self.store.modify_record(user_id, apply)

        new_achievements = await self._award_achievements(user_id, updated)

        result = RewardAwardResult(
            xp_earned=award["xp_earned"],
            base_xp=award["base_xp"],
            streak_bonus=award["streak_bonus"],
            current_streak=award["current_streak"],
            current_level=updated.current_level,
            leveled_up=updated.current_level > award["old_level"],
            new_achievements=new_achievements,
        )

        logger.info(
            f"Rewards recorded: user={user_id}, xp=+{result.xp_earned} "
            f"(base {result.base_xp}, bonus {result.streak_bonus}), "
            f"streak={result.current_streak}, total={updated.xp_points}"
        )
        if result.leveled_up:
            logger.info(f"User {user_id} leveled up from {award['old_level']} to {updated.current_level}!")

        return result

    async def _award_achievements(
        self,
        user_id: str,
        record: RewardsRecord
    ) -> list[AchievementDefinition]:
        """
        Unlock achievements the updated record qualifies for.

        Failures are logged and swallowed: the record update has already
        been committed and must stand.
        """
        try:
            catalog = await self.store.list_achievement_catalog()
            already_earned = await self.store.list_earned_achievement_ids(user_id)

            qualified = evaluate(record, catalog, already_earned)
            if not qualified:
                return []

            await self.store.insert_earned_achievements(user_id, [a.id for a in qualified])

            for achievement in qualified:
                logger.info(f"User {user_id} unlocked achievement: {achievement.id} ({achievement.name})")

            return qualified

        except Exception as e:
            logger.error(f"Error awarding achievements for user {user_id}: {e}", exc_info=True)
            return []

    async def get_summary(self, user_id: str) -> RewardsSummary:
        """
        Dashboard summary; users without history get the zero state.

        Returns:
            RewardsSummary with level progress, accuracy and achievement count
        """
        record = await self.store.upsert_record(user_id)
        level_info = calculate_level_progress(record.xp_points)
        earned_ids = await self.store.list_earned_achievement_ids(user_id)

        return RewardsSummary(
            user_id=user_id,
            xp_points=record.xp_points,
            current_streak=record.current_streak,
            last_activity_date=record.last_activity_date,
            current_level=level_info["current_level"],
            total_problems_solved=record.total_problems_solved,
            total_correct_answers=record.total_correct_answers,
            accuracy=calculate_accuracy(record),
            level_progress=level_info["level_progress"],
            xp_to_next_level=level_info["xp_to_next_level"],
            achievements_count=len(earned_ids),
        )

    async def get_achievements(self, user_id: str, include_progress: bool = False) -> AchievementsOverview:
        """
        Split the catalog into earned and unearned achievements.

        Args:
            user_id: User identifier
            include_progress: Annotate unearned achievements with progress

        Returns:
            AchievementsOverview; earned entries carry earned_at, newest first
        """
        catalog = await self.store.list_achievement_catalog()
        earned_rows = await self.store.list_earned_achievements(user_id)
        by_id = {a.id: a for a in catalog}

        earned = []
        for row in earned_rows:
            achievement = by_id.get(row.achievement_id)
            if achievement is None:
                logger.warning(f"User {user_id} holds unknown achievement {row.achievement_id}")
                continue
            earned.append(EarnedAchievement(**achievement.model_dump(), earned_at=row.earned_at))

        earned_ids = {row.achievement_id for row in earned_rows}
        record = None
        if include_progress:
            record = await self.store.read_record(user_id) or RewardsRecord.empty(user_id)

        unearned = [
            LockedAchievement(
                **achievement.model_dump(),
                progress=achievement_progress(record, achievement) if record else None,
            )
            for achievement in catalog
            if achievement.id not in earned_ids
        ]

        return AchievementsOverview(earned=earned, unearned=unearned)
