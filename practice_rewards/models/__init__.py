from practice_rewards.models.rewards import (
    AchievementType,
    RewardsRecord,
    AchievementDefinition,
    UserAchievement,
    EarnedAchievement,
    LockedAchievement,
    RewardAwardResult,
    RewardsSummary,
    AchievementsOverview,
)

__all__ = [
    "AchievementType",
    "RewardsRecord",
    "AchievementDefinition",
    "UserAchievement",
    "EarnedAchievement",
    "LockedAchievement",
    "RewardAwardResult",
    "RewardsSummary",
    "AchievementsOverview",
]
