"""Rewards models for gamification"""
from enum import Enum
from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import date, datetime


class AchievementType(str, Enum):
    """Achievement types understood by the evaluator"""
    STREAK = "streak"
    XP = "xp"
    PROBLEMS_SOLVED = "problems_solved"
    ACCURACY = "accuracy"


class RewardsRecord(BaseModel):
    """Per-user gamification aggregate"""
    user_id: str
    xp_points: int = Field(default=0, ge=0)
    current_streak: int = Field(default=0, ge=0)
    last_activity_date: Optional[date] = None
    current_level: int = Field(default=1, ge=1)
    total_problems_solved: int = Field(default=0, ge=0)
    total_correct_answers: int = Field(default=0, ge=0)
    updated_at: Optional[datetime] = None

    @model_validator(mode="after")
    def _correct_within_solved(self):
        if self.total_correct_answers > self.total_problems_solved:
            raise ValueError("total_correct_answers cannot exceed total_problems_solved")
        return self

    @classmethod
    def empty(cls, user_id: str) -> "RewardsRecord":
        """Zero state for a user with no history"""
        return cls(user_id=user_id)


class AchievementDefinition(BaseModel):
    """Achievement catalog entry. achievement_type is free-form so the catalog stays extensible."""
    id: str
    achievement_type: str
    required_value: float
    name: str
    description: str = ""
    icon: str = "🏆"


class UserAchievement(BaseModel):
    """User's earned achievement"""
    user_id: str
    achievement_id: str
    earned_at: datetime


class EarnedAchievement(AchievementDefinition):
    earned_at: datetime


class LockedAchievement(AchievementDefinition):
    progress: Optional[dict] = None


class RewardAwardResult(BaseModel):
    """Outcome of a single answered problem"""
    xp_earned: int
    base_xp: int
    streak_bonus: int
    current_streak: int
    current_level: int = 1
    leveled_up: bool = False
    new_achievements: list[AchievementDefinition] = Field(default_factory=list)


class RewardsSummary(BaseModel):
    """Dashboard view of a user's rewards"""
    user_id: str
    xp_points: int
    current_streak: int
    last_activity_date: Optional[date] = None
    current_level: int
    total_problems_solved: int
    total_correct_answers: int
    accuracy: int
    level_progress: int
    xp_to_next_level: int
    achievements_count: int


class AchievementsOverview(BaseModel):
    """Catalog split by what the user has earned"""
    earned: list[EarnedAchievement] = Field(default_factory=list)
    unearned: list[LockedAchievement] = Field(default_factory=list)
