"""Global test fixtures and utilities for practice-rewards tests"""
import pytest
from datetime import date, timedelta

from practice_rewards.gamification.catalog import DEFAULT_CATALOG
from practice_rewards.gamification.memory_store import InMemoryRewardsStore
from practice_rewards.models.rewards import AchievementDefinition, RewardsRecord
from practice_rewards.services.rewards_service import RewardsService


# ============================================================================
# Clock
# ============================================================================

class FakeClock:
    """Callable clock whose date tests can move forward"""

    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today

    def advance(self, days: int = 1) -> None:
        self.today = self.today + timedelta(days=days)


@pytest.fixture
def today():
    """Fixed 'today' for streak calculations"""
    return date(2024, 3, 15)


@pytest.fixture
def clock(today):
    return FakeClock(today)


# ============================================================================
# User & Record Fixtures
# ============================================================================

@pytest.fixture
def test_user_id():
    """Standard test user ID"""
    return "student-123"


@pytest.fixture
def make_record(test_user_id):
    """Build a RewardsRecord with overrides"""
    def _make(**overrides):
        fields = {"user_id": test_user_id}
        fields.update(overrides)
        return RewardsRecord(**fields)
    return _make


# ============================================================================
# Achievement Catalog Fixtures
# ============================================================================

@pytest.fixture
def achievement_catalog():
    """Copy of the default catalog"""
    return [a.model_copy() for a in DEFAULT_CATALOG]


@pytest.fixture
def catalog_by_id(achievement_catalog):
    return {a.id: a for a in achievement_catalog}


@pytest.fixture
def unknown_type_achievement():
    """Catalog entry the evaluator does not understand"""
    return AchievementDefinition(
        id="topic-master",
        achievement_type="topic_mastery",
        required_value=1,
        name="Topic Master",
        description="Finish every problem in a topic",
    )


# ============================================================================
# Store & Service Fixtures
# ============================================================================

@pytest.fixture
def memory_store(achievement_catalog):
    """In-memory store seeded with the default catalog"""
    return InMemoryRewardsStore(catalog=achievement_catalog)


@pytest.fixture
def rewards_service(memory_store, clock):
    """RewardsService on the in-memory store with a fixed clock"""
    return RewardsService(memory_store, clock=clock)
