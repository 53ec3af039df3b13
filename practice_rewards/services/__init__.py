"""
Service layer for the rewards engine

Services:
- RewardsService: answer recording, summaries, achievements
"""

from practice_rewards.services.rewards_service import RewardsService
from practice_rewards.services.container import (
    ServiceContainer,
    get_container,
    init_container,
    reset_container,
)

__all__ = [
    "RewardsService",
    "ServiceContainer",
    "get_container",
    "init_container",
    "reset_container",
]
