"""
Service Container - Dependency Injection Container

Holds the rewards store and lazily builds the services on top of it.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """
    Simple dependency injection container for services.

    Services are lazy-loaded on first access via properties.
    Infrastructure dependencies (store, clock) are injected.
    """

    store: object  # RewardsStore implementation
    clock: Optional[Callable[[], date]] = None

    _rewards_service: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def rewards_service(self):
        """Get RewardsService instance (lazy-loaded)"""
        if self._rewards_service is None:
            from practice_rewards.services.rewards_service import RewardsService
            self._rewards_service = RewardsService(self.store, clock=self.clock)
            logger.debug("RewardsService instantiated")
        return self._rewards_service


# Global container instance (initialized by the API lifespan)
_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """
    Get the global service container.

    Raises:
        RuntimeError: If container not initialized (call init_container first)
    """
    if _container is None:
        raise RuntimeError(
            "Service container not initialized. "
            "Call init_container() during application startup before using services."
        )
    return _container


def init_container(store: object, clock: Optional[Callable[[], date]] = None) -> ServiceContainer:
    """
    Initialize the global service container.

    Args:
        store: RewardsStore implementation
        clock: Optional override for "today"

    Returns:
        ServiceContainer: The initialized container
    """
    global _container

    _container = ServiceContainer(store=store, clock=clock)
    logger.info(f"Service container initialized with {type(store).__name__}")
    return _container


def reset_container() -> None:
    """Drop the global container (used on shutdown and in tests)"""
    global _container
    _container = None
