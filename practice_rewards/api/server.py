"""FastAPI application setup"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from practice_rewards import __version__
from practice_rewards.api.routes import router, limiter
from practice_rewards.config import CORS_ORIGINS, LOG_LEVEL, REWARDS_STORE, validate_config
from practice_rewards.db.connection import db
from practice_rewards.exceptions import (
    AuthenticationError,
    ConfigurationError,
    NotAuthenticatedError,
    PersistenceUnavailableError,
    RewardsEngineError,
)
from practice_rewards.services.container import init_container, reset_container

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO)
)

logger = logging.getLogger(__name__)


def _build_store():
    """Store selected by REWARDS_STORE"""
    if REWARDS_STORE == "memory":
        from practice_rewards.gamification.catalog import DEFAULT_CATALOG
        from practice_rewards.gamification.memory_store import InMemoryRewardsStore
        logger.warning("Using in-memory rewards store - progress is NOT persisted")
        return InMemoryRewardsStore(catalog=DEFAULT_CATALOG)

    from practice_rewards.db.store import PostgresRewardsStore
    return PostgresRewardsStore()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for FastAPI application"""
    # Startup
    logger.info("Starting rewards API...")
    validate_config()
    if REWARDS_STORE == "postgres":
        await db.init_pool()
        logger.info("Database pool initialized")
    init_container(_build_store())

    yield

    # Shutdown
    logger.info("Shutting down rewards API...")
    reset_container()
    await db.close_pool()


def _status_for(exc: RewardsEngineError) -> int:
    if isinstance(exc, (PersistenceUnavailableError, ConfigurationError)):
        return 503
    if isinstance(exc, (NotAuthenticatedError, AuthenticationError)):
        return 401
    return 500


def create_api_application(use_lifespan: bool = True) -> FastAPI:
    """
    Create and configure FastAPI application

    Args:
        use_lifespan: Set False when the caller installs the service container itself
    """
    app = FastAPI(
        title="Practice Rewards API",
        description="XP, streaks, levels and achievements for math practice",
        version=__version__,
        lifespan=lifespan if use_lifespan else None
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info(f"CORS configured for origins: {CORS_ORIGINS}")

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.include_router(router)

    @app.exception_handler(RewardsEngineError)
    async def rewards_error_handler(request: Request, exc: RewardsEngineError):
        return JSONResponse(status_code=_status_for(exc), content=exc.to_dict())

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "detail": str(exc)}
        )

    logger.info("FastAPI application created")

    return app
