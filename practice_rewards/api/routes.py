"""API routes for the rewards engine"""
import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from practice_rewards.api.auth import verify_api_key, get_current_user
from practice_rewards.api.models import AnswerRequest, HealthCheckResponse, ErrorResponse
from practice_rewards.config import ANSWER_RATE_LIMIT, READ_RATE_LIMIT
from practice_rewards.exceptions import NotAuthenticatedError
from practice_rewards.models.rewards import (
    AchievementsOverview,
    RewardAwardResult,
    RewardsSummary,
)
from practice_rewards.services.container import get_container
from practice_rewards.services.rewards_service import RewardsService

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter()

ERROR_RESPONSES = {
    503: {"model": ErrorResponse, "description": "Persistence layer unavailable"},
    500: {"model": ErrorResponse, "description": "Unexpected engine error"},
}


def get_rewards_service() -> RewardsService:
    """Resolve the RewardsService from the service container"""
    return get_container().rewards_service


@router.post("/api/v1/answers", response_model=Optional[RewardAwardResult], responses=ERROR_RESPONSES)
@limiter.limit(ANSWER_RATE_LIMIT)
async def record_answer(
    request: Request,
    answer: AnswerRequest,
    user_id: Optional[str] = Depends(get_current_user),
    api_key: str = Depends(verify_api_key),
    service: RewardsService = Depends(get_rewards_service)
):
    """
    Apply an answered problem to the caller's rewards

    Returns null for anonymous callers (no X-User-Id header).
    """
    if answer.problem_id:
        logger.debug(f"Answer for problem {answer.problem_id} from user {user_id}")

    return await service.record_answer(user_id, answer.is_correct, answer.difficulty)


@router.get("/api/v1/me/rewards", response_model=RewardsSummary, responses=ERROR_RESPONSES)
@limiter.limit(READ_RATE_LIMIT)
async def get_my_rewards(
    request: Request,
    user_id: Optional[str] = Depends(get_current_user),
    api_key: str = Depends(verify_api_key),
    service: RewardsService = Depends(get_rewards_service)
):
    """Rewards summary for the signed-in student"""
    if not user_id:
        raise NotAuthenticatedError(operation="get_my_rewards")
    return await service.get_summary(user_id)


@router.get("/api/v1/users/{user_id}/rewards", response_model=RewardsSummary, responses=ERROR_RESPONSES)
@limiter.limit(READ_RATE_LIMIT)
async def get_rewards(
    request: Request,
    user_id: str,
    api_key: str = Depends(verify_api_key),
    service: RewardsService = Depends(get_rewards_service)
):
    """Rewards summary: XP, level progress, streak, totals, achievement count"""
    return await service.get_summary(user_id)


@router.get("/api/v1/users/{user_id}/achievements", response_model=AchievementsOverview, responses=ERROR_RESPONSES)
@limiter.limit(READ_RATE_LIMIT)
async def get_achievements(
    request: Request,
    user_id: str,
    include_progress: bool = False,
    api_key: str = Depends(verify_api_key),
    service: RewardsService = Depends(get_rewards_service)
):
    """Earned and unearned achievements, optionally with progress toward the unearned ones"""
    return await service.get_achievements(user_id, include_progress=include_progress)


@router.get("/api/health", response_model=HealthCheckResponse)
async def health_check(request: Request):
    """Health check endpoint"""
    try:
        store_ok = await get_container().store.ping()
    except RuntimeError as e:
        logger.error(f"Health check failed: {e}")
        store_ok = False

    return HealthCheckResponse(
        status="healthy" if store_ok else "degraded",
        database="connected" if store_ok else "disconnected",
        timestamp=datetime.now()
    )
