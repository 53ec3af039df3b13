"""Pydantic models for API request/response validation"""
from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime

from practice_rewards.gamification.xp_system import MAX_DIFFICULTY


class AnswerRequest(BaseModel):
    """An answered practice problem"""
    is_correct: bool = Field(..., description="Whether the student's answer matched the stored answer")
    difficulty: Optional[float] = Field(
        default=1,
        le=MAX_DIFFICULTY,
        allow_inf_nan=False,
        description="Problem difficulty; finite, at most 100; missing or non-positive values count as 1"
    )
    problem_id: Optional[str] = Field(default=None, description="Answered problem, for logging only")


class HealthCheckResponse(BaseModel):
    """Health check response"""
    status: str = Field(..., description="Service status")
    database: str = Field(..., description="Store connection status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response model"""
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    user_message: Optional[str] = Field(None, description="Message safe to show the student")
    request_id: Optional[str] = Field(None, description="Request ID for tracing")
    timestamp: datetime = Field(default_factory=datetime.now)
