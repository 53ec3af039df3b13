"""Shared fixtures for API integration tests"""
import pytest
import httpx
from typing import AsyncGenerator, Dict
from uuid import uuid4

from fastapi import FastAPI

from practice_rewards.api.routes import limiter
from practice_rewards.api.server import create_api_application
from practice_rewards.services.container import init_container, reset_container


@pytest.fixture
def test_api_key() -> str:
    """Test API key for authentication"""
    return "test_key_123"


@pytest.fixture
def auth_headers(test_api_key: str) -> Dict[str, str]:
    """Valid authentication headers"""
    return {"Authorization": f"Bearer {test_api_key}"}


@pytest.fixture
def unique_user_id() -> str:
    """Generate unique user ID for test isolation"""
    return f"test_user_{uuid4().hex[:12]}"


@pytest.fixture
def user_headers(auth_headers: Dict[str, str], unique_user_id: str) -> Dict[str, str]:
    """Authentication headers for a signed-in student"""
    return {**auth_headers, "X-User-Id": unique_user_id}


@pytest.fixture
def rewards_app(memory_store, clock, test_api_key, monkeypatch) -> FastAPI:
    """
    Application wired to the in-memory store and a fixed clock.

    Rate limiting is switched off so tests can hit endpoints freely.
    """
    monkeypatch.setenv("API_KEYS", test_api_key)
    monkeypatch.setattr(limiter, "enabled", False)

    init_container(memory_store, clock=clock)
    app = create_api_application(use_lifespan=False)

    yield app

    reset_container()


@pytest.fixture
async def api_client(rewards_app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async HTTP client talking to the app in-process"""
    transport = httpx.ASGITransport(app=rewards_app, raise_app_exceptions=False)
    async with httpx.AsyncClient(
        transport=transport,
        base_url="http://testserver",
        timeout=30.0
    ) as client:
        yield client
