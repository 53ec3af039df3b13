"""API key authentication and caller identity"""
import hmac
import os
import logging
from typing import Optional
from fastapi import Header, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from practice_rewards.exceptions import AuthenticationError, ConfigurationError

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_api_keys() -> list[str]:
    """API keys from API_KEYS (comma separated), read per request so rotation needs no restart"""
    return [key.strip() for key in os.getenv("API_KEYS", "").split(",") if key.strip()]


async def verify_api_key(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """
    Check the bearer token against the configured API keys

    Raises:
        ConfigurationError: When no keys are configured (503)
        AuthenticationError: For an unknown key (401)
    """
    api_key = credentials.credentials
    valid_keys = get_api_keys()

    if not valid_keys:
        raise ConfigurationError(
            "No API keys configured - rejecting all requests",
            config_key="API_KEYS",
            operation="verify_api_key"
        )

    if not any(hmac.compare_digest(api_key.encode(), key.encode()) for key in valid_keys):
        logger.warning(f"Rejected API key {api_key[:6]}...")
        raise AuthenticationError(
            "Invalid API key",
            operation="verify_api_key"
        )

    return api_key


async def get_current_user(
    x_user_id: Optional[str] = Header(default=None)
) -> Optional[str]:
    """
    Signed-in student forwarded by the auth gateway in X-User-Id

    Returns:
        The user ID, or None for anonymous requests
    """
    if x_user_id is None:
        return None
    return x_user_id.strip() or None
