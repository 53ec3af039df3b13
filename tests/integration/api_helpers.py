"""Helper utilities for API integration tests"""
from typing import Dict, Any, Optional
import httpx
from datetime import datetime


def assert_success_response(response: httpx.Response, expected_status: int = 200):
    """Assert that response is successful with expected status code"""
    assert response.status_code == expected_status, (
        f"Expected status {expected_status}, got {response.status_code}. "
        f"Response: {response.text}"
    )


def assert_error_response(
    response: httpx.Response,
    expected_status: int,
    expected_error_key: Optional[str] = None
):
    """Assert that response is an error with expected status code"""
    assert response.status_code == expected_status, (
        f"Expected status {expected_status}, got {response.status_code}. "
        f"Response: {response.text}"
    )

    if expected_error_key:
        data = response.json()
        assert expected_error_key in data or "detail" in data, (
            f"Expected error key '{expected_error_key}' or 'detail' in response"
        )


def assert_has_keys(data: Dict[str, Any], required_keys: list):
    """Assert that dictionary contains all required keys"""
    for key in required_keys:
        assert key in data, f"Missing required key: {key}"


def assert_valid_timestamp(timestamp_str: str):
    """Assert that string is a valid ISO8601 timestamp"""
    try:
        datetime.fromisoformat(timestamp_str.replace('Z', '+00:00'))
    except (ValueError, AttributeError):
        raise AssertionError(f"Invalid timestamp format: {timestamp_str}")


def assert_valid_award(award: Dict[str, Any]):
    """Assert that an answer award has expected structure"""
    assert_has_keys(award, ["xp_earned", "base_xp", "streak_bonus", "current_streak", "new_achievements"])
    assert award["xp_earned"] == award["base_xp"] + award["streak_bonus"], (
        "xp_earned should be base XP plus streak bonus"
    )
    assert award["current_streak"] >= 1, "Streak should be at least 1 after an answer"


def assert_valid_summary(summary: Dict[str, Any]):
    """Assert that a rewards summary has expected structure"""
    required_keys = [
        "user_id", "xp_points", "current_level", "level_progress",
        "xp_to_next_level", "current_streak", "total_problems_solved",
        "total_correct_answers", "achievements_count"
    ]
    assert_has_keys(summary, required_keys)
    assert summary["xp_points"] >= 0, "XP should be non-negative"
    assert summary["current_level"] >= 1, "Level should be at least 1"
    assert 0 <= summary["level_progress"] <= 100, "Level progress is a percentage"
