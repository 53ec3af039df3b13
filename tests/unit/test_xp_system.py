"""Unit tests for XP and Leveling System (practice_rewards/gamification/xp_system.py)"""
import pytest

from practice_rewards.gamification.xp_system import (
    compute_base_xp,
    compute_streak_bonus,
    level_for_xp,
    xp_threshold_for_level,
    xp_for_level_step,
    calculate_level_progress,
    round_half_up,
)


# ============================================================================
# Base XP Tests
# ============================================================================

def test_compute_base_xp_correct_answer():
    assert compute_base_xp(True, 1) == 10


def test_compute_base_xp_incorrect_answer():
    assert compute_base_xp(False, 1) == 2


def test_compute_base_xp_scales_with_difficulty():
    assert compute_base_xp(True, 3) == 30
    assert compute_base_xp(False, 3) == 6


@pytest.mark.parametrize("difficulty", [None, 0, -2])
def test_compute_base_xp_invalid_difficulty_counts_as_one(difficulty):
    """Missing or non-positive difficulty uses the base award"""
    assert compute_base_xp(True, difficulty) == 10
    assert compute_base_xp(False, difficulty) == 2


@pytest.mark.parametrize("difficulty", [float("nan"), float("inf"), float("-inf")])
def test_compute_base_xp_non_finite_difficulty_counts_as_one(difficulty):
    assert compute_base_xp(True, difficulty) == 10
    assert compute_base_xp(False, difficulty) == 2


def test_compute_base_xp_fractional_difficulty_rounds_half_up():
    """2 * 1.25 = 2.5 rounds up to 3"""
    assert compute_base_xp(False, 1.25) == 3
    assert compute_base_xp(True, 1.5) == 15


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(2.49) == 2
    assert round_half_up(172.8) == 173


# ============================================================================
# Streak Bonus Tests
# ============================================================================

def test_streak_bonus_day_one_still_earns_ten_percent():
    assert compute_streak_bonus(10, 1) == 1


def test_streak_bonus_five_day_streak():
    assert compute_streak_bonus(10, 5) == 5


def test_streak_bonus_floors():
    """2 XP * 3 days * 10% = 0.6 -> 0"""
    assert compute_streak_bonus(2, 3) == 0
    assert compute_streak_bonus(20, 3) == 6
    assert compute_streak_bonus(15, 7) == 10


def test_streak_bonus_zero_streak():
    assert compute_streak_bonus(10, 0) == 0


# ============================================================================
# Level Curve Tests
# ============================================================================

def test_level_steps_grow_by_twenty_percent():
    assert xp_for_level_step(1) == 0
    assert xp_for_level_step(2) == 100
    assert xp_for_level_step(3) == 120
    assert xp_for_level_step(4) == 144
    assert xp_for_level_step(5) == 173


def test_xp_threshold_for_level():
    assert xp_threshold_for_level(0) == 0
    assert xp_threshold_for_level(1) == 0
    assert xp_threshold_for_level(2) == 100
    assert xp_threshold_for_level(3) == 220
    assert xp_threshold_for_level(4) == 364
    assert xp_threshold_for_level(5) == 537


def test_level_for_xp_boundaries():
    assert level_for_xp(0) == 1
    assert level_for_xp(99) == 1
    assert level_for_xp(100) == 2
    assert level_for_xp(219) == 2
    assert level_for_xp(220) == 3


def test_level_for_xp_negative_is_level_one():
    assert level_for_xp(-50) == 1


@pytest.mark.parametrize("level", range(1, 51))
def test_threshold_and_level_agree(level):
    """Reaching a level's threshold lands exactly on that level"""
    threshold = xp_threshold_for_level(level)
    assert level_for_xp(threshold) == level
    if level > 1:
        assert level_for_xp(threshold - 1) == level - 1


@pytest.mark.parametrize("xp", [0, 1, 50, 99, 100, 101, 219, 220, 999, 5000, 123456])
def test_xp_is_bracketed_by_its_level(xp):
    level = level_for_xp(xp)
    assert xp_threshold_for_level(level) <= xp < xp_threshold_for_level(level + 1)


# ============================================================================
# Level Progress Tests
# ============================================================================

def test_calculate_level_progress_zero():
    result = calculate_level_progress(0)

    assert result["current_level"] == 1
    assert result["xp_in_current_level"] == 0
    assert result["xp_to_next_level"] == 100
    assert result["level_progress"] == 0
    assert result["total_xp_for_next_level"] == 100


def test_calculate_level_progress_mid_level():
    """150 XP: 50 into level 2's 120 XP band"""
    result = calculate_level_progress(150)

    assert result["current_level"] == 2
    assert result["xp_in_current_level"] == 50
    assert result["xp_to_next_level"] == 70
    assert result["level_progress"] == 42
    assert result["total_xp_for_next_level"] == 220


def test_calculate_level_progress_exact_threshold():
    result = calculate_level_progress(220)

    assert result["current_level"] == 3
    assert result["level_progress"] == 0
    assert result["xp_to_next_level"] == 144


# ============================================================================
# High Levels
# ============================================================================

@pytest.mark.parametrize("level", [999, 1000, 1001, 1500])
def test_level_curve_has_no_ceiling(level):
    """Thresholds beyond level 1000 still map back to their own level"""
    threshold = xp_threshold_for_level(level)
    assert level_for_xp(threshold) == level
    assert level_for_xp(threshold - 1) == level - 1


def test_level_progress_stays_in_range_at_high_levels():
    result = calculate_level_progress(xp_threshold_for_level(1200) + 1)

    assert result["current_level"] == 1200
    assert 0 <= result["level_progress"] <= 100
    assert result["xp_to_next_level"] > 0
