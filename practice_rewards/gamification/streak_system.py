"""
Daily Streak Tracking

A streak counts consecutive calendar days with at least one answered problem:
- First activity ever starts the streak at 1
- Another answer on the same day leaves it unchanged
- An answer on the next day extends it by 1
- Any longer gap restarts it at 1 (today still counts)

The day gap is measured as an absolute difference, so a backdated activity
date is treated the same as a future one. That case is logged rather than
corrected.
"""

from typing import Optional, Union
from datetime import date, datetime
import logging

logger = logging.getLogger(__name__)


def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(last_activity_date: Union[date, datetime], today: Union[date, datetime]) -> int:
    """Whole-day distance between two dates, ignoring order"""
    return abs((_as_date(today) - _as_date(last_activity_date)).days)


def update_streak(
    last_activity_date: Optional[Union[date, datetime]],
    today: Union[date, datetime],
    current_streak: int
) -> int:
    """
    Derive the new streak length for activity on `today`

    Args:
        last_activity_date: Date of the previous answer, None if there was none
        today: Date of the current answer
        current_streak: Streak length before this answer

    Returns:
        New streak length
    """
    if last_activity_date is None:
        return 1

    if _as_date(today) < _as_date(last_activity_date):
        logger.warning(
            f"Activity date {_as_date(today)} is before last activity "
            f"{_as_date(last_activity_date)}; comparing by absolute day difference"
        )

    gap_days = days_between(last_activity_date, today)

    if gap_days == 0:
        return current_streak
    if gap_days == 1:
        return current_streak + 1

    logger.debug(f"Streak broken after {gap_days} days (was {current_streak})")
    return 1
