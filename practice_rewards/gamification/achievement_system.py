"""
Achievement System

Evaluates the achievement catalog against a user's rewards record:
- streak: current streak reaches the required number of days
- xp: total XP reaches the required amount
- problems_solved: answered problems reach the required count
- accuracy: accuracy percentage reaches the requirement, once at least
  MIN_ACCURACY_SAMPLE problems have been answered

Evaluation is pure. Persisting newly earned achievements is up to the caller,
which must pass the updated earned set on later calls so nothing unlocks twice.
Unknown achievement types never qualify and never stop the evaluation.
"""

from typing import Dict, Iterable, List, Set
import logging

from practice_rewards.exceptions import InconsistentCatalogError
from practice_rewards.gamification.xp_system import round_half_up
from practice_rewards.models.rewards import (
    AchievementDefinition,
    AchievementType,
    RewardsRecord,
)

logger = logging.getLogger(__name__)

MIN_ACCURACY_SAMPLE = 20

# Unknown achievement types already warned about in this process
_reported_unknown_types: Set[str] = set()


def calculate_accuracy(record: RewardsRecord) -> int:
    """Percentage of correct answers, 0 when nothing has been answered"""
    if record.total_problems_solved <= 0:
        return 0
    return round_half_up(100 * record.total_correct_answers / record.total_problems_solved)


def _current_value(record: RewardsRecord, achievement: AchievementDefinition) -> int:
    """Statistic an achievement is measured against"""
    achievement_type = achievement.achievement_type

    if achievement_type == AchievementType.STREAK.value:
        return record.current_streak
    if achievement_type == AchievementType.XP.value:
        return record.xp_points
    if achievement_type == AchievementType.PROBLEMS_SOLVED.value:
        return record.total_problems_solved
    if achievement_type == AchievementType.ACCURACY.value:
        return calculate_accuracy(record)

    raise InconsistentCatalogError(
        message=f"Unknown achievement type '{achievement_type}'",
        user_id=record.user_id,
        operation="evaluate_achievements",
        achievement_id=achievement.id,
        achievement_type=achievement_type,
    )


def is_achieved(record: RewardsRecord, achievement: AchievementDefinition) -> bool:
    """
    Check a single definition against the record

    Raises:
        InconsistentCatalogError: If the achievement type is unknown
    """
    current = _current_value(record, achievement)

    if achievement.achievement_type == AchievementType.ACCURACY.value:
        if record.total_problems_solved < MIN_ACCURACY_SAMPLE:
            return False

    return current >= achievement.required_value


def evaluate(
    record: RewardsRecord,
    catalog: Iterable[AchievementDefinition],
    already_earned: Set[str]
) -> List[AchievementDefinition]:
    """
    Find achievements the record qualifies for that are not yet earned

    Args:
        record: Freshly updated rewards record
        catalog: All achievement definitions
        already_earned: Achievement IDs the user already holds

    Returns:
        Newly qualifying definitions, in catalog order
    """
    newly_qualified = []

    for achievement in catalog:
        if achievement.id in already_earned:
            continue

        try:
            if is_achieved(record, achievement):
                newly_qualified.append(achievement)
        except InconsistentCatalogError as e:
            if e.achievement_type not in _reported_unknown_types:
                _reported_unknown_types.add(e.achievement_type)
                logger.warning(
                    f"Skipping achievements of unknown type '{e.achievement_type}' "
                    f"(first seen on {achievement.id})"
                )
            continue

    return newly_qualified


def achievement_progress(record: RewardsRecord, achievement: AchievementDefinition) -> Dict:
    """
    Calculate progress toward an achievement

    Returns:
        {
            'current': int,
            'required': float,
            'percentage': int,
            'description': str
        }
    """
    try:
        current = _current_value(record, achievement)
    except InconsistentCatalogError:
        current = 0

    required = achievement.required_value
    percentage = min(100, int(current / required * 100)) if required > 0 else 0

    if (
        achievement.achievement_type == AchievementType.ACCURACY.value
        and record.total_problems_solved < MIN_ACCURACY_SAMPLE
    ):
        # Accuracy only counts once the sample is large enough
        percentage = min(percentage, int(record.total_problems_solved / MIN_ACCURACY_SAMPLE * 100))

    return {
        'current': current,
        'required': required,
        'percentage': percentage,
        'description': f"{current}/{required:g}"
    }
