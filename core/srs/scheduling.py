"""
Scheduling - Review outcome, interval and status rules

Pure functions, no state. Each review is evaluated in three steps:
1. evaluate_outcome: (level, ease, correct?) -> (next level, next ease)
2. next_due_date: (next level, next ease, now) -> next review timestamp
3. classify_status: (next level, review count) -> mastery status

Caller-supplied inputs are validated and rejected when out of range.
Clamping applies only to computed outputs.
"""

from __future__ import annotations
from datetime import datetime, timedelta
from typing import Tuple
import math

from core.srs.card_state import require_aware, validate_ease, validate_level
from core.srs.constants import (
    BASE_INTERVAL_DAYS,
    CardStatus,
    EASE_PENALTY,
    EASE_PRECISION,
    EASE_REWARD,
    LEVEL_PENALTY,
    LEVEL_REWARD,
    MASTERED_LEVEL,
    MAX_LEVEL,
    MIN_EASE,
    MIN_LEVEL,
    REVIEW_LEVEL,
)


def evaluate_outcome(
    current_level: int,
    was_correct: bool,
    ease_factor: float
) -> Tuple[int, float]:
    """
    Compute the next repetition level and ease factor.

    Correct recall advances one level and adds 0.1 ease.
    Failed recall drops two levels and removes 0.2 ease.

    Args:
        current_level: Current repetition level (0-5)
        was_correct: Whether the card was recalled correctly
        ease_factor: Current ease factor (>= 1.3)

    Returns:
        Tuple of (next_level, new_ease_factor)

    Raises:
        InvalidInput: level outside [0, 5] or ease below 1.3
    """
    validate_level(current_level)
    validate_ease(ease_factor)

    if was_correct:
        next_level = min(current_level + LEVEL_REWARD, MAX_LEVEL)
        new_ease = ease_factor + EASE_REWARD
    else:
        next_level = max(MIN_LEVEL, current_level - LEVEL_PENALTY)
        new_ease = ease_factor - EASE_PENALTY

    # Rounded so repeated 0.1 / 0.2 steps don't accumulate float drift
    new_ease = max(MIN_EASE, round(new_ease, EASE_PRECISION))
    return next_level, new_ease


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero.

    Python's round() uses banker's rounding (round(2.5) == 2); intervals
    use half-up instead, so 1.5 days -> 2 and 7.5 days -> 8.
    """
    # Strip float noise like 8.100000000000001 before deciding the half
    value = round(value, 9)
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def interval_days(level: int, ease_factor: float) -> int:
    """
    Whole-day interval for a level: round(BASE[level] * ease).

    Level 0 always yields 0 days (due again immediately).
    """
    validate_level(level)
    validate_ease(ease_factor)
    return round_half_up(BASE_INTERVAL_DAYS[level] * ease_factor)


def next_due_date(
    next_level: int,
    new_ease_factor: float,
    now: datetime
) -> datetime:
    """
    Absolute timestamp when a card becomes due again.

    Args:
        next_level: Level after the review
        new_ease_factor: Ease after the review
        now: Review timestamp (timezone-aware, supplied by caller)

    Returns:
        now + interval_days(next_level, new_ease_factor) days
    """
    require_aware(now)
    return now + timedelta(days=interval_days(next_level, new_ease_factor))


def classify_status(level: int, review_count: int) -> CardStatus:
    """
    Map a repetition level to a mastery status.

    A card that has never been reviewed is NEW regardless of level.
    Otherwise: level >= 4 -> MASTERED, 2-3 -> REVIEW, 0-1 -> LEARNING.
    """
    validate_level(level)

    if review_count == 0:
        return CardStatus.NEW
    if level >= MASTERED_LEVEL:
        return CardStatus.MASTERED
    if level >= REVIEW_LEVEL:
        return CardStatus.REVIEW
    return CardStatus.LEARNING
