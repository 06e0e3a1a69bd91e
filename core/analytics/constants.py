"""
Constants for flashcard analytics.
"""

from __future__ import annotations

from typing import Final

from core.srs.constants import CardStatus


STATUS_ORDER: Final[list[str]] = [status.value for status in CardStatus]

STATUS_LABELS: Final[dict[str, str]] = {
    CardStatus.NEW.value: "New",
    CardStatus.LEARNING.value: "Learning",
    CardStatus.REVIEW.value: "Review",
    CardStatus.MASTERED.value: "Mastered",
}

CARD_COLUMNS: Final[list[str]] = [
    "card_id",
    "deck_id",
    "status",
    "repetition_level",
    "ease_factor",
    "review_count",
    "correct_count",
    "last_reviewed_at",
    "next_review_at",
]

EVENT_COLUMNS: Final[list[str]] = [
    "card_id",
    "deck_id",
    "timestamp",
    "was_correct",
    "day_utc",
]

DECK_MASTERY_COLUMNS: Final[list[str]] = [
    "deck_id",
    "card_count",
    "mastered_count",
    "review_count",
    "correct_count",
    "accuracy",
]
