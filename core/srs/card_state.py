"""
Card State - Flashcard and Deck records

Defines the value types the review engine reads and returns.

Key concepts:
- Repetition level (0-5): spaced-repetition stage, higher = longer intervals
- Ease factor (>= 1.3): multiplier applied to the base interval
- Status: new / learning / review / mastered, derived from level
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
import math
import uuid

from core.srs.constants import (
    CardDifficulty,
    CardStatus,
    INITIAL_EASE,
    MAX_LEVEL,
    MIN_EASE,
    MIN_LEVEL,
)
from core.srs.errors import InvalidInput


@dataclass
class Flashcard:
    """
    A single question/answer pair under spaced repetition.

    Scheduling fields (status, repetition_level, ease_factor, counts,
    review timestamps) only change through a review.
    """
    id: str
    deck_id: str
    front: str
    back: str

    # Scheduling state
    status: CardStatus
    repetition_level: int  # 0-5
    ease_factor: float  # >= 1.3

    # Review tracking
    review_count: int
    correct_count: int
    last_reviewed_at: Optional[datetime]
    next_review_at: Optional[datetime]  # None = never reviewed, due now

    created_at: datetime
    updated_at: datetime

    # Content extras
    hint: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    difficulty: CardDifficulty = CardDifficulty.MEDIUM

    @property
    def is_mastered(self) -> bool:
        return self.status == CardStatus.MASTERED


@dataclass
class FlashcardDeck:
    """
    A named collection of cards.

    card_count and mastered_count are maintained incrementally and must
    always equal the true counts over the deck's cards.
    """
    id: str
    name: str
    card_count: int
    mastered_count: int
    created_at: datetime
    updated_at: datetime

    subject_id: Optional[str] = None
    goal_id: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    last_reviewed_at: Optional[datetime] = None


@dataclass(frozen=True)
class MasteryTransition:
    """Change to a deck's mastered_count caused by one review."""
    deck_id: str
    delta: int  # -1, 0 or +1

    @property
    def is_noop(self) -> bool:
        return self.delta == 0


@dataclass(frozen=True)
class ReviewEvent:
    """Log entry for a single review, capturing state before and after."""
    card_id: str
    deck_id: str
    timestamp: datetime
    was_correct: bool

    level_before: int
    level_after: int
    ease_before: float
    ease_after: float
    status_before: CardStatus
    status_after: CardStatus

    interval_days: int
    next_review_at: datetime


def new_id() -> str:
    """Generate a uuid4 string identifier."""
    return str(uuid.uuid4())


def require_aware(timestamp: datetime, name: str = "now") -> datetime:
    """Reject naive datetimes; all engine timestamps carry a timezone."""
    if not isinstance(timestamp, datetime):
        raise InvalidInput(f"{name} must be a datetime, got {type(timestamp).__name__}")
    if timestamp.tzinfo is None or timestamp.utcoffset() is None:
        raise InvalidInput(f"{name} must be timezone-aware")
    return timestamp


def validate_level(level: int) -> int:
    """Check that a caller-supplied repetition level is an int in [0, 5]."""
    if isinstance(level, bool) or not isinstance(level, int):
        raise InvalidInput(f"Repetition level must be an int, got {level!r}")
    if level < MIN_LEVEL or level > MAX_LEVEL:
        raise InvalidInput(
            f"Repetition level {level} outside [{MIN_LEVEL}, {MAX_LEVEL}]"
        )
    return level


def validate_ease(ease_factor: float) -> float:
    """Check that a caller-supplied ease factor is finite and >= MIN_EASE."""
    if isinstance(ease_factor, bool) or not isinstance(ease_factor, (int, float)):
        raise InvalidInput(f"Ease factor must be a number, got {ease_factor!r}")
    if not math.isfinite(ease_factor) or ease_factor < MIN_EASE:
        raise InvalidInput(f"Ease factor {ease_factor} below minimum {MIN_EASE}")
    return float(ease_factor)


def initialize_new_card(
    deck_id: str,
    front: str,
    back: str,
    now: datetime,
    hint: Optional[str] = None,
    tags: Optional[list[str]] = None,
    difficulty: CardDifficulty = CardDifficulty.MEDIUM,
    card_id: Optional[str] = None
) -> Flashcard:
    """
    Initialize a never-reviewed card.

    Returns:
        New Flashcard in status NEW, level 0, ease 2.5
    """
    require_aware(now)

    return Flashcard(
        id=card_id or new_id(),
        deck_id=deck_id,
        front=front,
        back=back,
        status=CardStatus.NEW,
        repetition_level=MIN_LEVEL,
        ease_factor=INITIAL_EASE,
        review_count=0,
        correct_count=0,
        last_reviewed_at=None,
        next_review_at=None,
        created_at=now,
        updated_at=now,
        hint=hint,
        tags=list(tags or []),
        difficulty=CardDifficulty(difficulty),
    )


def initialize_new_deck(
    name: str,
    now: datetime,
    subject_id: Optional[str] = None,
    goal_id: Optional[str] = None,
    description: Optional[str] = None,
    color: Optional[str] = None,
    deck_id: Optional[str] = None
) -> FlashcardDeck:
    """Initialize an empty deck with zeroed counters."""
    require_aware(now)
    if not name or not name.strip():
        raise InvalidInput("Deck name must not be empty")

    return FlashcardDeck(
        id=deck_id or new_id(),
        name=name,
        card_count=0,
        mastered_count=0,
        created_at=now,
        updated_at=now,
        subject_id=subject_id,
        goal_id=goal_id,
        description=description,
        color=color,
    )
