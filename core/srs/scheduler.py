"""
Scheduler - Flashcard Review Logic

Pure review processing (no database calls, no shared state).

Main workflow:
1. Load card (caller's responsibility)
2. Evaluate outcome -> next level and ease
3. Translate level into next review timestamp
4. Classify new status
5. Return updated card + mastery transition + event record

This module handles ONLY the algorithm logic.
State ownership is handled by the store module, I/O by the database module.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import datetime

from core.srs import scheduling
from core.srs.card_state import (
    Flashcard,
    MasteryTransition,
    ReviewEvent,
    require_aware,
    validate_ease,
    validate_level,
)
from core.srs.constants import CardStatus
from core.srs.errors import ConsistencyViolation


@dataclass(frozen=True)
class ReviewResult:
    """Outcome of reviewing one card."""
    card: Flashcard
    transition: MasteryTransition
    event: ReviewEvent


def validate_card(card: Flashcard) -> Flashcard:
    """
    Check a card's scheduling fields before it enters the engine.

    Raises:
        InvalidInput: level or ease out of range, or a naive timestamp
        ConsistencyViolation: counts or status contradict each other
    """
    validate_level(card.repetition_level)
    validate_ease(card.ease_factor)
    for name in ("created_at", "updated_at", "last_reviewed_at", "next_review_at"):
        value = getattr(card, name)
        if value is not None:
            require_aware(value, f"Card {card.id} {name}")

    if card.review_count < 0 or card.correct_count < 0:
        raise ConsistencyViolation(
            f"Card {card.id} has negative review counts "
            f"(reviews={card.review_count}, correct={card.correct_count})"
        )
    if card.correct_count > card.review_count:
        raise ConsistencyViolation(
            f"Card {card.id} has correct_count {card.correct_count} "
            f"> review_count {card.review_count}"
        )

    expected = scheduling.classify_status(card.repetition_level, card.review_count)
    if card.status != expected:
        raise ConsistencyViolation(
            f"Card {card.id} has status {card.status.value!r} "
            f"but level {card.repetition_level} implies {expected.value!r}"
        )
    return card


def mastery_transition(
    deck_id: str,
    status_before: CardStatus,
    status_after: CardStatus
) -> MasteryTransition:
    """
    Deck counter change for a status change.

    +1 when entering MASTERED, -1 when leaving it, 0 otherwise.
    """
    was_mastered = status_before == CardStatus.MASTERED
    is_mastered = status_after == CardStatus.MASTERED

    if not was_mastered and is_mastered:
        return MasteryTransition(deck_id, +1)
    if was_mastered and not is_mastered:
        return MasteryTransition(deck_id, -1)
    return MasteryTransition(deck_id, 0)


def review_card(
    card: Flashcard,
    was_correct: bool,
    now: datetime
) -> ReviewResult:
    """
    Process a review and return the updated card, transition and event.

    The input card is never modified. Caller is responsible for:
    1. Serializing reviews of the same card
    2. Saving the returned card
    3. Applying the transition to the owning deck
    4. Persisting the event

    Args:
        card: Current card state
        was_correct: Whether recall was correct
        now: Review timestamp (timezone-aware)

    Returns:
        ReviewResult with updated card, MasteryTransition and ReviewEvent
    """
    require_aware(now)
    validate_card(card)

    next_level, new_ease = scheduling.evaluate_outcome(
        card.repetition_level,
        was_correct,
        card.ease_factor
    )
    days = scheduling.interval_days(next_level, new_ease)
    next_review_at = scheduling.next_due_date(next_level, new_ease, now)

    review_count = card.review_count + 1
    new_status = scheduling.classify_status(next_level, review_count)

    updated = replace(
        card,
        status=new_status,
        repetition_level=next_level,
        ease_factor=new_ease,
        review_count=review_count,
        correct_count=card.correct_count + (1 if was_correct else 0),
        last_reviewed_at=now,
        next_review_at=next_review_at,
        updated_at=now,
        tags=list(card.tags),
    )

    event = ReviewEvent(
        card_id=card.id,
        deck_id=card.deck_id,
        timestamp=now,
        was_correct=bool(was_correct),
        level_before=card.repetition_level,
        level_after=next_level,
        ease_before=card.ease_factor,
        ease_after=new_ease,
        status_before=card.status,
        status_after=new_status,
        interval_days=days,
        next_review_at=next_review_at,
    )

    transition = mastery_transition(card.deck_id, card.status, new_status)
    return ReviewResult(card=updated, transition=transition, event=event)
