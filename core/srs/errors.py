"""
Errors raised by the flashcard review engine.

- InvalidInput: the caller broke a precondition (bad level, bad ease,
  unknown id). Raised before any state changes.
- ConsistencyViolation: stored data contradicts an invariant (negative
  deck counters, correct_count > review_count). Indicates an upstream bug.
"""

from __future__ import annotations

from typing import Any, Optional


class InvalidInput(ValueError):
    """Caller-supplied input violates a precondition."""


class CardNotFound(InvalidInput):
    """No flashcard exists with the requested id."""

    def __init__(self, card_id: str):
        super().__init__(f"Unknown flashcard id: {card_id}")
        self.card_id = card_id


class DeckNotFound(InvalidInput):
    """No deck exists with the requested id."""

    def __init__(self, deck_id: str):
        super().__init__(f"Unknown deck id: {deck_id}")
        self.deck_id = deck_id


class ConsistencyViolation(RuntimeError):
    """
    Stored state broke an invariant.

    `repaired` holds the clamped value (e.g. a deck whose
    counter was floored at 0) so the caller can still persist it.
    """

    def __init__(self, message: str, repaired: Optional[Any] = None):
        super().__init__(message)
        self.repaired = repaired
