"""
Aggregates - Deck counter maintenance

Keeps card_count and mastered_count in step with the deck's cards by
applying deltas on creation, deletion and mastery transitions. Counters
are never recomputed by scanning during normal operation.

A counter that would go negative is clamped to 0 and surfaced as a
ConsistencyViolation carrying the clamped deck.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Iterable
import logging

from core.srs.card_state import Flashcard, FlashcardDeck, MasteryTransition
from core.srs.constants import CardStatus
from core.srs.errors import ConsistencyViolation, InvalidInput

logger = logging.getLogger(__name__)


def _adjust(deck: FlashcardDeck, card_delta: int, mastered_delta: int) -> FlashcardDeck:
    """Apply counter deltas, clamping at 0 and raising on underflow."""
    card_count = deck.card_count + card_delta
    mastered_count = deck.mastered_count + mastered_delta

    problems = []
    if card_count < 0:
        problems.append(f"card_count would be {card_count}")
    if mastered_count < 0:
        problems.append(f"mastered_count would be {mastered_count}")

    updated = replace(
        deck,
        card_count=max(0, card_count),
        mastered_count=max(0, mastered_count),
    )

    if problems:
        message = f"Deck {deck.id} counter underflow: " + ", ".join(problems)
        logger.error(message)
        raise ConsistencyViolation(message, repaired=updated)

    if updated.mastered_count > updated.card_count:
        message = (
            f"Deck {deck.id} mastered_count {updated.mastered_count} "
            f"exceeds card_count {updated.card_count}"
        )
        logger.error(message)
        raise ConsistencyViolation(message, repaired=updated)

    return updated


def apply_mastery_transition(
    deck: FlashcardDeck,
    transition: MasteryTransition
) -> FlashcardDeck:
    """
    Apply a review's mastery transition to its deck.

    Returns the deck unchanged (same object) for a zero delta.
    """
    if transition.deck_id != deck.id:
        raise InvalidInput(
            f"Transition for deck {transition.deck_id} applied to deck {deck.id}"
        )
    if transition.delta not in (-1, 0, 1):
        raise InvalidInput(f"Mastery delta must be -1, 0 or +1, got {transition.delta}")
    if transition.is_noop:
        return deck

    logger.debug("Deck %s mastered_count %+d", deck.id, transition.delta)
    return _adjust(deck, 0, transition.delta)


def record_card_added(deck: FlashcardDeck) -> FlashcardDeck:
    """New cards are never mastered, so only card_count moves."""
    return _adjust(deck, +1, 0)


def record_card_removed(deck: FlashcardDeck, was_mastered: bool) -> FlashcardDeck:
    return _adjust(deck, -1, -1 if was_mastered else 0)


def verify_deck_counters(
    deck: FlashcardDeck,
    cards: Iterable[Flashcard]
) -> list[str]:
    """
    Compare stored counters with the true counts over `cards`.

    Returns:
        Human-readable discrepancies (empty list when consistent)
    """
    owned = [card for card in cards if card.deck_id == deck.id]
    true_cards = len(owned)
    true_mastered = sum(1 for card in owned if card.status == CardStatus.MASTERED)

    problems = []
    if deck.card_count != true_cards:
        problems.append(
            f"Deck {deck.id} card_count is {deck.card_count}, expected {true_cards}"
        )
    if deck.mastered_count != true_mastered:
        problems.append(
            f"Deck {deck.id} mastered_count is {deck.mastered_count}, "
            f"expected {true_mastered}"
        )
    return problems
