"""
Selection - Due-card and lookup queries

Read-only filters over card and deck collections. Nothing here mutates
its inputs; results keep the input order.
"""

from __future__ import annotations
from datetime import datetime
from typing import Iterable, Optional

from core.srs.card_state import Flashcard, FlashcardDeck, require_aware
from core.srs.constants import CardStatus


def is_due(card: Flashcard, now: datetime) -> bool:
    """
    Whether a card should be offered for review at `now`.

    Mastered cards are never due, even with a stale next_review_at.
    Never-reviewed cards (next_review_at unset) are always due.
    """
    if card.status == CardStatus.MASTERED:
        return False
    if card.next_review_at is None:
        return True
    return card.next_review_at <= now


def due_cards(
    cards: Iterable[Flashcard],
    now: datetime,
    deck_id: Optional[str] = None
) -> list[Flashcard]:
    """
    Cards eligible for review now.

    Filter order:
    1. Deck scope (if deck_id given)
    2. Drop mastered cards
    3. Keep never-reviewed cards and cards with next_review_at <= now

    Args:
        cards: Cards to filter
        now: Current timestamp (timezone-aware)
        deck_id: Optional deck to restrict to

    Returns:
        Due cards, in input order
    """
    require_aware(now)
    return [
        card for card in cards
        if (deck_id is None or card.deck_id == deck_id) and is_due(card, now)
    ]


def count_due(
    cards: Iterable[Flashcard],
    now: datetime,
    deck_id: Optional[str] = None
) -> int:
    """Number of due cards (see due_cards)."""
    return len(due_cards(cards, now, deck_id))


def cards_by_deck(cards: Iterable[Flashcard], deck_id: str) -> list[Flashcard]:
    return [card for card in cards if card.deck_id == deck_id]


def decks_by_subject(
    decks: Iterable[FlashcardDeck],
    subject_id: str
) -> list[FlashcardDeck]:
    return [deck for deck in decks if deck.subject_id == subject_id]


def deck_next_review_at(
    cards: Iterable[Flashcard],
    deck_id: str
) -> Optional[datetime]:
    """
    Earliest scheduled review among a deck's non-mastered cards.

    Returns None when no card in the deck has a scheduled review.
    """
    scheduled = [
        card.next_review_at for card in cards
        if card.deck_id == deck_id
        and card.status != CardStatus.MASTERED
        and card.next_review_at is not None
    ]
    return min(scheduled) if scheduled else None
