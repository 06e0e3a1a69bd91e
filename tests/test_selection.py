"""Tests for due-card selection and lookups."""

from datetime import timedelta

from core.srs.card_state import FlashcardDeck
from core.srs.constants import CardStatus
from core.srs.selection import (
    cards_by_deck,
    count_due,
    deck_next_review_at,
    decks_by_subject,
    due_cards,
    is_due,
)


def test_mixed_deck_returns_never_reviewed_and_overdue(make_card, now):
    yesterday = now - timedelta(days=1)
    tomorrow = now + timedelta(days=1)

    mastered = [make_card(level=4 + i % 2, next_review_at=yesterday) for i in range(3)]
    never_reviewed = [make_card(level=0) for _ in range(2)]
    overdue = make_card(level=1, next_review_at=yesterday)
    upcoming = make_card(level=2, next_review_at=tomorrow)

    cards = mastered + never_reviewed + [overdue, upcoming]
    due = due_cards(cards, now, deck_id="deck-1")

    assert [c.id for c in due] == [c.id for c in never_reviewed] + [overdue.id]
    assert count_due(cards, now) == 3


def test_mastered_card_is_never_due(make_card, now):
    card = make_card(level=5, next_review_at=now - timedelta(days=365))
    assert card.status == CardStatus.MASTERED
    assert not is_due(card, now)
    assert due_cards([card], now) == []


def test_unscheduled_card_is_always_due(make_card, now):
    card = make_card(level=0)
    assert card.next_review_at is None
    assert is_due(card, now)


def test_card_due_exactly_now_is_included(make_card, now):
    card = make_card(level=1, next_review_at=now)
    assert due_cards([card], now) == [card]


def test_deck_filter_applies_first(make_card, now):
    mine = make_card(deck_id="deck-a")
    other = make_card(deck_id="deck-b")

    assert due_cards([mine, other], now, deck_id="deck-a") == [mine]
    assert len(due_cards([mine, other], now)) == 2


def test_due_cards_has_no_side_effects(make_card, now):
    cards = [make_card(level=1, next_review_at=now - timedelta(hours=1))]
    before = list(cards)
    due_cards(cards, now)
    assert cards == before


def test_lookups(make_card, now):
    a = make_card(deck_id="deck-a")
    b = make_card(deck_id="deck-b")
    assert cards_by_deck([a, b], "deck-b") == [b]

    decks = [
        FlashcardDeck(id="d1", name="Cells", card_count=0, mastered_count=0,
                      created_at=now, updated_at=now, subject_id="bio"),
        FlashcardDeck(id="d2", name="Verbs", card_count=0, mastered_count=0,
                      created_at=now, updated_at=now, subject_id="dutch"),
    ]
    assert [d.id for d in decks_by_subject(decks, "bio")] == ["d1"]


def test_deck_next_review_skips_mastered_and_unscheduled(make_card, now):
    soon = now + timedelta(days=2)
    later = now + timedelta(days=9)
    cards = [
        make_card(level=5, next_review_at=now - timedelta(days=3)),
        make_card(level=0),
        make_card(level=2, next_review_at=later),
        make_card(level=1, next_review_at=soon),
        make_card(level=1, deck_id="other", next_review_at=now),
    ]
    assert deck_next_review_at(cards, "deck-1") == soon
    assert deck_next_review_at(cards, "empty") is None
