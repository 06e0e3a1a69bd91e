"""Tests for deck counter maintenance."""

from dataclasses import replace

import pytest

from core.srs.aggregates import (
    apply_mastery_transition,
    record_card_added,
    record_card_removed,
    verify_deck_counters,
)
from core.srs.card_state import MasteryTransition, initialize_new_deck
from core.srs.errors import ConsistencyViolation, InvalidInput


@pytest.fixture
def empty_deck(now):
    return initialize_new_deck("Chemistry", now, deck_id="deck-1")


def test_add_and_remove_cards(empty_deck):
    deck = record_card_added(record_card_added(empty_deck))
    assert (deck.card_count, deck.mastered_count) == (2, 0)

    deck = record_card_removed(deck, was_mastered=False)
    assert (deck.card_count, deck.mastered_count) == (1, 0)


def test_removing_mastered_card_decrements_both(empty_deck):
    deck = replace(empty_deck, card_count=3, mastered_count=2)
    deck = record_card_removed(deck, was_mastered=True)
    assert (deck.card_count, deck.mastered_count) == (2, 1)


def test_transitions(empty_deck):
    deck = replace(empty_deck, card_count=2, mastered_count=0)

    deck = apply_mastery_transition(deck, MasteryTransition("deck-1", +1))
    assert deck.mastered_count == 1

    unchanged = apply_mastery_transition(deck, MasteryTransition("deck-1", 0))
    assert unchanged is deck

    deck = apply_mastery_transition(deck, MasteryTransition("deck-1", -1))
    assert deck.mastered_count == 0


def test_functions_return_new_values(empty_deck):
    record_card_added(empty_deck)
    assert empty_deck.card_count == 0


def test_underflow_is_clamped_and_surfaced(empty_deck, caplog):
    with pytest.raises(ConsistencyViolation) as exc_info:
        apply_mastery_transition(empty_deck, MasteryTransition("deck-1", -1))

    assert exc_info.value.repaired.mastered_count == 0
    assert "underflow" in caplog.text


def test_removing_from_empty_deck_is_surfaced(empty_deck):
    with pytest.raises(ConsistencyViolation) as exc_info:
        record_card_removed(empty_deck, was_mastered=False)
    assert exc_info.value.repaired.card_count == 0


def test_mastered_above_card_count_is_surfaced(empty_deck):
    deck = replace(empty_deck, card_count=1, mastered_count=1)
    with pytest.raises(ConsistencyViolation):
        apply_mastery_transition(deck, MasteryTransition("deck-1", +1))


def test_transition_for_other_deck_is_rejected(empty_deck):
    with pytest.raises(InvalidInput):
        apply_mastery_transition(empty_deck, MasteryTransition("deck-2", +1))


def test_transition_delta_must_be_unit(empty_deck):
    deck = replace(empty_deck, card_count=5)
    with pytest.raises(InvalidInput):
        apply_mastery_transition(deck, MasteryTransition("deck-1", 2))


def test_verify_deck_counters(empty_deck, make_card):
    cards = [make_card(level=4), make_card(level=1), make_card(level=2, deck_id="other")]

    assert verify_deck_counters(replace(empty_deck, card_count=2, mastered_count=1), cards) == []

    problems = verify_deck_counters(replace(empty_deck, card_count=3, mastered_count=0), cards)
    assert len(problems) == 2
    assert "card_count is 3, expected 2" in problems[0]
