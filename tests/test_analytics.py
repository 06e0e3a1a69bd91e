"""Tests for flashcard dashboard analytics."""

from datetime import timedelta

import pandas as pd
import pytest

from core.analytics import build_flashcard_dashboard
from core.analytics.metrics import compute_status_counts
from core.analytics.queries import cards_to_df, events_to_df, load_review_events_df
from core.analytics.service import build_flashcard_stats
from core.srs import database


def _review_history(store, deck, now):
    cards = [store.add_card(deck.id, f"q{i}", "a", now) for i in range(3)]
    events = []
    for day, (card, correct) in enumerate([
        (cards[0], True), (cards[0], True), (cards[1], False), (cards[0], True), (cards[0], True),
    ]):
        when = now + timedelta(days=day * 2)
        events.append(store.review_card(card.id, correct, when).event)
    return cards, events


def test_stats_count_statuses_and_due(store, deck, now):
    _review_history(store, deck, now)

    stats = build_flashcard_stats(store, now + timedelta(days=10))

    assert stats.total_cards == 3
    assert stats.mastered == 1
    assert stats.learning == 1
    assert stats.new == 1
    assert stats.review == 0
    # failed card and never-reviewed card; the mastered card is excluded
    assert stats.to_review == 2


def test_dashboard_series(store, deck, now):
    _, events = _review_history(store, deck, now)

    dashboard = build_flashcard_dashboard(store, now, events_to_df(events))

    assert dashboard.accuracy == pytest.approx(4 / 5)
    assert len(dashboard.reviews_daily) == 9
    assert int(dashboard.reviews_daily.sum()) == 5
    assert int(dashboard.reviews_daily.iloc[1]) == 0

    row = dashboard.deck_mastery.set_index("deck_id").loc[deck.id]
    assert row["card_count"] == 3
    assert row["mastered_count"] == 1
    assert row["review_count"] == 5
    assert row["accuracy"] == pytest.approx(4 / 5)


def test_empty_inputs(store, now):
    dashboard = build_flashcard_dashboard(store, now)

    assert dashboard.stats.total_cards == 0
    assert dashboard.accuracy == 0.0
    assert dashboard.reviews_daily.empty
    assert dashboard.deck_mastery.empty
    assert compute_status_counts(cards_to_df([])) == {
        "new": 0, "learning": 0, "review": 0, "mastered": 0,
    }


def test_events_load_from_database(sqlite_db, store, deck, now):
    card = store.add_card(deck.id, "q", "a", now)
    database.save_store(store, "user-1")
    database.persist_review(store.review_card(card.id, True, now), "user-1")

    df = load_review_events_df("user-1")

    assert list(df["card_id"]) == [card.id]
    assert bool(df["was_correct"].iloc[0]) is True
    assert df["day_utc"].iloc[0] == pd.Timestamp("2026-03-01", tz="UTC")
