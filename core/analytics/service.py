"""
Service layer to assemble the flashcard analytics dashboard.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import pandas as pd

from core.analytics.metrics import (
    build_day_index,
    compute_accuracy,
    compute_daily_reviewed,
    compute_deck_mastery,
    compute_status_counts,
)
from core.analytics.queries import cards_to_df, events_to_df
from core.analytics.types import FlashcardDashboardData, FlashcardStats
from core.srs.constants import CardStatus
from core.srs.store import StudyStore


def build_flashcard_stats(store: StudyStore, now: datetime) -> FlashcardStats:
    """
    Status totals and due count across all of a store's cards.
    """
    counts = compute_status_counts(cards_to_df(store.cards()))
    return FlashcardStats(
        total_cards=sum(counts.values()),
        new=counts[CardStatus.NEW.value],
        learning=counts[CardStatus.LEARNING.value],
        review=counts[CardStatus.REVIEW.value],
        mastered=counts[CardStatus.MASTERED.value],
        to_review=len(store.due_cards(now)),
    )


def build_flashcard_dashboard(
    store: StudyStore,
    now: datetime,
    events_df: Optional[pd.DataFrame] = None
) -> FlashcardDashboardData:
    """
    Build all KPI values and series needed by the flashcard dashboard.

    Args:
        store: Source of current card state
        now: Timestamp used for the due count
        events_df: Review events (see queries.load_review_events_df);
            empty when omitted
    """
    if events_df is None:
        events_df = events_to_df([])

    day_index = build_day_index(events_df)

    return FlashcardDashboardData(
        stats=build_flashcard_stats(store, now),
        deck_mastery=compute_deck_mastery(cards_to_df(store.cards())),
        reviews_daily=compute_daily_reviewed(events_df, day_index),
        accuracy=compute_accuracy(events_df),
    )
