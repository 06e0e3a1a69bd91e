"""
Data-loading helpers for analytics.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Iterable, Optional, Union

import pandas as pd

from core.analytics.constants import CARD_COLUMNS, EVENT_COLUMNS
from core.srs import database
from core.srs.card_state import Flashcard, ReviewEvent


def cards_to_df(cards: Iterable[Flashcard]) -> pd.DataFrame:
    """
    Flatten cards into a dataframe with one row per card.
    """
    rows = [
        {
            "card_id": card.id,
            "deck_id": card.deck_id,
            "status": card.status.value,
            "repetition_level": card.repetition_level,
            "ease_factor": card.ease_factor,
            "review_count": card.review_count,
            "correct_count": card.correct_count,
            "last_reviewed_at": card.last_reviewed_at,
            "next_review_at": card.next_review_at,
        }
        for card in cards
    ]
    if not rows:
        return pd.DataFrame(columns=CARD_COLUMNS)

    df = pd.DataFrame(rows, columns=CARD_COLUMNS)
    df["last_reviewed_at"] = pd.to_datetime(df["last_reviewed_at"], utc=True)
    df["next_review_at"] = pd.to_datetime(df["next_review_at"], utc=True)
    return df


def events_to_df(events: Iterable[Union[ReviewEvent, dict]]) -> pd.DataFrame:
    """
    Review events (records or database dicts) as a time-sorted dataframe.
    """
    rows = [asdict(e) if isinstance(e, ReviewEvent) else dict(e) for e in events]
    if not rows:
        return pd.DataFrame(columns=EVENT_COLUMNS)

    df = pd.DataFrame(rows)
    df = df[["card_id", "deck_id", "timestamp", "was_correct"]].copy()
    df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True, errors="coerce")
    df = df.dropna(subset=["card_id", "timestamp"])
    df["was_correct"] = df["was_correct"].astype(bool)
    df["day_utc"] = df["timestamp"].dt.floor("D")
    df = df.sort_values("timestamp").reset_index(drop=True)
    return df


def load_review_events_df(user_id: str, since: Optional[datetime] = None) -> pd.DataFrame:
    """
    Load a user's review events into a dataframe.
    """
    return events_to_df(database.get_review_events(user_id=user_id, since=since))
