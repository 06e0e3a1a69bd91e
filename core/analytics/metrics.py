"""
Metric computations for flashcard dashboards.
"""

from __future__ import annotations

import pandas as pd

from core.analytics.constants import DECK_MASTERY_COLUMNS, STATUS_ORDER
from core.srs.constants import CardStatus


def build_day_index(events_df: pd.DataFrame) -> pd.DatetimeIndex:
    """
    Build a dense UTC day index spanning the event range.
    """
    if events_df.empty:
        return pd.DatetimeIndex([], tz="UTC")
    start = events_df["day_utc"].min()
    end = events_df["day_utc"].max()
    return pd.date_range(start=start, end=end, freq="D")


def zero_series(day_index: pd.DatetimeIndex, dtype: str = "int64") -> pd.Series:
    """
    Convenience zero-valued series aligned to day index.
    """
    return pd.Series(0, index=day_index, dtype=dtype)


def compute_status_counts(cards_df: pd.DataFrame) -> dict[str, int]:
    """
    Number of cards per status, with every status present.
    """
    if cards_df.empty:
        return {status: 0 for status in STATUS_ORDER}
    counts = cards_df["status"].value_counts()
    return {status: int(counts.get(status, 0)) for status in STATUS_ORDER}


def compute_deck_mastery(cards_df: pd.DataFrame) -> pd.DataFrame:
    """
    Per-deck card and mastered counts plus recall accuracy.

    Accuracy is correct_count / review_count over the deck's cards
    (NaN for decks with no reviews).
    """
    if cards_df.empty:
        return pd.DataFrame(columns=DECK_MASTERY_COLUMNS)

    scoped = cards_df.assign(
        is_mastered=cards_df["status"] == CardStatus.MASTERED.value
    )
    table = scoped.groupby("deck_id").agg(
        card_count=("card_id", "count"),
        mastered_count=("is_mastered", "sum"),
        review_count=("review_count", "sum"),
        correct_count=("correct_count", "sum"),
    )
    reviews = table["review_count"].where(table["review_count"] > 0)
    table["accuracy"] = table["correct_count"] / reviews
    table = table.reset_index()
    table["mastered_count"] = table["mastered_count"].astype("int64")
    return table[DECK_MASTERY_COLUMNS]


def compute_daily_reviewed(
    events_df: pd.DataFrame,
    day_index: pd.DatetimeIndex
) -> pd.Series:
    """
    Reviews performed per UTC day.
    """
    if events_df.empty or len(day_index) == 0:
        return pd.Series(dtype="int64")

    daily = events_df.groupby("day_utc").size()
    return daily.reindex(day_index, fill_value=0).astype("int64")


def compute_accuracy(events_df: pd.DataFrame) -> float:
    """
    Share of reviews recalled correctly (0.0 when there are none).
    """
    if events_df.empty:
        return 0.0
    return float(events_df["was_correct"].mean())
