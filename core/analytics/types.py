"""
Types for flashcard analytics dashboards.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class FlashcardStats:
    """
    Card totals by status, plus how many are due now.
    """
    total_cards: int
    new: int
    learning: int
    review: int
    mastered: int
    to_review: int


@dataclass(frozen=True)
class FlashcardDashboardData:
    """
    Precomputed metrics and series for the flashcard dashboard.
    """
    stats: FlashcardStats
    deck_mastery: pd.DataFrame
    reviews_daily: pd.Series
    accuracy: float
