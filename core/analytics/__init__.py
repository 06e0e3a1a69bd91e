"""
Analytics package exports.
"""

from core.analytics.constants import STATUS_LABELS
from core.analytics.service import build_flashcard_dashboard
from core.analytics.types import FlashcardDashboardData, FlashcardStats

__all__ = [
    "STATUS_LABELS",
    "build_flashcard_dashboard",
    "FlashcardDashboardData",
    "FlashcardStats",
]
