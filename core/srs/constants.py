"""
SRS Constants and Parameters

All tunable values for the flashcard review engine in one place.
"""

from enum import Enum


# ---- Card Status ----

class CardStatus(str, Enum):
    """Mastery classification of a flashcard."""
    NEW = "new"              # Never reviewed
    LEARNING = "learning"    # Level 0-1
    REVIEW = "review"        # Level 2-3
    MASTERED = "mastered"    # Level 4-5, excluded from due queues


class CardDifficulty(str, Enum):
    """User-assigned difficulty label (not used by scheduling)."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# ---- Repetition Levels ----

MIN_LEVEL = 0
MAX_LEVEL = 5
REVIEW_LEVEL = 2     # First level classified as "review"
MASTERED_LEVEL = 4   # First level classified as "mastered"

# Base interval in days, indexed by repetition level
BASE_INTERVAL_DAYS = (0, 1, 3, 7, 14, 30)


# ---- Ease Factor ----

INITIAL_EASE = 2.5
MIN_EASE = 1.3
EASE_REWARD = 0.1    # Added on correct recall
EASE_PENALTY = 0.2   # Subtracted on failed recall
EASE_PRECISION = 2   # Decimal places kept on computed ease


# ---- Level Changes ----

LEVEL_REWARD = 1     # Levels gained on correct recall
LEVEL_PENALTY = 2    # Levels lost on failed recall
