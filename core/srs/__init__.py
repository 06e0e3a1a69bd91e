"""
SRS - Flashcard spaced-repetition engine

Main API for the flashcard review system.

This module implements a level-based spaced repetition scheme with:
- Six repetition levels with base intervals of 0, 1, 3, 7, 14, 30 days
- Ease factor scaling the interval (floor 1.3, start 2.5)
- Mastery classification (new / learning / review / mastered)
- Incrementally maintained deck counters

Quick start:
    from core import srs

    store = srs.StudyStore()
    deck = store.add_deck("Biology", now)
    card = store.add_card(deck.id, "Mitochondria?", "Powerhouse of the cell", now)

    # Review (pure scheduling + serialized state update)
    result = store.review_card(card.id, was_correct=True, now=now)

    # Due queue
    due = store.due_cards(now, deck_id=deck.id)

    # Persist
    srs.init_db()
    srs.persist_review(result, user_id)
"""

# Core scheduling API (algorithm logic)
from core.srs.scheduling import (
    evaluate_outcome,
    interval_days,
    next_due_date,
    classify_status,
    round_half_up,
)
from core.srs.scheduler import (
    ReviewResult,
    review_card,
    validate_card,
    mastery_transition,
)
from core.srs.selection import (
    due_cards,
    is_due,
    count_due,
    cards_by_deck,
    decks_by_subject,
    deck_next_review_at,
)
from core.srs.aggregates import (
    apply_mastery_transition,
    record_card_added,
    record_card_removed,
    verify_deck_counters,
)

# Records
from core.srs.card_state import (
    Flashcard,
    FlashcardDeck,
    MasteryTransition,
    ReviewEvent,
    initialize_new_card,
    initialize_new_deck,
)

# State ownership
from core.srs.store import StudyStore

# Database API
from core.srs.database import (
    init_db,
    reset_db,
    is_test_mode,
    get_default_user_id,
    load_decks,
    load_cards,
    load_store,
    save_deck,
    save_card,
    save_store,
    batch_save_cards,
    delete_card_row,
    delete_deck_rows,
    apply_deck_transition,
    persist_review,
    batch_log_review_events,
    get_review_events,
)

# Import / export
from core.srs.serialization import (
    export_snapshot,
    import_snapshot,
)

# Constants and errors
from core.srs.constants import (
    CardStatus,
    CardDifficulty,
    BASE_INTERVAL_DAYS,
    INITIAL_EASE,
    MIN_EASE,
    MAX_LEVEL,
    MASTERED_LEVEL,
)
from core.srs.errors import (
    InvalidInput,
    CardNotFound,
    DeckNotFound,
    ConsistencyViolation,
)


__all__ = [
    # Core algorithm
    "evaluate_outcome",
    "interval_days",
    "next_due_date",
    "classify_status",
    "round_half_up",
    "ReviewResult",
    "review_card",
    "validate_card",
    "mastery_transition",

    # Selection
    "due_cards",
    "is_due",
    "count_due",
    "cards_by_deck",
    "decks_by_subject",
    "deck_next_review_at",

    # Deck counters
    "apply_mastery_transition",
    "record_card_added",
    "record_card_removed",
    "verify_deck_counters",

    # Records
    "Flashcard",
    "FlashcardDeck",
    "MasteryTransition",
    "ReviewEvent",
    "initialize_new_card",
    "initialize_new_deck",
    "StudyStore",

    # Database operations
    "init_db",
    "reset_db",
    "is_test_mode",
    "get_default_user_id",
    "load_decks",
    "load_cards",
    "load_store",
    "save_deck",
    "save_card",
    "save_store",
    "batch_save_cards",
    "delete_card_row",
    "delete_deck_rows",
    "apply_deck_transition",
    "persist_review",
    "batch_log_review_events",
    "get_review_events",

    # Import / export
    "export_snapshot",
    "import_snapshot",

    # Enums and parameters
    "CardStatus",
    "CardDifficulty",
    "BASE_INTERVAL_DAYS",
    "INITIAL_EASE",
    "MIN_EASE",
    "MAX_LEVEL",
    "MASTERED_LEVEL",

    # Errors
    "InvalidInput",
    "CardNotFound",
    "DeckNotFound",
    "ConsistencyViolation",
]
