"""
Pydantic records for exporting and importing study data.

This is the only place where keys are translated between the engine's
snake_case fields and the camelCase JSON used by clients
(deckId, repetitionLevel, nextReviewAt, ...).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from core.srs.card_state import Flashcard, FlashcardDeck
from core.srs.constants import (
    CardDifficulty,
    CardStatus,
    INITIAL_EASE,
    MAX_LEVEL,
    MIN_EASE,
    MIN_LEVEL,
)
from core.srs.errors import ConsistencyViolation, InvalidInput
from core.srs.store import StudyStore


SNAPSHOT_VERSION = 1


class CamelModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("*", mode="after")
    @classmethod
    def _require_aware_datetimes(cls, value: Any) -> Any:
        if isinstance(value, datetime) and value.tzinfo is None:
            raise ValueError("timestamps must include a timezone offset")
        return value


# ---- Records ----

class FlashcardRecord(CamelModel):
    """A flashcard as exported/imported."""
    id: str
    deck_id: str
    front: str
    back: str
    hint: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    difficulty: CardDifficulty = CardDifficulty.MEDIUM

    status: CardStatus = CardStatus.NEW
    repetition_level: int = Field(default=MIN_LEVEL, ge=MIN_LEVEL, le=MAX_LEVEL)
    ease_factor: float = Field(default=INITIAL_EASE, ge=MIN_EASE)
    review_count: int = Field(default=0, ge=0)
    correct_count: int = Field(default=0, ge=0)
    last_reviewed_at: Optional[datetime] = None
    next_review_at: Optional[datetime] = None

    created_at: datetime
    updated_at: datetime


class FlashcardDeckRecord(CamelModel):
    """A deck as exported/imported."""
    id: str
    name: str = Field(..., min_length=1)
    subject_id: Optional[str] = None
    goal_id: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    card_count: int = Field(default=0, ge=0)
    mastered_count: int = Field(default=0, ge=0)
    last_reviewed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class StudySnapshot(CamelModel):
    """Full export of one user's decks and cards."""
    version: int = SNAPSHOT_VERSION
    exported_at: datetime
    flashcard_decks: list[FlashcardDeckRecord] = Field(default_factory=list)
    flashcards: list[FlashcardRecord] = Field(default_factory=list)


# ---- Conversion ----

def card_to_record(card: Flashcard) -> FlashcardRecord:
    return FlashcardRecord(
        id=card.id,
        deck_id=card.deck_id,
        front=card.front,
        back=card.back,
        hint=card.hint,
        tags=list(card.tags),
        difficulty=card.difficulty,
        status=card.status,
        repetition_level=card.repetition_level,
        ease_factor=card.ease_factor,
        review_count=card.review_count,
        correct_count=card.correct_count,
        last_reviewed_at=card.last_reviewed_at,
        next_review_at=card.next_review_at,
        created_at=card.created_at,
        updated_at=card.updated_at,
    )


def record_to_card(record: FlashcardRecord) -> Flashcard:
    return Flashcard(
        id=record.id,
        deck_id=record.deck_id,
        front=record.front,
        back=record.back,
        status=record.status,
        repetition_level=record.repetition_level,
        ease_factor=record.ease_factor,
        review_count=record.review_count,
        correct_count=record.correct_count,
        last_reviewed_at=record.last_reviewed_at,
        next_review_at=record.next_review_at,
        created_at=record.created_at,
        updated_at=record.updated_at,
        hint=record.hint,
        tags=list(record.tags),
        difficulty=record.difficulty,
    )


def deck_to_record(deck: FlashcardDeck) -> FlashcardDeckRecord:
    return FlashcardDeckRecord(
        id=deck.id,
        name=deck.name,
        subject_id=deck.subject_id,
        goal_id=deck.goal_id,
        description=deck.description,
        color=deck.color,
        card_count=deck.card_count,
        mastered_count=deck.mastered_count,
        last_reviewed_at=deck.last_reviewed_at,
        created_at=deck.created_at,
        updated_at=deck.updated_at,
    )


def record_to_deck(record: FlashcardDeckRecord) -> FlashcardDeck:
    return FlashcardDeck(
        id=record.id,
        name=record.name,
        card_count=record.card_count,
        mastered_count=record.mastered_count,
        created_at=record.created_at,
        updated_at=record.updated_at,
        subject_id=record.subject_id,
        goal_id=record.goal_id,
        description=record.description,
        color=record.color,
        last_reviewed_at=record.last_reviewed_at,
    )


def export_snapshot(store: StudyStore, exported_at: datetime) -> dict:
    """
    Export a store as a camelCase, JSON-ready dict.

    Datetimes are rendered as ISO 8601 strings.
    """
    snapshot = StudySnapshot(
        exported_at=exported_at,
        flashcard_decks=[deck_to_record(deck) for deck in store.decks()],
        flashcards=[card_to_record(card) for card in store.cards()],
    )
    return snapshot.model_dump(mode="json", by_alias=True)


def import_snapshot(data: dict) -> StudyStore:
    """
    Build a StudyStore from an exported snapshot.

    Raises:
        InvalidInput: snapshot fails schema validation
        ConsistencyViolation: cards or deck counters contradict each other
    """
    try:
        snapshot = StudySnapshot.model_validate(data)
    except ValidationError as exc:
        raise InvalidInput(f"Invalid study snapshot: {exc}") from exc

    if snapshot.version != SNAPSHOT_VERSION:
        raise InvalidInput(f"Unsupported snapshot version {snapshot.version}")

    store = StudyStore(
        decks=[record_to_deck(record) for record in snapshot.flashcard_decks],
        cards=[record_to_card(record) for record in snapshot.flashcards],
    )
    if len(store.decks()) != len(snapshot.flashcard_decks):
        raise ConsistencyViolation("Snapshot contains duplicate deck ids")
    if len(store.cards()) != len(snapshot.flashcards):
        raise ConsistencyViolation("Snapshot contains duplicate card ids")

    store.check_consistency()
    return store
