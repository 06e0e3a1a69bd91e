"""
SQLAlchemy ORM Models for the flashcard database

Defines deck, card and review-event tables. Every row is scoped by user_id.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class FlashcardDeckModel(Base):
    """
    Persistent deck with its incrementally maintained counters.
    """
    __tablename__ = 'flashcard_decks'

    id = Column(String(36), primary_key=True)
    user_id = Column(String(255), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    subject_id = Column(String(36), nullable=True, index=True)
    goal_id = Column(String(36), nullable=True)
    description = Column(Text, nullable=True)
    color = Column(String(50), nullable=True)

    # Aggregates (never recomputed by scanning)
    card_count = Column(Integer, nullable=False, default=0)
    mastered_count = Column(Integer, nullable=False, default=0)

    last_reviewed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<FlashcardDeck({self.id}, {self.name!r}, cards={self.card_count}, mastered={self.mastered_count})>"


class FlashcardModel(Base):
    """
    Persistent flashcard with its spaced-repetition state.
    """
    __tablename__ = 'flashcards'

    id = Column(String(36), primary_key=True)
    user_id = Column(String(255), nullable=False, index=True)
    deck_id = Column(
        String(36),
        ForeignKey('flashcard_decks.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )

    # Content
    front = Column(Text, nullable=False)
    back = Column(Text, nullable=False)
    hint = Column(Text, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    difficulty = Column(String(20), nullable=False, default="medium")

    # Scheduling state
    status = Column(String(20), nullable=False)  # new / learning / review / mastered
    repetition_level = Column(Integer, nullable=False, default=0)
    ease_factor = Column(Float, nullable=False, default=2.5)

    # Review tracking
    review_count = Column(Integer, nullable=False, default=0)
    correct_count = Column(Integer, nullable=False, default=0)
    last_reviewed_at = Column(DateTime(timezone=True), nullable=True)
    next_review_at = Column(DateTime(timezone=True), nullable=True)  # NULL = due now

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        CheckConstraint('repetition_level BETWEEN 0 AND 5', name='ck_flashcards_level'),
        CheckConstraint('correct_count <= review_count', name='ck_flashcards_counts'),
        Index('ix_flashcards_user_next_review', 'user_id', 'next_review_at'),
    )

    def __repr__(self):
        return f"<Flashcard({self.id}, deck={self.deck_id}, {self.status}, level={self.repetition_level})>"


class ReviewEventModel(Base):
    """
    Log entry for a single review, with state before and after.
    """
    __tablename__ = 'flashcard_review_events'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(255), nullable=False)

    # Not foreign keys: the log outlives deleted cards and decks
    card_id = Column(String(36), nullable=False)
    deck_id = Column(String(36), nullable=False)

    timestamp = Column(DateTime(timezone=True), nullable=False)
    was_correct = Column(Boolean, nullable=False)

    level_before = Column(Integer, nullable=False)
    level_after = Column(Integer, nullable=False)
    ease_before = Column(Float, nullable=False)
    ease_after = Column(Float, nullable=False)
    status_before = Column(String(20), nullable=False)
    status_after = Column(String(20), nullable=False)

    interval_days = Column(Integer, nullable=False)
    next_review_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index('ix_review_events_user_timestamp', 'user_id', 'timestamp'),
    )

    def __repr__(self):
        return f"<ReviewEvent(id={self.id}, card={self.card_id}, correct={self.was_correct})>"
