"""Shared fixtures for the flashcard engine tests."""

from datetime import datetime, timedelta, timezone

import pytest

from core.srs import database
from core.srs.card_state import Flashcard
from core.srs.scheduling import classify_status
from core.srs.store import StudyStore


NOW = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def store():
    return StudyStore()


@pytest.fixture
def deck(store, now):
    return store.add_deck("Biology", now, subject_id="subject-bio")


@pytest.fixture
def make_card():
    """Factory for cards in an arbitrary (consistent) scheduling state."""
    counter = {"n": 0}

    def _make(
        level=0,
        ease=2.5,
        deck_id="deck-1",
        review_count=None,
        correct_count=None,
        status=None,
        next_review_at=None,
        last_reviewed_at=None,
    ):
        counter["n"] += 1
        if review_count is None:
            review_count = level
        if correct_count is None:
            correct_count = review_count
        if status is None:
            status = classify_status(level, review_count)
        if last_reviewed_at is None and review_count > 0:
            last_reviewed_at = NOW - timedelta(days=1)
        return Flashcard(
            id=f"card-{counter['n']}",
            deck_id=deck_id,
            front=f"front {counter['n']}",
            back=f"back {counter['n']}",
            status=status,
            repetition_level=level,
            ease_factor=ease,
            review_count=review_count,
            correct_count=correct_count,
            last_reviewed_at=last_reviewed_at,
            next_review_at=next_review_at,
            created_at=NOW - timedelta(days=30),
            updated_at=NOW - timedelta(days=30),
        )

    return _make


@pytest.fixture
def sqlite_db(tmp_path, monkeypatch):
    """Point DATABASE_URL at a fresh SQLite file and create the schema."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'study_db.sqlite'}")
    monkeypatch.delenv("TEST_MODE", raising=False)
    monkeypatch.delenv("STUDY_DB_ECHO", raising=False)
    database.init_db()
    yield
    database.get_engine().dispose()
    database._engine_for.cache_clear()
