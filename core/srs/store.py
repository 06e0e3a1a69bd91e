"""
Study Store - In-memory repository for decks and cards

Owns all mutable flashcard state for one user. The scheduling engine is
pure; this object applies its results.

Locking:
- One lock per card serializes reviews of that card, including the
  deck counter step. The card is re-read inside the lock so a review
  never works from a stale snapshot.
- delete_deck holds only the deck lock; a review re-checks that its
  card still exists before writing it back.
- One lock per deck serializes counter updates for that deck.
- A registry lock guards the dictionaries themselves.
Lock order is always card -> deck -> registry.
"""

from __future__ import annotations
from dataclasses import replace
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional
import logging
import threading

from core.srs import aggregates, scheduler, selection
from core.srs.card_state import (
    Flashcard,
    FlashcardDeck,
    MasteryTransition,
    initialize_new_card,
    initialize_new_deck,
    require_aware,
)
from core.srs.constants import CardDifficulty
from core.srs.errors import (
    CardNotFound,
    ConsistencyViolation,
    DeckNotFound,
    InvalidInput,
)

logger = logging.getLogger(__name__)


# Fields editable outside of a review
CARD_CONTENT_FIELDS = frozenset({"front", "back", "hint", "tags", "difficulty"})
DECK_EDITABLE_FIELDS = frozenset({"name", "description", "color", "subject_id", "goal_id"})


class StudyStore:
    """
    Repository of one user's decks and flashcards.

    Every mutating method takes `now` from the caller.
    """

    def __init__(
        self,
        decks: Iterable[FlashcardDeck] = (),
        cards: Iterable[Flashcard] = ()
    ):
        self._decks: dict[str, FlashcardDeck] = {deck.id: deck for deck in decks}
        self._cards: dict[str, Flashcard] = {card.id: card for card in cards}

        self._registry_lock = threading.RLock()
        self._card_locks: dict[str, threading.Lock] = {}
        self._deck_locks: dict[str, threading.Lock] = {}

    # ---- Locks ----

    def _card_lock(self, card_id: str) -> threading.Lock:
        with self._registry_lock:
            if card_id not in self._cards:
                raise CardNotFound(card_id)
            return self._card_locks.setdefault(card_id, threading.Lock())

    def _deck_lock(self, deck_id: str) -> threading.Lock:
        with self._registry_lock:
            if deck_id not in self._decks:
                raise DeckNotFound(deck_id)
            return self._deck_locks.setdefault(deck_id, threading.Lock())

    # ---- Decks ----

    def add_deck(
        self,
        name: str,
        now: datetime,
        subject_id: Optional[str] = None,
        goal_id: Optional[str] = None,
        description: Optional[str] = None,
        color: Optional[str] = None
    ) -> FlashcardDeck:
        deck = initialize_new_deck(
            name,
            now,
            subject_id=subject_id,
            goal_id=goal_id,
            description=description,
            color=color,
        )
        with self._registry_lock:
            self._decks[deck.id] = deck
        logger.info("Created deck %s (%s)", deck.id, deck.name)
        return deck

    def update_deck(self, deck_id: str, now: datetime, **updates: Any) -> FlashcardDeck:
        """
        Edit a deck's descriptive fields.

        Counters and timestamps cannot be set here.
        """
        require_aware(now)
        unknown = set(updates) - DECK_EDITABLE_FIELDS
        if unknown:
            raise InvalidInput(f"Deck fields not editable: {sorted(unknown)}")
        if "name" in updates and not (updates["name"] or "").strip():
            raise InvalidInput("Deck name must not be empty")

        with self._deck_lock(deck_id):
            with self._registry_lock:
                deck = replace(self._decks[deck_id], updated_at=now, **updates)
                self._decks[deck_id] = deck
        return deck

    def delete_deck(self, deck_id: str) -> list[str]:
        """
        Delete a deck and every card it owns.

        Returns:
            Ids of the deleted cards
        """
        with self._deck_lock(deck_id):
            with self._registry_lock:
                removed = [card_id for card_id, card in self._cards.items()
                           if card.deck_id == deck_id]
                for card_id in removed:
                    del self._cards[card_id]
                    self._card_locks.pop(card_id, None)
                del self._decks[deck_id]
                self._deck_locks.pop(deck_id, None)

        logger.info("Deleted deck %s with %d cards", deck_id, len(removed))
        return removed

    def get_deck(self, deck_id: str) -> FlashcardDeck:
        with self._registry_lock:
            deck = self._decks.get(deck_id)
        if deck is None:
            raise DeckNotFound(deck_id)
        return deck

    def decks(self) -> list[FlashcardDeck]:
        with self._registry_lock:
            return list(self._decks.values())

    def decks_by_subject(self, subject_id: str) -> list[FlashcardDeck]:
        return selection.decks_by_subject(self.decks(), subject_id)

    # ---- Cards ----

    def add_card(
        self,
        deck_id: str,
        front: str,
        back: str,
        now: datetime,
        hint: Optional[str] = None,
        tags: Optional[list[str]] = None,
        difficulty: CardDifficulty = CardDifficulty.MEDIUM
    ) -> Flashcard:
        """Create a NEW card and increment the deck's card_count."""
        card = initialize_new_card(
            deck_id, front, back, now,
            hint=hint,
            tags=tags,
            difficulty=difficulty,
        )

        with self._deck_lock(deck_id):
            with self._registry_lock:
                deck = self._decks[deck_id]
                self._store_deck(aggregates.record_card_added, deck, now)
                self._cards[card.id] = card

        logger.debug("Added card %s to deck %s", card.id, deck_id)
        return card

    def bulk_add_cards(
        self,
        deck_id: str,
        cards: Iterable[Mapping[str, Any]],
        now: datetime
    ) -> list[Flashcard]:
        """
        Add several cards to one deck.

        Each mapping needs `front` and `back`; `hint`, `tags` and
        `difficulty` are optional.
        """
        created = []
        for fields in cards:
            if "front" not in fields or "back" not in fields:
                raise InvalidInput("Each card needs 'front' and 'back'")
            created.append(self.add_card(
                deck_id,
                fields["front"],
                fields["back"],
                now,
                hint=fields.get("hint"),
                tags=fields.get("tags"),
                difficulty=fields.get("difficulty", CardDifficulty.MEDIUM),
            ))
        return created

    def update_card(self, card_id: str, now: datetime, **updates: Any) -> Flashcard:
        """
        Edit a card's content (front, back, hint, tags, difficulty).

        Scheduling fields only change through review_card.
        """
        require_aware(now)
        forbidden = set(updates) - CARD_CONTENT_FIELDS
        if forbidden:
            raise InvalidInput(f"Card fields not editable: {sorted(forbidden)}")
        if "difficulty" in updates:
            updates["difficulty"] = CardDifficulty(updates["difficulty"])
        if "tags" in updates:
            updates["tags"] = list(updates["tags"] or [])

        with self._card_lock(card_id):
            with self._registry_lock:
                if card_id not in self._cards:
                    raise CardNotFound(card_id)
                card = replace(self._cards[card_id], updated_at=now, **updates)
                self._cards[card_id] = card
        return card

    def delete_card(self, card_id: str, now: datetime) -> Flashcard:
        """
        Delete a card and decrement its deck's counters.

        Returns:
            The deleted card
        """
        with self._card_lock(card_id):
            with self._registry_lock:
                card = self._cards.get(card_id)
            if card is None:
                raise CardNotFound(card_id)
            with self._deck_lock(card.deck_id):
                with self._registry_lock:
                    deck = self._decks[card.deck_id]
                    del self._cards[card_id]
                    self._card_locks.pop(card_id, None)
                    self._store_deck(
                        lambda d: aggregates.record_card_removed(d, card.is_mastered),
                        deck,
                        now,
                    )

        logger.debug("Deleted card %s from deck %s", card_id, card.deck_id)
        return card

    def get_card(self, card_id: str) -> Flashcard:
        with self._registry_lock:
            card = self._cards.get(card_id)
        if card is None:
            raise CardNotFound(card_id)
        return card

    def cards(self) -> list[Flashcard]:
        with self._registry_lock:
            return list(self._cards.values())

    def cards_by_deck(self, deck_id: str) -> list[Flashcard]:
        return selection.cards_by_deck(self.cards(), deck_id)

    # ---- Reviews ----

    def review_card(
        self,
        card_id: str,
        was_correct: bool,
        now: datetime
    ) -> scheduler.ReviewResult:
        """
        Review one card and apply the result.

        The card lock is held through the deck counter update, so two
        reviews of one card apply their transitions in review order.

        Raises:
            CardNotFound: no card with this id, or it was deleted mid-review
            DeckNotFound: the owning deck was deleted after the card write
            InvalidInput: card fields or `now` violate preconditions
            ConsistencyViolation: deck counters went out of range
        """
        with self._card_lock(card_id):
            with self._registry_lock:
                card = self._cards.get(card_id)
            if card is None:
                raise CardNotFound(card_id)

            result = scheduler.review_card(card, was_correct, now)
            with self._registry_lock:
                # delete_deck does not take card locks
                if card_id not in self._cards:
                    raise CardNotFound(card_id)
                self._cards[card_id] = result.card

            self.apply_transition(result.transition, now)
        return result

    def apply_transition(self, transition: MasteryTransition, now: datetime) -> FlashcardDeck:
        """Apply a mastery transition and stamp the deck's last review time."""
        try:
            lock = self._deck_lock(transition.deck_id)
        except DeckNotFound:
            logger.warning(
                "Dropping mastery transition %+d for missing deck %s",
                transition.delta, transition.deck_id,
            )
            raise

        with lock:
            with self._registry_lock:
                deck = self._decks[transition.deck_id]
                return self._store_deck(
                    lambda d: replace(
                        aggregates.apply_mastery_transition(d, transition),
                        last_reviewed_at=now,
                    ),
                    deck,
                    now,
                )

    def _store_deck(self, update, deck: FlashcardDeck, now: datetime) -> FlashcardDeck:
        """
        Run a counter update and store the result.

        On a ConsistencyViolation the clamped deck is stored before the
        error propagates. Caller holds the deck lock.
        """
        try:
            updated = update(deck)
        except ConsistencyViolation as exc:
            if isinstance(exc.repaired, FlashcardDeck):
                self._decks[deck.id] = replace(exc.repaired, updated_at=now)
            raise
        updated = replace(updated, updated_at=now)
        self._decks[deck.id] = updated
        return updated

    # ---- Queries ----

    def due_cards(self, now: datetime, deck_id: Optional[str] = None) -> list[Flashcard]:
        return selection.due_cards(self.cards(), now, deck_id)

    def find_inconsistencies(self) -> list[str]:
        """
        All invariant breaks: deck counters vs. true counts, cards in
        unknown decks, and per-card field contradictions.
        """
        cards = self.cards()
        problems = []
        for deck in self.decks():
            problems.extend(aggregates.verify_deck_counters(deck, cards))

        deck_ids = {deck.id for deck in self.decks()}
        for card in cards:
            if card.deck_id not in deck_ids:
                problems.append(f"Card {card.id} belongs to unknown deck {card.deck_id}")
            try:
                scheduler.validate_card(card)
            except (InvalidInput, ConsistencyViolation) as exc:
                problems.append(str(exc))
        return problems

    def check_consistency(self) -> None:
        """Raise ConsistencyViolation listing every invariant break."""
        problems = self.find_inconsistencies()
        if problems:
            for problem in problems:
                logger.error(problem)
            raise ConsistencyViolation("; ".join(problems))
