"""
Check deck counters against the true card counts.

Deck card_count / mastered_count are maintained incrementally. This script
loads every card for a user and reports any deck whose stored counters
disagree with what its cards say, plus cards whose own fields contradict
each other. Nothing is modified.

Usage:
    python -m scripts.maintenance.check_deck_counters
    python -m scripts.maintenance.check_deck_counters --user-id alice
"""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv

from core import srs

load_dotenv()
logging.basicConfig(level=logging.WARNING)


def main() -> int:
    parser = argparse.ArgumentParser(description="Verify flashcard deck counters")
    parser.add_argument(
        "--user-id",
        default=None,
        help="User to check (default: DEFAULT_USER_ID)"
    )
    args = parser.parse_args()

    user_id = args.user_id or srs.get_default_user_id()
    srs.init_db()

    store = srs.StudyStore(
        decks=srs.load_decks(user_id),
        cards=srs.load_cards(user_id)
    )
    problems = store.find_inconsistencies()

    decks = store.decks()
    print(f"User: {user_id}")
    print(f"Decks: {len(decks)}  Cards: {len(store.cards())}")
    print("-" * 60)
    for deck in decks:
        print(f"  {deck.name}: {deck.card_count} cards, {deck.mastered_count} mastered")
    print("-" * 60)

    if not problems:
        print("✓ All counters consistent")
        return 0

    print(f"✗ {len(problems)} problem(s) found:")
    for problem in problems:
        print(f"  - {problem}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
