"""
Import a JSON snapshot of decks and flashcards into the database.

The snapshot is validated before anything is written: schema errors,
cards contradicting their own status, or deck counters that disagree
with the cards all abort the import.

Usage:
    python -m scripts.data.import_study_data data/study_export.json
    python -m scripts.data.import_study_data alice.json --user-id alice

    # Validate only
    python -m scripts.data.import_study_data alice.json --dry-run
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from core import srs

load_dotenv()


def main() -> int:
    parser = argparse.ArgumentParser(description="Import study data from JSON")
    parser.add_argument("input", type=Path, help="Snapshot JSON path")
    parser.add_argument("--user-id", default=None, help="User to import into (default: DEFAULT_USER_ID)")
    parser.add_argument("--dry-run", action="store_true", help="Validate without writing")
    args = parser.parse_args()

    if not args.input.exists():
        print(f"No snapshot found at: {args.input}")
        return 1

    with open(args.input, "r", encoding="utf-8") as f:
        data = json.load(f)

    try:
        store = srs.import_snapshot(data)
    except (srs.InvalidInput, srs.ConsistencyViolation) as exc:
        print(f"✗ Snapshot rejected: {exc}")
        return 1

    print(f"Snapshot OK: {len(store.decks())} decks, {len(store.cards())} cards")
    if args.dry_run:
        print("Dry run - nothing written.")
        return 0

    user_id = args.user_id or srs.get_default_user_id()
    srs.init_db()
    srs.save_store(store, user_id)
    print(f"✓ Imported into user {user_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
