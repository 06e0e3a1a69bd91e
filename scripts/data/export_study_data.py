"""
Export a user's decks and flashcards to a JSON snapshot.

The snapshot uses camelCase keys (deckId, repetitionLevel, ...) and can be
read back with scripts.data.import_study_data.

Usage:
    python -m scripts.data.export_study_data --output data/study_export.json
    python -m scripts.data.export_study_data --user-id alice --output alice.json
"""

from __future__ import annotations

import argparse
import json
from datetime import datetime, timezone
from pathlib import Path

from dotenv import load_dotenv

from core import srs

load_dotenv()

DEFAULT_OUTPUT = Path("data") / "study_export.json"


def main():
    parser = argparse.ArgumentParser(description="Export study data to JSON")
    parser.add_argument("--user-id", default=None, help="User to export (default: DEFAULT_USER_ID)")
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT, help="Output JSON path")
    args = parser.parse_args()

    user_id = args.user_id or srs.get_default_user_id()
    srs.init_db()
    store = srs.load_store(user_id)

    snapshot = srs.export_snapshot(store, exported_at=datetime.now(timezone.utc))

    args.output.parent.mkdir(parents=True, exist_ok=True)
    with open(args.output, "w", encoding="utf-8") as f:
        json.dump(snapshot, f, ensure_ascii=False, indent=2)

    print(f"✓ Exported {len(snapshot['flashcardDecks'])} decks and "
          f"{len(snapshot['flashcards'])} cards to {args.output}")


if __name__ == "__main__":
    main()
