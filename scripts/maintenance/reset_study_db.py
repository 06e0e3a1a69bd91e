"""
Reset the flashcard study database.

DANGEROUS: This deletes all decks, cards and review history!
Only use when you want to start fresh for testing.

Usage:
    python -m scripts.maintenance.reset_study_db
"""

from dotenv import load_dotenv

from core import srs
from core.srs.database import REQUIRED_TABLES

load_dotenv()


def main():
    print("=" * 60)
    print("WARNING: Reset Study Database")
    print("=" * 60)
    print()
    print(f"Test mode: {srs.is_test_mode()}")
    print()
    print("This will DROP and recreate these tables:")
    for table in REQUIRED_TABLES:
        print(f"  - {table}")
    print()

    response = input("Are you sure you want to reset? (type 'yes' to confirm): ")

    if response.lower() == "yes":
        print("\nResetting database...")
        srs.reset_db()
        print("✓ Database reset complete!")
        print("\nThe database now has empty tables ready for new decks.")
    else:
        print("\nCancelled. No changes made.")


if __name__ == "__main__":
    main()
