#!/usr/bin/env python3
"""
Script to inject sample categories into the database.
Goes through the repository so every row gets the usual defaults.

Usage: pip install -e . && python3 inject_sample_data.py
"""

from app.core.database import Base, SessionLocal, engine
from app.repositories import CategoryRepository


SAMPLE_CATEGORIES = [
    "Technology",
    "Science",
    "Sports",
    "Arts",
    "Politics",
    "Health",
]


def inject_sample_categories():
    """Insert sample categories that do not exist yet."""
    print("🔌 Connecting to database...")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        repository = CategoryRepository(db)
        added_count = 0

        for name in SAMPLE_CATEGORIES:
            if repository.exists({"name": name}):
                print(f"⊘ Category already exists: {name}")
                continue

            category = repository.create({"name": name})
            print(f"✓ Added category: {category.name} (ID: {category.id})")
            added_count += 1

        print()
        print(f"✓ Successfully added {added_count} sample categor{'y' if added_count == 1 else 'ies'}")

    finally:
        db.close()
        print()
        print("✓ Database connection closed")


if __name__ == "__main__":
    print("=" * 60)
    print("  Category Sample Data Injection Script")
    print("=" * 60)
    print()

    inject_sample_categories()
