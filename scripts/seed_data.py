#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample authors, books and a user for
development.

USAGE:
    # Make sure you're in the project root with venv activated
    python scripts/seed_data.py

    # Keep existing rows instead of clearing them first
    python scripts/seed_data.py --keep

This script:
1. Connects to the database using app settings
2. Clears existing data (unless --keep)
3. Adds books through the catalog service, which creates their authors
4. Sets the authors' birth years and creates a sample user
"""

import argparse
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from library_api.config import get_settings
from library_api.database import SessionLocal, create_tables
from library_api.models import Author, Book, BookGenre, User
from library_api.services import catalog, identity

BORN = {
    "Robert Martin": 1952,
    "Martin Fowler": 1963,
    "Fyodor Dostoevsky": 1821,
}

BOOKS = [
    {"title": "Clean Code", "published": 2008, "author": "Robert Martin", "genres": ["refactoring"]},
    {"title": "Agile software development", "published": 2002, "author": "Robert Martin", "genres": ["agile", "patterns", "design"]},
    {"title": "Refactoring, edition 2", "published": 2018, "author": "Martin Fowler", "genres": ["refactoring"]},
    {"title": "Refactoring to patterns", "published": 2008, "author": "Joshua Kerievsky", "genres": ["refactoring", "patterns"]},
    {"title": "Practical Object-Oriented Design, An Agile Primer Using Ruby", "published": 2012, "author": "Sandi Metz", "genres": ["refactoring", "design"]},
    {"title": "Crime and punishment", "published": 1866, "author": "Fyodor Dostoevsky", "genres": ["classic", "crime"]},
    {"title": "Demons", "published": 1872, "author": "Fyodor Dostoevsky", "genres": ["classic", "revolution"]},
]


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    db.execute(delete(BookGenre))
    db.execute(delete(Book))
    db.execute(delete(Author))
    db.execute(delete(User))
    db.commit()
    print("Data cleared.")


def create_books(db: Session) -> list[Book]:
    """Create sample books; their authors are created on the way."""
    print("Creating books...")
    books = [catalog.add_book(db, **data) for data in BOOKS]
    print(f"Created {len(books)} books.")
    return books


def set_birth_years(db: Session) -> None:
    """Fill in the birth years that are known."""
    for name, year in BORN.items():
        author = catalog.find_author_by_name(db, name)
        if author is not None:
            catalog.update_author_born(db, author, year)


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    settings = get_settings()

    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()
    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        books = create_books(db)
        set_birth_years(db)
        user = identity.create_user(db, username="mluukkai", favorite_genre="refactoring")

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Authors: {catalog.count_authors(db)}")
        print(f"  - Books: {len(books)}")
        print(f"  - User: {user.username} (password: INITIAL_USER_PASSWORD)")
        print(f"\nGraphQL endpoint at http://localhost:{settings.port}/graphql")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the catalog database")
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Keep existing data instead of clearing it first",
    )
    args = parser.parse_args()

    seed_database(clear_existing=not args.keep)
