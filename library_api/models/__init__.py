"""
SQLAlchemy Models Package

This package contains all database models for the catalog.

Model Relationships:
- Author <- Book: Many-to-One (an author can write many books,
                  a book has exactly one author)
- Book <- BookGenre: One-to-Many (ordered genre tags of a book)
- User: standalone, used for authentication

Import all models here so Alembic discovers them for migrations.
"""

from library_api.models.author import Author
from library_api.models.book import Book, BookGenre
from library_api.models.user import User

__all__ = [
    "Author",
    "Book",
    "BookGenre",
    "User",
]
