"""
Pydantic Schemas Package

Pydantic models that validate data before the stores write it.

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Validation: Field rules (lengths, required values) live in one place
2. Decoupling: Database schema can evolve independently of input rules
3. Error messages: Pydantic reports every failed rule at once
"""

from library_api.schemas.author import AuthorCreate
from library_api.schemas.book import BookCreate, BookCreateByAuthor
from library_api.schemas.user import TokenPayload, UserCreate

__all__ = [
    "AuthorCreate",
    "BookCreate",
    "BookCreateByAuthor",
    "UserCreate",
    "TokenPayload",
]
