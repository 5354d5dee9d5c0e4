"""
GraphQL Types Package

GraphQL type definitions that map to our SQLAlchemy models. Types are
defined using Strawberry's decorator syntax and exposed under the names
clients use in queries (Book, Author, User, Token).
"""

from library_api.graphql.types.author import AuthorType
from library_api.graphql.types.book import BookType
from library_api.graphql.types.user import TokenType, UserType

__all__ = [
    "AuthorType",
    "BookType",
    "UserType",
    "TokenType",
]
