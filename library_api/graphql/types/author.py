"""
GraphQL Author Type

Defines the Author type for GraphQL queries.
"""

import strawberry


@strawberry.type(name="Author")
class AuthorType:
    """
    GraphQL type representing a book author.

    Maps to the Author SQLAlchemy model plus the derived book count.
    """

    id: strawberry.ID
    name: str
    born: int | None = None
    book_count: int = 0
