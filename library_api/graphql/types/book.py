"""
GraphQL Book Type

Defines the Book type for GraphQL queries.
"""

import strawberry

from library_api.graphql.types.author import AuthorType


@strawberry.type(name="Book")
class BookType:
    """
    GraphQL type representing a book.

    The author is always resolved; genres keep the order they were added in.
    """

    id: strawberry.ID
    title: str
    published: int
    author: AuthorType
    genres: list[str]
