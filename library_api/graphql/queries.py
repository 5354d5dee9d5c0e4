"""
GraphQL Query Resolvers

Defines all read operations (queries) for the GraphQL API.
Each resolver reads through the catalog and identity services using the
session from the context.
"""

import strawberry
from strawberry.types import Info

from library_api.graphql.context import GraphQLContext
from library_api.graphql.types.author import AuthorType
from library_api.graphql.types.book import BookType
from library_api.graphql.types.user import UserType
from library_api.models import Author, Book, User
from library_api.services import catalog


def author_to_graphql(author: Author, book_count: int) -> AuthorType:
    """Convert SQLAlchemy Author model to GraphQL AuthorType."""
    return AuthorType(
        id=strawberry.ID(str(author.id)),
        name=author.name,
        born=author.born,
        book_count=book_count,
    )


def book_to_graphql(book: Book, book_counts: dict[int, int]) -> BookType:
    """
    Convert SQLAlchemy Book model to GraphQL BookType.

    Args:
        book: Book with its author loaded
        book_counts: Book count per author id, from
            catalog.book_counts_by_author
    """
    return BookType(
        id=strawberry.ID(str(book.id)),
        title=book.title,
        published=book.published,
        author=author_to_graphql(book.author, book_counts.get(book.author_id, 0)),
        genres=book.genres,
    )


def user_to_graphql(user: User) -> UserType:
    """Convert SQLAlchemy User model to GraphQL UserType."""
    return UserType(
        id=strawberry.ID(str(user.id)),
        username=user.username,
        favorite_genre=user.favorite_genre,
    )


@strawberry.type
class Query:
    """
    GraphQL Query type containing all read operations.

    None of the queries require authentication.
    """

    @strawberry.field(description="Number of books in the catalog")
    def book_count(self, info: Info[GraphQLContext, None]) -> int:
        return catalog.count_books(info.context.db)

    @strawberry.field(description="Number of authors in the catalog")
    def author_count(self, info: Info[GraphQLContext, None]) -> int:
        return catalog.count_authors(info.context.db)

    @strawberry.field(description="Books, optionally filtered by author name and genre")
    def all_books(
        self,
        info: Info[GraphQLContext, None],
        author: str | None = None,
        genre: str | None = None,
    ) -> list[BookType]:
        """
        Get books matching every given filter.

        Args:
            author: Exact author name; unknown names give an empty list
            genre: Exact genre tag (case-sensitive)
        """
        db = info.context.db

        books = catalog.find_books(db, author=author, genre=genre)
        book_counts = catalog.book_counts_by_author(db)

        return [book_to_graphql(b, book_counts) for b in books]

    @strawberry.field(description="All authors with the number of books each wrote")
    def all_authors(self, info: Info[GraphQLContext, None]) -> list[AuthorType]:
        db = info.context.db

        authors = catalog.find_authors(db)
        book_counts = catalog.book_counts_by_author(db)

        return [author_to_graphql(a, book_counts.get(a.id, 0)) for a in authors]

    @strawberry.field(description="Get the current authenticated user")
    def me(self, info: Info[GraphQLContext, None]) -> UserType | None:
        """
        Get the current authenticated user.

        Returns None if not authenticated.
        """
        user = info.context.current_user

        if user is None:
            return None

        return user_to_graphql(user)
