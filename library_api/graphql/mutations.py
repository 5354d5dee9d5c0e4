"""
GraphQL Mutation Resolvers

Defines all write operations (mutations) for the GraphQL API.

addBook and editAuthor require a bearer token; createUser and login are
open. Validation failures from the services are reported as
BAD_USER_INPUT errors that echo the arguments back in ``invalidArgs``.
"""

import logging

import strawberry
from strawberry.types import Info

from library_api.errors import InvalidInput, Unauthenticated, ValidationError
from library_api.graphql.context import GraphQLContext
from library_api.graphql.queries import author_to_graphql, book_to_graphql, user_to_graphql
from library_api.graphql.types.author import AuthorType
from library_api.graphql.types.book import BookType
from library_api.graphql.types.user import TokenType, UserType
from library_api.models.user import User
from library_api.services import catalog, identity
from library_api.services.security import issue_token

logger = logging.getLogger(__name__)


def require_auth(info: Info[GraphQLContext, None]) -> User:
    """Helper to require authentication and return the user."""
    user = info.context.current_user
    if user is None:
        raise Unauthenticated()
    return user


@strawberry.type
class Mutation:
    """GraphQL Mutation type containing all write operations."""

    # =========================================================================
    # Catalog Mutations
    # =========================================================================

    @strawberry.mutation(description="Add a book, creating its author if needed")
    def add_book(
        self,
        info: Info[GraphQLContext, None],
        title: str,
        author: str,
        published: int,
        genres: list[str],
    ) -> BookType | None:
        """
        Add a book to the catalog.

        Requires authentication. The author is matched by exact name and
        created when no author has that name yet.
        """
        user = require_auth(info)
        db = info.context.db

        try:
            book = catalog.add_book(
                db,
                title=title,
                author=author,
                published=published,
                genres=genres,
            )
        except ValidationError as e:
            raise InvalidInput(
                e.message,
                invalid_args={
                    "title": title,
                    "author": author,
                    "published": published,
                    "genres": genres,
                },
            ) from e

        logger.info(f"{user.username} added book {book.title!r}")
        book_count = catalog.count_books_by_author(db, book.author_id)
        return book_to_graphql(book, {book.author_id: book_count})

    @strawberry.mutation(description="Set an author's birth year")
    def edit_author(
        self,
        info: Info[GraphQLContext, None],
        name: str,
        set_born_to: int,
    ) -> AuthorType | None:
        """
        Update the birth year of the author with this exact name.

        Requires authentication.
        """
        require_auth(info)
        db = info.context.db

        author = catalog.find_author_by_name(db, name)
        if author is None:
            raise InvalidInput(
                "Author not found",
                invalid_args={"name": name, "setBornTo": set_born_to},
            )

        author = catalog.update_author_born(db, author, set_born_to)

        return author_to_graphql(author, catalog.count_books_by_author(db, author.id))

    # =========================================================================
    # User Mutations
    # =========================================================================

    @strawberry.mutation(description="Register a new user account")
    def create_user(
        self,
        info: Info[GraphQLContext, None],
        username: str,
        favorite_genre: str,
        password: str | None = None,
    ) -> UserType | None:
        """
        Create a new user account.

        Without a password the user gets the configured initial password.
        """
        try:
            user = identity.create_user(
                info.context.db,
                username=username,
                favorite_genre=favorite_genre,
                password=password,
            )
        except ValidationError as e:
            raise InvalidInput(
                e.message,
                invalid_args={"username": username, "favoriteGenre": favorite_genre},
            ) from e

        return user_to_graphql(user)

    @strawberry.mutation(description="Log in and receive a bearer token")
    def login(
        self,
        info: Info[GraphQLContext, None],
        username: str,
        password: str,
    ) -> TokenType | None:
        """
        Authenticate with username and password.

        An unknown username and a wrong password give the same error.
        """
        user = identity.authenticate(info.context.db, username, password)

        if user is None:
            raise InvalidInput("wrong credentials", invalid_args={"username": username})

        logger.info(f"User {user.username} logged in")
        return TokenType(value=issue_token({"username": user.username, "id": user.id}))
