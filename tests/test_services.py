"""
Tests for the Catalog and Identity Services

These call the services directly with the test session, without going
through GraphQL.
"""

import pytest
from sqlalchemy.orm import Session

from library_api.errors import ValidationError
from library_api.models import Author, Book, User
from library_api.services import catalog, identity
from library_api.services.security import verify_password
from tests.conftest import TEST_PASSWORD


class TestCounts:
    """Tests for count_books / count_authors."""

    def test_empty(self, db_session: Session):
        assert catalog.count_books(db_session) == 0
        assert catalog.count_authors(db_session) == 0

    def test_with_data(self, db_session: Session, catalog_books: list[Book]):
        assert catalog.count_books(db_session) == 4
        assert catalog.count_authors(db_session) == 3

    def test_book_counts_by_author(self, db_session: Session, catalog_books: list[Book]):
        dostoevsky = catalog.find_author_by_name(db_session, "Fyodor Dostoevsky")
        fowler = catalog.find_author_by_name(db_session, "Martin Fowler")

        counts = catalog.book_counts_by_author(db_session)

        assert counts[dostoevsky.id] == 2
        assert counts[fowler.id] == 1
        assert catalog.count_books_by_author(db_session, dostoevsky.id) == 2

    def test_author_without_books_is_absent(self, db_session: Session):
        author = catalog.create_author(db_session, "Joshua Kerievsky")

        assert author.id not in catalog.book_counts_by_author(db_session)
        assert catalog.count_books_by_author(db_session, author.id) == 0


class TestGetOrCreateAuthor:
    """Tests for the conditional insert of authors."""

    def test_creates_new_author(self, db_session: Session):
        author = catalog.get_or_create_author(db_session, "Sandi Metz")

        assert author.id is not None
        assert author.name == "Sandi Metz"
        assert author.born is None
        assert catalog.count_authors(db_session) == 1

    def test_returns_existing_author(self, db_session: Session, sample_author: Author):
        author = catalog.get_or_create_author(db_session, "Robert Martin")

        assert author.id == sample_author.id
        assert catalog.count_authors(db_session) == 1

    def test_repeated_calls_create_one_author(self, db_session: Session):
        first = catalog.get_or_create_author(db_session, "Sandi Metz")
        second = catalog.get_or_create_author(db_session, "Sandi Metz")

        assert first.id == second.id
        assert catalog.count_authors(db_session) == 1

    def test_name_match_is_exact(self, db_session: Session, sample_author: Author):
        author = catalog.get_or_create_author(db_session, "robert martin")

        assert author.id != sample_author.id
        assert catalog.count_authors(db_session) == 2

    def test_blank_name_rejected(self, db_session: Session):
        with pytest.raises(ValidationError):
            catalog.get_or_create_author(db_session, "   ")


class TestFindBooks:
    """Tests for filtering books by author and genre."""

    def test_no_filters(self, db_session: Session, catalog_books: list[Book]):
        books = catalog.find_books(db_session)

        assert [b.title for b in books] == [b.title for b in catalog_books]

    def test_author_is_loaded(self, db_session: Session, sample_book: Book):
        books = catalog.find_books(db_session)

        assert books[0].author.name == "Robert Martin"

    def test_genre_filter(self, db_session: Session, catalog_books: list[Book]):
        books = catalog.find_books(db_session, genre="classic")

        assert {b.title for b in books} == {"Crime and punishment", "Demons"}

    def test_genre_filter_is_case_sensitive(self, db_session: Session, catalog_books: list[Book]):
        books = catalog.find_books(db_session, genre="refactoring")

        assert [b.title for b in books] == ["Refactoring, edition 2"]

    def test_genre_filter_no_partial_match(self, db_session: Session, catalog_books: list[Book]):
        assert catalog.find_books(db_session, genre="class") == []
        assert catalog.find_books(db_session, genre="classics") == []

    def test_author_filter(self, db_session: Session, catalog_books: list[Book]):
        books = catalog.find_books(db_session, author="Fyodor Dostoevsky")

        assert {b.title for b in books} == {"Crime and punishment", "Demons"}

    def test_unknown_author_gives_empty_result(self, db_session: Session, catalog_books: list[Book]):
        assert catalog.find_books(db_session, author="Nobody") == []
        assert catalog.find_books(db_session, author="Nobody", genre="classic") == []

    def test_filters_combine(self, db_session: Session, catalog_books: list[Book]):
        books = catalog.find_books(db_session, author="Fyodor Dostoevsky", genre="crime")

        assert [b.title for b in books] == ["Crime and punishment"]
        assert catalog.find_books(db_session, author="Martin Fowler", genre="classic") == []

    def test_empty_filters_are_ignored(self, db_session: Session, catalog_books: list[Book]):
        assert len(catalog.find_books(db_session, author="", genre="")) == 4
        assert [b.title for b in catalog.find_books(db_session, author="", genre="crime")] == [
            "Crime and punishment"
        ]

    def test_genres_keep_order(self, db_session: Session, catalog_books: list[Book]):
        books = catalog.find_books(db_session, genre="revolution")

        assert books[0].genres == ["classic", "revolution"]


class TestCreateBook:
    """Tests for create_book / add_book."""

    def test_create_book(self, db_session: Session, sample_author: Author):
        book = catalog.create_book(
            db_session,
            title="Agile software development",
            published=2002,
            author_id=sample_author.id,
            genres=["agile", "patterns", "design"],
        )

        assert book.id is not None
        assert book.author.name == "Robert Martin"
        assert book.genres == ["agile", "patterns", "design"]

    def test_short_title_rejected(self, db_session: Session, sample_author: Author):
        with pytest.raises(ValidationError) as exc_info:
            catalog.create_book(
                db_session,
                title="A",
                published=2002,
                author_id=sample_author.id,
                genres=[],
            )

        assert "title" in exc_info.value.message
        assert catalog.count_books(db_session) == 0

    def test_add_book_creates_author(self, db_session: Session):
        book = catalog.add_book(
            db_session,
            title="Dune",
            author="Frank Herbert",
            published=1965,
            genres=["scifi"],
        )

        assert book.author.name == "Frank Herbert"
        assert catalog.count_authors(db_session) == 1

    def test_add_book_reuses_author(self, db_session: Session, sample_book: Book):
        book = catalog.add_book(
            db_session,
            title="Clean Architecture",
            author="Robert Martin",
            published=2017,
            genres=["design"],
        )

        assert book.author_id == sample_book.author_id
        assert catalog.count_authors(db_session) == 1

    def test_add_book_short_title_creates_nothing(self, db_session: Session):
        with pytest.raises(ValidationError):
            catalog.add_book(
                db_session,
                title="D",
                author="Frank Herbert",
                published=1965,
                genres=["scifi"],
            )

        assert catalog.count_authors(db_session) == 0
        assert catalog.count_books(db_session) == 0


class TestUpdateAuthorBorn:
    """Tests for update_author_born."""

    def test_sets_born(self, db_session: Session):
        author = catalog.create_author(db_session, "Sandi Metz")

        updated = catalog.update_author_born(db_session, author, 1970)

        assert updated.born == 1970
        assert catalog.find_author_by_name(db_session, "Sandi Metz").born == 1970


class TestIdentity:
    """Tests for the identity service."""

    def test_create_user_uses_initial_password(self, db_session: Session):
        user = identity.create_user(db_session, "hellas", "crime")

        assert user.id is not None
        assert user.favorite_genre == "crime"
        assert user.password_hash != TEST_PASSWORD
        assert verify_password(TEST_PASSWORD, user.password_hash)

    def test_create_user_with_password(self, db_session: Session):
        user = identity.create_user(db_session, "hellas", "crime", password="hunter22")

        assert verify_password("hunter22", user.password_hash)
        assert not verify_password(TEST_PASSWORD, user.password_hash)

    def test_short_username_rejected(self, db_session: Session):
        with pytest.raises(ValidationError):
            identity.create_user(db_session, "ab", "crime")

        assert identity.find_by_username(db_session, "ab") is None

    def test_username_format_is_free(self, db_session: Session):
        spaced = identity.create_user(db_session, "john doe", "crime")
        long_name = identity.create_user(db_session, "a" * 60, "crime")

        assert identity.find_by_username(db_session, "john doe").id == spaced.id
        assert identity.find_by_username(db_session, "a" * 60).id == long_name.id

    def test_duplicate_username_rejected(self, db_session: Session, sample_user: User):
        with pytest.raises(ValidationError) as exc_info:
            identity.create_user(db_session, "mluukkai", "crime")

        assert "already taken" in exc_info.value.message

    def test_find_by_id(self, db_session: Session, sample_user: User):
        assert identity.find_by_id(db_session, sample_user.id).username == "mluukkai"
        assert identity.find_by_id(db_session, sample_user.id + 1000) is None

    def test_authenticate(self, db_session: Session, sample_user: User):
        assert identity.authenticate(db_session, "mluukkai", TEST_PASSWORD).id == sample_user.id
        assert identity.authenticate(db_session, "mluukkai", "wrong-password") is None
        assert identity.authenticate(db_session, "nobody", TEST_PASSWORD) is None
