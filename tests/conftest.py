"""
pytest Fixtures for Library Catalog API Tests

This file contains shared fixtures used across all test files.

FIXTURE SCOPES:
- session scope for the engine (expensive to create)
- function scope for sessions (isolation between tests)

Every test runs inside a transaction on a single connection that is
rolled back afterwards, so commits made by the services never leak
into the next test.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["INITIAL_USER_PASSWORD"] = "sekret-for-tests"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from library_api.database import Base, get_db
from library_api.main import app
from library_api.models import Author, Book, User
from library_api.services.security import hash_password, issue_token

TEST_PASSWORD = os.environ["INITIAL_USER_PASSWORD"]


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory: fast, isolated, no external database needed.
# StaticPool keeps the one connection (and so the database) alive.

@pytest.fixture(scope="session")
def engine():
    """Create a SQLite in-memory database engine with all tables."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session is bound to a connection whose transaction is rolled
    back after the test; session.commit() inside the code under test
    does not end that outer transaction.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    get_db is overridden, so the GraphQL context receives the test
    session through its dependency.
    """

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_author(db_session: Session) -> Author:
    """Create a sample author for testing."""
    author = Author(name="Robert Martin", born=1952)
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_book(db_session: Session, sample_author: Author) -> Book:
    """Create a sample book by sample_author."""
    book = Book(
        title="Clean Code",
        published=2008,
        author=sample_author,
        genres=["refactoring"],
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def catalog_books(db_session: Session) -> list[Book]:
    """
    A small catalog with three authors and overlapping genres.

    - Fyodor Dostoevsky: Crime and punishment [classic, crime],
      Demons [classic, revolution]
    - Martin Fowler: Refactoring, edition 2 [refactoring]
    - Sandi Metz: Practical Object-Oriented Design [Refactoring, design]
    """
    dostoevsky = Author(name="Fyodor Dostoevsky", born=1821)
    fowler = Author(name="Martin Fowler", born=1963)
    metz = Author(name="Sandi Metz")
    books = [
        Book(title="Crime and punishment", published=1866, author=dostoevsky, genres=["classic", "crime"]),
        Book(title="Demons", published=1872, author=dostoevsky, genres=["classic", "revolution"]),
        Book(title="Refactoring, edition 2", published=2018, author=fowler, genres=["refactoring"]),
        Book(title="Practical Object-Oriented Design", published=2012, author=metz, genres=["Refactoring", "design"]),
    ]
    db_session.add_all(books)
    db_session.commit()
    for book in books:
        db_session.refresh(book)
    return books


@pytest.fixture
def sample_user(db_session: Session) -> User:
    """Create a sample user whose password is TEST_PASSWORD."""
    user = User(
        username="mluukkai",
        favorite_genre="refactoring",
        password_hash=hash_password(TEST_PASSWORD),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def get_auth_token(user: User) -> str:
    """Generate a bearer token for a user."""
    return issue_token({"username": user.username, "id": user.id})


@pytest.fixture
def auth_token(sample_user: User) -> str:
    """Bearer token for sample_user."""
    return get_auth_token(sample_user)
