"""
Catalog Service

Persistence of authors and books.

Authors are identified by name when books reference them. The UNIQUE
constraint on authors.name plus a conditional insert makes get-or-create
a single statement, so concurrent requests naming the same new author
still end up with one row.
"""

import logging

import pydantic
from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, selectinload

from library_api.errors import ValidationError
from library_api.models import Author, Book, BookGenre
from library_api.schemas.author import AuthorCreate
from library_api.schemas.book import BookCreate, BookCreateByAuthor

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO NOTHING
_CONFLICT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _validation_error(e: pydantic.ValidationError) -> ValidationError:
    messages = [f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}" for error in e.errors()]
    return ValidationError("; ".join(messages), errors=messages)


# =============================================================================
# Counts
# =============================================================================


def count_books(db: Session) -> int:
    """Total number of books."""
    return db.execute(select(func.count(Book.id))).scalar() or 0


def count_authors(db: Session) -> int:
    """Total number of authors."""
    return db.execute(select(func.count(Author.id))).scalar() or 0


def count_books_by_author(db: Session, author_id: int) -> int:
    """Number of books whose author is ``author_id``."""
    stmt = select(func.count(Book.id)).where(Book.author_id == author_id)
    return db.execute(stmt).scalar() or 0


def book_counts_by_author(db: Session) -> dict[int, int]:
    """
    Book count of every author that has at least one book.

    One grouped query instead of a count per author. Authors with no
    books are absent from the result.
    """
    stmt = select(Book.author_id, func.count(Book.id)).group_by(Book.author_id)
    return {author_id: count for author_id, count in db.execute(stmt).all()}


# =============================================================================
# Authors
# =============================================================================


def find_author_by_name(db: Session, name: str) -> Author | None:
    """Get an author by exact name."""
    stmt = select(Author).where(Author.name == name)
    return db.execute(stmt).scalar_one_or_none()


def find_authors(db: Session) -> list[Author]:
    """All authors, oldest first."""
    stmt = select(Author).order_by(Author.id)
    return list(db.execute(stmt).scalars().all())


def create_author(db: Session, name: str) -> Author:
    """
    Insert a new author.

    Raises:
        ValidationError: If the name is empty or too long

    Note:
        Flushes but does not commit; the caller owns the transaction.
    """
    try:
        data = AuthorCreate(name=name)
    except pydantic.ValidationError as e:
        raise _validation_error(e) from e

    author = Author(name=data.name)
    db.add(author)
    db.flush()
    logger.info(f"Created author {author.name!r} (id={author.id})")
    return author


def get_or_create_author(db: Session, name: str) -> Author:
    """
    Get the author with this exact name, creating it if needed.

    The insert is skipped by the database when the name already exists,
    so there is no window between lookup and insert.

    Raises:
        ValidationError: If the name is empty or too long

    Note:
        Does not commit; the caller owns the transaction.
    """
    try:
        data = AuthorCreate(name=name)
    except pydantic.ValidationError as e:
        raise _validation_error(e) from e

    dialect = db.get_bind().dialect.name
    insert = _CONFLICT_INSERTS.get(dialect)

    if insert is None:
        author = find_author_by_name(db, data.name)
        return author if author is not None else create_author(db, data.name)

    stmt = (
        insert(Author)
        .values(name=data.name)
        .on_conflict_do_nothing(index_elements=["name"])
    )
    result = db.execute(stmt)
    if result.rowcount:
        logger.info(f"Created author {data.name!r}")

    return find_author_by_name(db, data.name)


def update_author_born(db: Session, author: Author, year: int) -> Author:
    """
    Set an author's birth year.

    Note:
        This function commits the changes to the database.
    """
    author.born = year
    db.commit()
    db.refresh(author)
    logger.info(f"Set birth year of {author.name!r} to {year}")
    return author


# =============================================================================
# Books
# =============================================================================


def find_books(
    db: Session,
    author: str | None = None,
    genre: str | None = None,
) -> list[Book]:
    """
    Books matching every given filter, with their authors loaded.

    A filter that is None or an empty string is not applied.

    Args:
        db: Database session
        author: Exact author name; an unknown name matches no books
        genre: Exact genre tag (case-sensitive) the book must carry

    Returns:
        Matching books ordered by id
    """
    stmt = select(Book).options(
        selectinload(Book.author),
        selectinload(Book.genre_entries),
    )

    if author:
        author_row = find_author_by_name(db, author)
        if author_row is None:
            return []
        stmt = stmt.where(Book.author_id == author_row.id)

    if genre:
        stmt = stmt.where(Book.genre_entries.any(BookGenre.name == genre))

    stmt = stmt.order_by(Book.id)
    return list(db.execute(stmt).scalars().all())


def create_book(
    db: Session,
    title: str,
    published: int,
    author_id: int,
    genres: list[str],
) -> Book:
    """
    Insert a new book.

    Raises:
        ValidationError: If the title is shorter than 2 characters or
            another field is invalid

    Note:
        This function commits the changes to the database, including
        any author created earlier in the same transaction.
    """
    try:
        data = BookCreate(
            title=title,
            published=published,
            author_id=author_id,
            genres=genres,
        )
    except pydantic.ValidationError as e:
        raise _validation_error(e) from e

    book = Book(
        title=data.title,
        published=data.published,
        author_id=data.author_id,
        genres=data.genres,
    )
    db.add(book)
    db.commit()

    stmt = (
        select(Book)
        .options(selectinload(Book.author), selectinload(Book.genre_entries))
        .where(Book.id == book.id)
    )
    book = db.execute(stmt).scalar_one()
    logger.info(f"Created book {book.title!r} (id={book.id}) by {book.author.name!r}")
    return book


def add_book(
    db: Session,
    title: str,
    author: str,
    published: int,
    genres: list[str],
) -> Book:
    """
    Create a book, creating its author first if the name is new.

    Every field is validated before anything is written.

    Raises:
        ValidationError: If any field is invalid

    Note:
        This function commits the changes to the database.
    """
    try:
        data = BookCreateByAuthor(
            title=title,
            author=author,
            published=published,
            genres=genres,
        )
    except pydantic.ValidationError as e:
        raise _validation_error(e) from e

    author_row = get_or_create_author(db, data.author)
    return create_book(
        db,
        title=data.title,
        published=data.published,
        author_id=author_row.id,
        genres=data.genres,
    )
