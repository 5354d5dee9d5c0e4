"""
Book Model

The central model of the catalog, representing books in the database.

This file also contains the BookGenre model. A book's genres are free-form
strings whose order is significant, so they live in a child table keyed by
(book_id, position) instead of a shared genres table.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base

if TYPE_CHECKING:
    from library_api.models.author import Author


class BookGenre(Base):
    """
    One genre tag of a book.

    Table: book_genres

    Indexes:
    - Primary key on (book_id, position)
    - name: For filtering books by genre
    """

    __tablename__ = "book_genres"

    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    )

    position: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        comment="Index of the genre in the book's genre list"
    )

    name: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Genre tag, matched exactly when filtering"
    )

    book: Mapped["Book"] = relationship("Book", back_populates="genre_entries")

    def __repr__(self) -> str:
        return f"BookGenre(book_id={self.book_id}, position={self.position}, name='{self.name}')"


class Book(Base):
    """
    Book model representing books in the library.

    Table: books

    Fields:
    - title: Book title (at least 2 characters, checked before insert)
    - published: Year of publication
    - author_id: The author that wrote the book

    Relationships:
    - author: Many-to-One
    - genre_entries: One-to-Many, ordered by position

    Example:
        book = Book(
            title="Dune",
            published=1965,
            author=author,
            genres=["scifi", "classic"],
        )
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    published: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Year of publication"
    )

    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id"),
        index=True,
        nullable=False,
        comment="Author who wrote the book"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    author: Mapped["Author"] = relationship(
        "Author",
        back_populates="books",
    )

    genre_entries: Mapped[list[BookGenre]] = relationship(
        BookGenre,
        back_populates="book",
        order_by=BookGenre.position,
        cascade="all, delete-orphan",
    )

    def __init__(self, genres: list[str] | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        if genres is not None:
            self.genres = genres

    @property
    def genres(self) -> list[str]:
        """Genre tags in the order they were given."""
        return [entry.name for entry in self.genre_entries]

    @genres.setter
    def genres(self, names: list[str]) -> None:
        self.genre_entries = [
            BookGenre(position=position, name=name)
            for position, name in enumerate(names)
        ]

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', published={self.published})"
