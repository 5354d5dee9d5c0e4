"""
Book Pydantic Schemas

Validation rules applied before a book row is written.

Schemas:
- BookBase: Fields shared by every way of creating a book
- BookCreate: A book whose author is already resolved to an id
- BookCreateByAuthor: A book whose author is given by name, as in addBook
"""

from pydantic import BaseModel, Field, field_validator


class BookBase(BaseModel):
    """Base schema with shared book fields."""

    title: str = Field(
        ...,
        min_length=2,
        max_length=500,
        description="Book title (at least 2 characters)",
        examples=["Clean Code", "Dune"],
    )

    published: int = Field(
        ...,
        description="Year of publication",
        examples=[2008, 1965],
    )

    genres: list[str] = Field(
        default_factory=list,
        description="Genre tags, order preserved",
        examples=[["refactoring"], ["classic", "revolution"]],
    )

    @field_validator("genres")
    @classmethod
    def genres_must_fit_column(cls, v: list[str]) -> list[str]:
        """Each tag must fit the book_genres.name column."""
        for genre in v:
            if len(genre) > 100:
                raise ValueError("Genre names must be at most 100 characters")
        return v


class BookCreate(BookBase):
    """Schema for inserting a book row."""

    author_id: int = Field(
        ...,
        description="ID of the book's author",
    )


class BookCreateByAuthor(BookBase):
    """
    Schema for the addBook mutation.

    Validated as a whole before the author is looked up or created, so a
    bad title never leaves a new author behind.
    """

    author: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author's full name",
        examples=["Robert Martin"],
    )

    @field_validator("author")
    @classmethod
    def author_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Author name cannot be empty or whitespace")
        return v
