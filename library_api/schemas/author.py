"""
Author Pydantic Schemas

Validation rules applied before an author row is written.
"""

from pydantic import BaseModel, Field, field_validator


class AuthorCreate(BaseModel):
    """
    Schema for creating an author from a book's author name.

    The name is the natural key, so it is kept exactly as given;
    only empty or whitespace-only names are rejected.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author's full name",
        examples=["Robert Martin", "Fyodor Dostoevsky"],
    )

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        """Reject names made only of whitespace."""
        if not v.strip():
            raise ValueError("Name cannot be empty or whitespace")
        return v

