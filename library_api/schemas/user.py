"""
User Pydantic Schemas

These schemas define the shape of user and token data.

Schemas:
- UserCreate: Registration data (username, favorite genre, optional password)
- TokenPayload: Claims carried by a bearer token
"""

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """
    Schema for user registration.

    Username must be at least 3 characters; uniqueness is checked by the
    identity store against the database.
    """

    username: str = Field(
        ...,
        min_length=3,
        max_length=255,
        description="Unique username (at least 3 characters)",
        examples=["mluukkai", "root"],
    )

    favorite_genre: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Genre the user prefers",
        examples=["refactoring", "crime"],
    )

    password: str | None = Field(
        default=None,
        min_length=6,
        max_length=72,
        description="Password; the configured initial password when omitted",
    )


class TokenPayload(BaseModel):
    """
    Claims embedded in a bearer token.

    ``id`` is the user's primary key; ``username`` is informational.
    """

    username: str
    id: int
