"""
Identity Service

Persistence of user records and credential checks.

All functions take the request's database session as their first
argument; nothing here holds a session or connection of its own.
"""

import logging

import pydantic
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from library_api.config import get_settings
from library_api.errors import ValidationError
from library_api.models.user import User
from library_api.schemas.user import UserCreate
from library_api.services.security import hash_password, verify_password

logger = logging.getLogger(__name__)
settings = get_settings()

# Hash checked for unknown usernames so both login failures cost one bcrypt round
_dummy_hash: str | None = None


def _get_dummy_hash() -> str:
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password("dummy-password-for-timing")
    return _dummy_hash


def find_by_username(db: Session, username: str) -> User | None:
    """Get a user by exact username."""
    stmt = select(User).where(User.username == username)
    return db.execute(stmt).scalar_one_or_none()


def find_by_id(db: Session, user_id: int) -> User | None:
    """Get a user by primary key."""
    return db.get(User, user_id)


def create_user(
    db: Session,
    username: str,
    favorite_genre: str,
    password: str | None = None,
) -> User:
    """
    Create a new user.

    Args:
        db: Database session
        username: Unique username, at least 3 characters
        favorite_genre: Genre the user prefers
        password: Plain password; the configured initial password if None

    Returns:
        The persisted user

    Raises:
        ValidationError: If a field is invalid or the username is taken

    Note:
        This function commits the changes to the database.
    """
    try:
        data = UserCreate(
            username=username,
            favorite_genre=favorite_genre,
            password=password,
        )
    except pydantic.ValidationError as e:
        messages = [error["msg"] for error in e.errors()]
        raise ValidationError("; ".join(messages), errors=messages) from e

    if find_by_username(db, data.username) is not None:
        raise ValidationError(f"Username '{data.username}' is already taken")

    user = User(
        username=data.username,
        favorite_genre=data.favorite_genre,
        password_hash=hash_password(data.password or settings.initial_user_password),
    )
    db.add(user)

    try:
        db.commit()
    except IntegrityError as e:
        # Another request took the username between the check and the insert
        db.rollback()
        raise ValidationError(f"Username '{data.username}' is already taken") from e

    db.refresh(user)
    logger.info(f"Created user {user.username} (id={user.id})")
    return user


def authenticate(db: Session, username: str, password: str) -> User | None:
    """
    Check a username/password pair.

    Returns:
        The user if the credentials match, None otherwise. Which of the
        two checks failed is not revealed.
    """
    user = find_by_username(db, username)

    if user is None:
        verify_password(password, _get_dummy_hash())
        logger.info(f"Failed login for unknown user {username!r}")
        return None

    if not verify_password(password, user.password_hash):
        logger.info(f"Failed login for user {username!r}")
        return None

    return user
