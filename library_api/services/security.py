"""
Security Service

Handles password hashing and bearer token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib)
2. JWT token issuing and verification (python-jose)

Tokens carry the user's username and id, are signed with HS256 using the
configured SECRET_KEY and have no expiry claim. Nothing about a token is
stored server-side; the user record is looked up again on every request.

Usage:
    from library_api.services.security import issue_token, verify_token

    token = issue_token({"username": "mluukkai", "id": 1})
    payload = verify_token(token)
    payload.id  # 1
"""

import logging

import pydantic
from jose import JWTError, jwt
from passlib.context import CryptContext

from library_api.config import get_settings
from library_api.errors import InvalidTokenError
from library_api.schemas.user import TokenPayload

logger = logging.getLogger(__name__)
settings = get_settings()

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Example:
        >>> hashed = hash_password("secret123")
        >>> hashed.startswith("$2b$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


# -------------------------------------------------------------------------
# Token Configuration
# -------------------------------------------------------------------------
ALGORITHM = "HS256"


def issue_token(data: dict) -> str:
    """
    Create a signed bearer token.

    Args:
        data: Claims to embed, ``{"username": str, "id": int}``

    Returns:
        Encoded JWT string (header.payload.signature)
    """
    claims = TokenPayload.model_validate(data).model_dump()

    return jwt.encode(
        claims,
        settings.secret_key,
        algorithm=ALGORITHM,
    )


def verify_token(token: str) -> TokenPayload:
    """
    Decode a bearer token and check its signature and claims.

    Args:
        token: The JWT string, without any "Bearer " prefix

    Returns:
        The decoded claims

    Raises:
        InvalidTokenError: If the token is malformed, its signature does
            not verify, or its claims are not ``{username, id}``
    """
    try:
        claims = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[ALGORITHM],
        )
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        raise InvalidTokenError() from e

    try:
        return TokenPayload.model_validate(claims)
    except pydantic.ValidationError as e:
        logger.warning("Token claims do not match the expected payload")
        raise InvalidTokenError() from e
