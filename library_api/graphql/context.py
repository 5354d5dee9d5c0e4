"""
GraphQL Context

Provides request context to all GraphQL resolvers including:
- Database session for queries
- Current authenticated user (if any)

The context is created fresh for each GraphQL request and passed
to all resolvers via the `info` parameter.
"""

import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext

from library_api.database import get_db
from library_api.models.user import User
from library_api.services import identity
from library_api.services.security import verify_token

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


class GraphQLContext(BaseContext):
    """
    Context object available to all GraphQL resolvers.

    Attributes:
        db: SQLAlchemy database session
        current_user: Authenticated user (None if anonymous)
    """

    def __init__(self, db: Session, current_user: User | None = None):
        super().__init__()
        self.db = db
        self.current_user = current_user


def get_user_from_token(db: Session, token: str) -> User | None:
    """
    Resolve a bearer token to its user.

    Args:
        db: Database session
        token: Token string (without the 'Bearer ' prefix)

    Returns:
        The user the token was issued for, or None if that user no
        longer exists

    Raises:
        InvalidTokenError: If the token does not verify
    """
    payload = verify_token(token)
    user = identity.find_by_id(db, payload.id)

    if user is None:
        logger.info(f"Token for unknown user id {payload.id}; treating request as anonymous")

    return user


def build_context(db: Session, authorization: str | None) -> GraphQLContext:
    """
    Build the context for one request from its Authorization header.

    A missing header, or one that uses another scheme, gives an anonymous
    context. A bearer token that fails verification aborts the request.

    Raises:
        InvalidTokenError: If a bearer token is present but invalid
    """
    if authorization and authorization.lower().startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX):].strip()
        return GraphQLContext(db=db, current_user=get_user_from_token(db, token))

    return GraphQLContext(db=db)


async def get_context(
    request: Request,
    db: Session = Depends(get_db),
) -> GraphQLContext:
    """
    Create GraphQL context for each request.

    Called by Strawberry for every GraphQL request. The session comes
    from the get_db dependency, so it is closed when the request ends.
    """
    return build_context(db, request.headers.get("Authorization"))
