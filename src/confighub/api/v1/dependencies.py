"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from confighub.core.errors import AuthenticationRequired
from confighub.core.security import decode_access_token
from confighub.db.session import get_db
from confighub.models import User
from confighub.services import permissions

# HTTP Bearer scheme; missing credentials are reported as our own 401
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def _load_user(db: Session, token: str) -> User:
    user_id = decode_access_token(token)
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise AuthenticationRequired("User not found")
    return user


def get_current_user(credentials: CredentialsDep, db: SessionDep) -> User:
    """Get the current authenticated user from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if any
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        AuthenticationRequired: If the token is missing, invalid or names no user
    """
    if credentials is None:
        raise AuthenticationRequired("Authentication required")
    return _load_user(db, credentials.credentials)


def get_optional_user(credentials: CredentialsDep, db: SessionDep) -> User | None:
    """Return the caller when a valid token is supplied, otherwise None."""
    if credentials is None:
        return None
    try:
        return _load_user(db, credentials.credentials)
    except AuthenticationRequired:
        return None


def get_active_user(current_user: Annotated[User, Depends(get_current_user)]) -> User:
    """Return the caller, rejecting suspended accounts."""
    permissions.ensure_active(current_user)
    return current_user


# Type aliases for user dependencies
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]
ActiveUserDep = Annotated[User, Depends(get_active_user)]
