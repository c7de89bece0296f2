"""Shared API dependencies for database access and admin authentication."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from charcha_manch.core.security import ADMIN_ROLE, decode_access_token
from charcha_manch.core.settings import settings
from charcha_manch.db.session import get_db

# HTTP Bearer scheme; missing headers are handled below so auth can be switched off.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def require_admin(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str:
    """Ensure the request carries an admin token.

    Args:
        credentials: HTTP Bearer token credentials, if any

    Returns:
        The token subject, or ``"anonymous"`` when admin auth is disabled

    Raises:
        HTTPException: If the token is missing, invalid, or not an admin token
    """
    if not settings.admin_auth_enabled:
        return "anonymous"
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = decode_access_token(credentials.credentials)
    except ValueError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from err
    if payload.get("role") != ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return str(payload.get("sub"))


# Type alias for admin dependency
AdminDep = Annotated[str, Depends(require_admin)]
