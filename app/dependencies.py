"""
Authentication dependencies for FastAPI.
Provides user authentication via JWT bearer tokens.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.models import User
from app.auth.service import get_auth_service
from app.core.dependencies import AppSettings, DBSession
from app.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


async def get_current_user(
        credentials: Annotated[
            Optional[HTTPAuthorizationCredentials],
            Depends(security)
        ],
        db: DBSession,
        settings: AppSettings,
) -> User:
    """
    Dependency to get the current authenticated user.

    Extracts JWT from Authorization header and validates it.

    Raises:
        HTTPException: If authentication fails
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    auth_service = get_auth_service(db, settings)

    try:
        return await auth_service.get_current_user(credentials.credentials)
    except UnauthorizedError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_user_optional(
        credentials: Annotated[
            Optional[HTTPAuthorizationCredentials],
            Depends(security)
        ],
        db: DBSession,
        settings: AppSettings,
) -> Optional[User]:
    """
    Dependency to optionally get the current authenticated user.

    Returns None if no token provided or token is invalid, so endpoints
    work with or without authentication.
    """
    if not credentials or not settings.jwt_secret_key:
        return None

    auth_service = get_auth_service(db, settings)

    try:
        return await auth_service.get_current_user(credentials.credentials)
    except UnauthorizedError:
        return None


# Type aliases for cleaner dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[Optional[User], Depends(get_current_user_optional)]
