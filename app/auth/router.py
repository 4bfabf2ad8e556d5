"""
Authentication router - API endpoints for user authentication.
Supports email/password signup and login with bearer tokens.
"""

import logging

from fastapi import APIRouter, Request, status

from app.auth.schemas import (
    AuthError,
    AuthResponse,
    LoginRequest,
    SignupRequest,
    UserRead,
)
from app.auth.service import get_auth_service
from app.core.dependencies import AppSettings, DBSession
from app.core.exceptions import (
    ConfigurationError,
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    error_response,
)
from app.dependencies import CurrentUser
from app.rate_limit import limiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Create a new user account with email and password.",
    responses={
        201: {"model": AuthResponse, "description": "User registered successfully"},
        400: {"model": AuthError, "description": "Missing fields or email already registered"},
        429: {"description": "Rate limit exceeded"},
    },
)
@limiter.limit("10/minute")
async def signup(
        request: Request,
        data: SignupRequest,
        db: DBSession,
        settings: AppSettings,
) -> AuthResponse:
    """Register a new user and return a bearer token."""
    logger.info(f"[AuthRouter] Signup request: {data.email}")

    try:
        auth_service = get_auth_service(db, settings)
        return await auth_service.signup(data)

    except (ValidationError, ConflictError) as e:
        logger.warning(f"[AuthRouter] Signup failed: {e.message}")
        return error_response(e)

    except ConfigurationError as e:
        logger.error(f"[AuthRouter] Signup unavailable: {e.message}")
        return error_response(e)


@router.post(
    "/login",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Login with email and password",
    description="Authenticate user with email and password credentials.",
    responses={
        200: {"model": AuthResponse, "description": "Login successful"},
        400: {"model": AuthError, "description": "Missing fields or invalid password"},
        404: {"model": AuthError, "description": "User not found"},
        429: {"description": "Rate limit exceeded"},
    },
)
@limiter.limit("10/minute")
async def login(
        request: Request,
        data: LoginRequest,
        db: DBSession,
        settings: AppSettings,
) -> AuthResponse:
    """Login with email and password and return a bearer token."""
    logger.info(f"[AuthRouter] Login request: {data.email}")

    try:
        auth_service = get_auth_service(db, settings)
        return await auth_service.login(data)

    except (ValidationError, NotFoundError, UnauthorizedError) as e:
        logger.warning(f"[AuthRouter] Login failed: {e.message}")
        return error_response(e)

    except ConfigurationError as e:
        logger.error(f"[AuthRouter] Login unavailable: {e.message}")
        return error_response(e)


@router.get(
    "/me",
    response_model=UserRead,
    status_code=status.HTTP_200_OK,
    summary="Get current user",
    description="Return the profile of the user owning the bearer token.",
    responses={
        200: {"model": UserRead, "description": "Current user"},
        401: {"model": AuthError, "description": "Not authenticated"},
    },
)
async def me(
        current_user: CurrentUser,
        db: DBSession,
        settings: AppSettings,
) -> UserRead:
    """Return the current user with the ids of their analyses, newest first."""
    auth_service = get_auth_service(db, settings)
    user = await auth_service.get_user_with_analyses(current_user.id)

    return UserRead(
        id=user.id,
        email=user.email,
        name=user.name,
        created_at=user.created_at,
        analysis_ids=[analysis.id for analysis in user.analyses],
    )
