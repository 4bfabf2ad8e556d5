"""
Authentication service - Business logic for user authentication.
Handles password hashing, JWT tokens, signup and login.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import User
from app.auth.repository import UserRepository
from app.auth.schemas import (
    AuthResponse,
    LoginRequest,
    SignupRequest,
    TokenPayload,
    UserSummary,
)
from app.config import Settings, get_settings
from app.core.exceptions import (
    ConfigurationError,
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncSession, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or get_settings()
        self.repository = UserRepository(db)

    # ═══════════════════════════════════════════════════════════════════════
    # PASSWORD OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password using bcrypt."""
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return pwd_context.verify(plain_password, hashed_password)

    # ═══════════════════════════════════════════════════════════════════════
    # JWT TOKEN OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════

    def _secret_key(self) -> str:
        if not self.settings.jwt_secret_key:
            raise ConfigurationError("JWT secret key is not configured")
        return self.settings.jwt_secret_key

    def create_access_token(self, user: User) -> str:
        """
        Create a signed access token for a user.

        The same validity window applies to every issuance path.
        """
        expires = datetime.now(timezone.utc) + timedelta(
            days=self.settings.jwt_expire_days
        )
        payload = {
            "sub": user.id,
            "email": user.email,
            "exp": expires,
            "type": "access",
        }
        return jwt.encode(
            payload,
            self._secret_key(),
            algorithm=self.settings.jwt_algorithm,
        )

    def verify_token(self, token: str) -> TokenPayload:
        """
        Verify and decode a JWT token.

        Args:
            token: JWT token string

        Returns:
            TokenPayload with decoded data

        Raises:
            UnauthorizedError: If token is invalid or expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key(),
                algorithms=[self.settings.jwt_algorithm],
            )
        except JWTError as e:
            logger.warning(f"[AuthService] Token verification failed: {e}")
            raise UnauthorizedError("Invalid or expired token")

        if payload.get("type") != "access" or "sub" not in payload:
            raise UnauthorizedError("Invalid token")

        return TokenPayload(
            sub=payload["sub"],
            email=payload.get("email", ""),
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            type=payload["type"],
        )

    # ═══════════════════════════════════════════════════════════════════════
    # SIGNUP & LOGIN
    # ═══════════════════════════════════════════════════════════════════════

    async def signup(self, data: SignupRequest) -> AuthResponse:
        """
        Register a new user.

        Args:
            data: Signup request

        Returns:
            AuthResponse with token and user summary

        Raises:
            ValidationError: If email or password is missing
            ConflictError: If email already registered
        """
        if not data.email or not data.password:
            raise ValidationError("Email and password required")

        logger.info(f"[AuthService] Registering user: {data.email}")

        if await self.repository.email_exists(data.email):
            raise ConflictError("User already exists")

        # Fail before writing anything if tokens cannot be issued
        self._secret_key()

        hashed_password = self.hash_password(data.password)
        try:
            user = await self.repository.create(
                email=data.email,
                hashed_password=hashed_password,
                name=data.name,
            )
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("User already exists")

        token = self.create_access_token(user)

        logger.info(f"[AuthService] User registered successfully: {user.id}")

        return AuthResponse(
            message="User created",
            token=token,
            user=UserSummary.model_validate(user),
        )

    async def login(self, data: LoginRequest) -> AuthResponse:
        """
        Authenticate a user with email and password.

        Raises:
            ValidationError: If email or password is missing
            NotFoundError: If no user has this email
            UnauthorizedError: If the password does not match
        """
        if not data.email or not data.password:
            raise ValidationError("Email and password required")

        logger.info(f"[AuthService] Login attempt: {data.email}")

        user = await self.repository.get_by_email(data.email)
        if not user:
            raise NotFoundError("User not found")

        if not self.verify_password(data.password, user.hashed_password):
            raise UnauthorizedError("Invalid password")

        token = self.create_access_token(user)

        logger.info(f"[AuthService] User logged in: {user.id}")

        return AuthResponse(
            message="Login successful",
            token=token,
            user=UserSummary.model_validate(user),
        )

    # ═══════════════════════════════════════════════════════════════════════
    # USER MANAGEMENT
    # ═══════════════════════════════════════════════════════════════════════

    async def get_current_user(self, token: str) -> User:
        """
        Resolve a bearer token to its user.

        Raises:
            UnauthorizedError: If the token is bad or its user is gone
        """
        payload = self.verify_token(token)
        user = await self.repository.get_by_id(payload.sub)
        if not user:
            raise UnauthorizedError("User not found")
        return user

    async def get_user_with_analyses(self, user_id: str) -> User:
        """Load a user together with their analyses, newest first."""
        user = await self.repository.get_by_id(user_id, with_analyses=True)
        if not user:
            raise NotFoundError("User not found")
        return user


def get_auth_service(db: AsyncSession, settings: Optional[Settings] = None) -> AuthService:
    """Factory function for AuthService."""
    return AuthService(db, settings)
