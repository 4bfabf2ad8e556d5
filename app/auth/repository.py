"""
Authentication repository - Data Access Layer for users.
Handles all database operations for User entities.
"""

import logging
from typing import Optional
from uuid import uuid4

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.auth.models import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User CRUD operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
            self,
            email: str,
            hashed_password: str,
            name: Optional[str] = None,
    ) -> User:
        """
        Create a new user.

        Args:
            email: User email address
            hashed_password: Pre-hashed password
            name: Display name, defaults to the email

        Returns:
            Created User entity
        """
        user = User(
            id=str(uuid4()),
            email=email.lower(),
            name=name or email,
            hashed_password=hashed_password,
        )

        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)

        logger.info(f"[UserRepository] Created user: {user.id}")
        return user

    async def get_by_id(
            self,
            user_id: str,
            with_analyses: bool = False,
    ) -> Optional[User]:
        """
        Get a user by ID.

        Args:
            user_id: User UUID
            with_analyses: Whether to eagerly load owned analyses

        Returns:
            User entity or None
        """
        stmt = select(User).where(User.id == user_id)

        if with_analyses:
            stmt = stmt.options(selectinload(User.analyses))

        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get a user by email.

        Args:
            email: User email address

        Returns:
            User entity or None
        """
        stmt = select(User).where(User.email == email.lower())
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check whether an email is already registered."""
        stmt = (
            select(func.count())
            .select_from(User)
            .where(User.email == email.lower())
        )
        result = await self.db.execute(stmt)
        return result.scalar_one() > 0
