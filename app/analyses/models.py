"""
SQLAlchemy models for the analyses module.
Defines the Analysis table structure.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.auth.models import User

# JSONB on PostgreSQL, plain JSON elsewhere
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class Analysis(Base):
    """
    A stored literary breakdown of one input text.

    Only ``text`` is required; the analytic fields stay empty when the
    provider returned a partial reply.
    """

    __tablename__ = "analyses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)

    summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    meaning: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    poetic_devices: Mapped[List[str]] = mapped_column(
        JSONDocument,
        nullable=False,
        default=list,
    )
    themes: Mapped[List[str]] = mapped_column(
        JSONDocument,
        nullable=False,
        default=list,
    )
    emotional_tone: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    historical_context: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # Structure: {"word or phrase": "explanatory note", ...}
    word_analysis: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        JSONDocument,
        nullable=True,
    )
    interpretation: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    english_translation: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    is_favorite: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        index=True,
    )
    tags: Mapped[List[str]] = mapped_column(
        JSONDocument,
        nullable=False,
        default=list,
    )

    # Optional owner; deleting an analysis never touches the user
    user_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    user: Mapped[Optional["User"]] = relationship(
        "User",
        back_populates="analyses",
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Analysis(id={self.id}, user_id={self.user_id}, created_at={self.created_at})>"
