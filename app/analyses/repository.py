"""
Analyses repository - Data Access Layer for stored analyses.
Handles all database operations for Analysis entities.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.analyses.models import Analysis
from app.analyses.schemas import AnalysisCreate
from app.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class AnalysisRepository:
    """Repository for Analysis CRUD operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
            self,
            analysis_data: AnalysisCreate,
            user_id: Optional[str] = None,
    ) -> Analysis:
        """
        Create a new analysis in the database.

        Args:
            analysis_data: Analysis creation DTO
            user_id: Optional owner user ID

        Returns:
            Created Analysis entity
        """
        analysis = Analysis(
            id=str(uuid4()),
            text=analysis_data.text,
            summary=analysis_data.summary,
            meaning=analysis_data.meaning,
            poetic_devices=analysis_data.poetic_devices or [],
            themes=analysis_data.themes or [],
            emotional_tone=analysis_data.emotional_tone,
            historical_context=analysis_data.historical_context,
            word_analysis=analysis_data.word_analysis,
            interpretation=analysis_data.interpretation,
            english_translation=analysis_data.english_translation,
            is_favorite=analysis_data.is_favorite,
            tags=analysis_data.tags,
            user_id=user_id,
        )

        self.db.add(analysis)
        await self.db.flush()
        await self.db.refresh(analysis)

        logger.info(f"[AnalysisRepository] Created analysis: {analysis.id}")
        return analysis

    async def get_by_id(self, analysis_id: str) -> Analysis:
        """
        Get an analysis by its ID.

        Raises:
            NotFoundError: If analysis not found
        """
        stmt = select(Analysis).where(Analysis.id == analysis_id)
        result = await self.db.execute(stmt)
        analysis = result.scalar_one_or_none()

        if analysis is None:
            raise NotFoundError("Analysis not found")

        return analysis

    async def get_all(
            self,
            user_id: Optional[str] = None,
            is_favorite: Optional[bool] = None,
            tag: Optional[str] = None,
            skip: int = 0,
            limit: Optional[int] = None,
    ) -> Sequence[Analysis]:
        """
        Get analyses, newest first.

        Args:
            user_id: Restrict to analyses owned by this user
            is_favorite: Restrict by favorite flag
            tag: Restrict to analyses carrying this tag
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of Analysis entities
        """
        stmt = select(Analysis).order_by(Analysis.created_at.desc(), Analysis.id.desc())

        if user_id is not None:
            stmt = stmt.where(Analysis.user_id == user_id)
        if is_favorite is not None:
            stmt = stmt.where(Analysis.is_favorite == is_favorite)

        if tag is None:
            stmt = stmt.offset(skip)
            if limit is not None:
                stmt = stmt.limit(limit)
            result = await self.db.execute(stmt)
            return result.scalars().all()

        # Tags live in a JSON column; filter in Python to stay dialect-neutral
        result = await self.db.execute(stmt)
        tagged = [a for a in result.scalars().all() if tag in (a.tags or [])]
        end = skip + limit if limit is not None else None
        return tagged[skip:end]

    async def update(self, analysis_id: str, fields: Dict[str, Any]) -> Analysis:
        """
        Merge the given fields into a stored analysis.

        Args:
            analysis_id: Analysis UUID
            fields: Column name to new value

        Raises:
            NotFoundError: If analysis not found
        """
        analysis = await self.get_by_id(analysis_id)

        for key, value in fields.items():
            setattr(analysis, key, value)
        analysis.updated_at = datetime.now(timezone.utc)

        await self.db.flush()
        await self.db.refresh(analysis)

        logger.info(f"[AnalysisRepository] Updated analysis: {analysis_id} ({', '.join(fields)})")
        return analysis

    async def delete(self, analysis_id: str) -> None:
        """
        Delete an analysis by its ID.

        Raises:
            NotFoundError: If analysis not found
        """
        analysis = await self.get_by_id(analysis_id)
        await self.db.delete(analysis)
        await self.db.flush()

        logger.info(f"[AnalysisRepository] Deleted analysis: {analysis_id}")
