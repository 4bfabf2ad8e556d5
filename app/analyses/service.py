"""
Analyses service - Business logic for stored analyses.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.analyses.repository import AnalysisRepository
from app.analyses.schemas import AnalysisCreate, AnalysisRead, AnalysisUpdate
from app.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


class AnalysisStoreService:
    """Service for create/read/update/delete over stored analyses."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = AnalysisRepository(db)

    async def create(
            self,
            data: AnalysisCreate,
            user_id: Optional[str] = None,
    ) -> AnalysisRead:
        """
        Persist a new analysis.

        Raises:
            ValidationError: If text is missing or blank
        """
        if not data.text or not data.text.strip():
            raise ValidationError("Text is required")

        analysis = await self.repository.create(data, user_id=user_id)
        await self.db.commit()
        return AnalysisRead.model_validate(analysis)

    async def get(self, analysis_id: str) -> AnalysisRead:
        """
        Get one analysis.

        Raises:
            NotFoundError: If analysis not found
        """
        analysis = await self.repository.get_by_id(analysis_id)
        return AnalysisRead.model_validate(analysis)

    async def list_all(
            self,
            user_id: Optional[str] = None,
            is_favorite: Optional[bool] = None,
            tag: Optional[str] = None,
            skip: int = 0,
            limit: Optional[int] = None,
    ) -> List[AnalysisRead]:
        """List analyses newest first, optionally filtered."""
        analyses = await self.repository.get_all(
            user_id=user_id,
            is_favorite=is_favorite,
            tag=tag,
            skip=skip,
            limit=limit,
        )
        return [AnalysisRead.model_validate(a) for a in analyses]

    async def update(self, analysis_id: str, data: AnalysisUpdate) -> AnalysisRead:
        """
        Merge the fields present in ``data`` into a stored analysis.

        Raises:
            NotFoundError: If analysis not found
        """
        fields = data.model_dump(exclude_unset=True)
        # Lists are stored non-null
        for key in ("poetic_devices", "themes", "tags"):
            if key in fields and fields[key] is None:
                fields[key] = []

        analysis = await self.repository.update(analysis_id, fields)
        await self.db.commit()
        return AnalysisRead.model_validate(analysis)

    async def delete(self, analysis_id: str) -> None:
        """
        Delete an analysis.

        Raises:
            NotFoundError: If analysis not found
        """
        await self.repository.delete(analysis_id)
        await self.db.commit()


def get_analysis_store_service(db: AsyncSession) -> AnalysisStoreService:
    """Factory function for AnalysisStoreService."""
    return AnalysisStoreService(db)
