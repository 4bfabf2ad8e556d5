"""
Analyses router - API endpoints for stored analyses.
"""

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, HTTPException, Query, status

from app.analyses.schemas import (
    AnalysisCreate,
    AnalysisCreatedResponse,
    AnalysisRead,
    AnalysisUpdate,
    ErrorResponse,
    MessageResponse,
)
from app.analyses.service import get_analysis_store_service
from app.core.dependencies import DBSession
from app.core.exceptions import (
    NotFoundError,
    ValidationError,
    error_response,
)
from app.dependencies import OptionalUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analyses", tags=["Analyses"])


@router.post(
    "",
    response_model=AnalysisCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save an analysis",
    description="Persist an analysis. Owned by the caller when a bearer token is sent.",
    responses={
        201: {"model": AnalysisCreatedResponse, "description": "Analysis saved"},
        400: {"model": ErrorResponse, "description": "Text is required"},
    },
)
async def create_analysis(
        data: AnalysisCreate,
        db: DBSession,
        current_user: OptionalUser,
) -> AnalysisCreatedResponse:
    """Save an analysis returned by the analyzer (or any partial one)."""
    user_id = current_user.id if current_user else None
    logger.info(f"[AnalysesRouter] Create request, user: {user_id}")

    try:
        service = get_analysis_store_service(db)
        analysis = await service.create(data, user_id=user_id)
        return AnalysisCreatedResponse(
            message="Analysis saved successfully",
            analysis=analysis,
        )

    except ValidationError as e:
        logger.warning(f"[AnalysesRouter] Create rejected: {e.message}")
        return error_response(e)


@router.get(
    "",
    response_model=Union[AnalysisRead, List[AnalysisRead]],
    status_code=status.HTTP_200_OK,
    summary="List analyses or fetch one",
    description="Without `id`, list analyses newest first. With `id`, return that analysis.",
    responses={
        404: {"model": ErrorResponse, "description": "Analysis not found"},
        401: {"model": ErrorResponse, "description": "`mine` requires authentication"},
    },
)
async def list_analyses(
        db: DBSession,
        current_user: OptionalUser,
        id: Optional[str] = Query(None, description="Fetch a single analysis by ID"),
        favorite: Optional[bool] = Query(None, description="Filter by favorite flag"),
        tag: Optional[str] = Query(None, description="Filter by tag"),
        mine: bool = Query(False, description="Only the caller's analyses"),
        skip: int = Query(0, ge=0),
        limit: Optional[int] = Query(None, ge=1, le=500),
) -> Union[AnalysisRead, List[AnalysisRead]]:
    """List stored analyses, or fetch one when `id` is given."""
    service = get_analysis_store_service(db)

    if id is not None:
        try:
            if not id.strip():
                raise NotFoundError("Analysis not found")
            return await service.get(id)
        except NotFoundError as e:
            logger.warning(f"[AnalysesRouter] Analysis not found: {id}")
            return error_response(e)

    if mine and current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return await service.list_all(
        user_id=current_user.id if mine else None,
        is_favorite=favorite,
        tag=tag,
        skip=skip,
        limit=limit,
    )


@router.get(
    "/{analysis_id}",
    response_model=AnalysisRead,
    status_code=status.HTTP_200_OK,
    summary="Get analysis by ID",
    responses={
        404: {"model": ErrorResponse, "description": "Analysis not found"},
    },
)
async def get_analysis(analysis_id: str, db: DBSession) -> AnalysisRead:
    try:
        service = get_analysis_store_service(db)
        return await service.get(analysis_id)

    except NotFoundError as e:
        logger.warning(f"[AnalysesRouter] Analysis not found: {analysis_id}")
        return error_response(e)


@router.put(
    "/{analysis_id}",
    response_model=AnalysisRead,
    status_code=status.HTTP_200_OK,
    summary="Update an analysis",
    description="Merge the fields present in the body into the stored analysis.",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid fields"},
        404: {"model": ErrorResponse, "description": "Analysis not found"},
    },
)
async def update_analysis(
        analysis_id: str,
        data: AnalysisUpdate,
        db: DBSession,
) -> AnalysisRead:
    logger.info(f"[AnalysesRouter] Update request: {analysis_id}")

    try:
        service = get_analysis_store_service(db)
        return await service.update(analysis_id, data)

    except NotFoundError as e:
        logger.warning(f"[AnalysesRouter] Analysis not found: {analysis_id}")
        return error_response(e)


@router.delete(
    "/{analysis_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete an analysis",
    responses={
        404: {"model": ErrorResponse, "description": "Analysis not found"},
    },
)
async def delete_analysis(analysis_id: str, db: DBSession) -> MessageResponse:
    logger.info(f"[AnalysesRouter] Delete request: {analysis_id}")

    try:
        service = get_analysis_store_service(db)
        await service.delete(analysis_id)
        return MessageResponse(message="Analysis deleted successfully")

    except NotFoundError as e:
        logger.warning(f"[AnalysesRouter] Analysis not found: {analysis_id}")
        return error_response(e)
