"""
Analysis router - API endpoint for literary analysis.
"""

import logging

from fastapi import APIRouter, Request, status

from app.analyses.schemas import ErrorResponse
from app.analysis.schemas import AnalyzeRequest, AnalyzeResponse
from app.analysis.service import AnalysisService
from app.core.dependencies import AppSettings, OpenAIClient
from app.core.exceptions import (
    ConfigurationError,
    ExternalResponseMalformedError,
    UpstreamUnavailableError,
    ValidationError,
    error_response,
)
from app.rate_limit import limiter

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Analysis"])


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    status_code=status.HTTP_200_OK,
    summary="Analyze Urdu text",
    description="Send the text to the language model and return a structured literary analysis.",
    responses={
        200: {"model": AnalyzeResponse, "description": "Successful analysis"},
        400: {"model": ErrorResponse, "description": "Text is required"},
        500: {"model": ErrorResponse, "description": "Malformed AI reply or missing configuration"},
    },
)
@limiter.limit("20/minute")
async def analyze_text(
        request: Request,
        data: AnalyzeRequest,
        client: OpenAIClient,
        settings: AppSettings,
) -> AnalyzeResponse:
    """
    Analyze Urdu text.

    The analysis returns summary, meaning, poetic devices, themes,
    emotional tone, historical context, word analysis, interpretation and
    an English translation. Nothing is stored; save it through /analyses.
    """
    logger.info("[AnalysisRouter] Received analysis request")

    try:
        service = AnalysisService(client, settings)
        analysis = await service.analyze_text(data.text)
        return AnalyzeResponse(analysis=analysis)

    except ValidationError as e:
        logger.warning(f"[AnalysisRouter] Rejected: {e.message}")
        return error_response(e)

    except ExternalResponseMalformedError as e:
        logger.error(f"[AnalysisRouter] Malformed response: {e.message}")
        return error_response(e)

    except UpstreamUnavailableError as e:
        logger.error(f"[AnalysisRouter] External API error: {e.message}")
        return error_response(e)

    except ConfigurationError as e:
        logger.error(f"[AnalysisRouter] Configuration error: {e.message}")
        return error_response(e)
