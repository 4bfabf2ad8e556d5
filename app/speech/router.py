"""
Speech router - API endpoint for text-to-speech.
"""

import logging

from fastapi import APIRouter, Request, status

from app.analyses.schemas import ErrorResponse
from app.core.dependencies import AppSettings, HTTPClient
from app.core.exceptions import (
    ConfigurationError,
    UpstreamUnavailableError,
    ValidationError,
    error_response,
)
from app.rate_limit import limiter
from app.speech.schemas import SpeechRequest, SpeechResponse
from app.speech.service import SpeechService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Speech"])


@router.post(
    "/tts",
    response_model=SpeechResponse,
    status_code=status.HTTP_200_OK,
    summary="Synthesize speech",
    description="Speak Urdu text or its English translation with an Azure neural voice.",
    responses={
        200: {"model": SpeechResponse, "description": "Audio as base64 data URI"},
        400: {"model": ErrorResponse, "description": "Text is required"},
        500: {"model": ErrorResponse, "description": "Azure credentials not configured"},
    },
)
@limiter.limit("20/minute")
async def text_to_speech(
        request: Request,
        data: SpeechRequest,
        http_client: HTTPClient,
        settings: AppSettings,
) -> SpeechResponse:
    """
    Synthesize speech for the given text.

    Provider failures keep the provider's HTTP status.
    """
    logger.info(f"[SpeechRouter] TTS request, language: {data.language.value}")

    try:
        service = SpeechService(http_client, settings)
        audio = await service.synthesize(data.text, data.language)
        return SpeechResponse(audio=audio)

    except ValidationError as e:
        logger.warning(f"[SpeechRouter] Rejected: {e.message}")
        return error_response(e)

    except ConfigurationError as e:
        logger.error(f"[SpeechRouter] Configuration error: {e.message}")
        return error_response(e)

    except UpstreamUnavailableError as e:
        logger.error(f"[SpeechRouter] Provider error: {e.message}")
        return error_response(e)
