"""
Analysis service - Literary analysis of Urdu text with an OpenAI chat model.
Builds the instruction, calls the model, and parses the structured reply.
"""

import logging
from typing import Optional

import openai
from openai import AsyncOpenAI
from pydantic import ValidationError as PydanticValidationError

from app.analyses.schemas import AnalysisFields
from app.analysis.parser import extract_json_object
from app.config import Settings, get_settings
from app.core.exceptions import (
    ConfigurationError,
    ExternalResponseMalformedError,
    UpstreamUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Analysis prompt template
ANALYSIS_PROMPT = """You are an expert literary analyst specializing in Urdu poetry and prose. Analyze the following Urdu text and provide a comprehensive decoding:

TEXT: "{text}"

Please provide your analysis in the following JSON format:
{{
  "summary": "A brief overview of the text",
  "meaning": "The literal and figurative meanings",
  "poeticDevices": ["List of poetic devices used (e.g., metaphor, alliteration, simile, personification)"],
  "themes": ["Main themes explored in the text"],
  "emotionalTone": "The emotional tone and mood",
  "historicalContext": "Any relevant historical or cultural context",
  "wordAnalysis": {{
    "key_word_1": "meaning and significance",
    "key_word_2": "meaning and significance"
  }},
  "interpretation": "Deeper interpretation and literary significance",
  "englishTranslation": "A poetic English translation if applicable"
}}

Provide thoughtful, insightful analysis that helps readers appreciate the beauty and depth of Urdu literature."""


def build_prompt(text: str) -> str:
    """Embed the source text in the fixed analysis instruction."""
    return ANALYSIS_PROMPT.format(text=text)


class AnalysisService:
    """Service for literary analysis with an injected OpenAI client."""

    def __init__(
            self,
            client: Optional[AsyncOpenAI],
            settings: Optional[Settings] = None,
    ):
        self._client = client
        self.settings = settings or get_settings()

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            raise ConfigurationError("OpenAI API key is not configured")
        return self._client

    async def analyze_text(self, text: Optional[str]) -> AnalysisFields:
        """
        Analyze Urdu text with the chat model.

        Args:
            text: Source text

        Returns:
            AnalysisFields decoded from the model reply

        Raises:
            ValidationError: If text is empty (checked before any call)
            ConfigurationError: If no API key is configured
            UpstreamUnavailableError: If the OpenAI API fails
            ExternalResponseMalformedError: If the reply has no usable JSON object
        """
        if not text or not text.strip():
            raise ValidationError("Text is required")

        client = self.client
        logger.info(f"[AnalysisService] Starting analysis, length: {len(text)} chars")

        try:
            response = await client.chat.completions.create(
                model=self.settings.openai_model,
                max_tokens=self.settings.openai_max_tokens,
                messages=[
                    {"role": "user", "content": build_prompt(text)},
                ],
                timeout=self.settings.openai_timeout_seconds,
            )
        except openai.APIError as e:
            logger.error(f"[AnalysisService] OpenAI API error: {e}")
            raise UpstreamUnavailableError(f"OpenAI API error: {e}")

        content = response.choices[0].message.content if response.choices else None
        data = extract_json_object(content or "")

        try:
            analysis = AnalysisFields.model_validate(data)
        except PydanticValidationError as e:
            logger.error(f"[AnalysisService] Unexpected analysis shape: {e}")
            raise ExternalResponseMalformedError("AI response did not match the analysis format")

        logger.info(
            f"[AnalysisService] Analysis complete: "
            f"devices={len(analysis.poetic_devices or [])}, "
            f"themes={len(analysis.themes or [])}, "
            f"words={len(analysis.word_analysis or {})}"
        )
        return analysis


def build_openai_client(settings: Settings) -> Optional[AsyncOpenAI]:
    """
    Construct the process-wide OpenAI client.

    The SDK retries transient failures with exponential backoff, bounded by
    ``openai_max_retries``; each attempt is bounded by the timeout.
    Returns None when no API key is configured.
    """
    if not settings.openai_api_key:
        logger.warning("[AnalysisService] OPENAI_API_KEY not set, analysis disabled")
        return None

    return AsyncOpenAI(
        api_key=settings.openai_api_key,
        timeout=settings.openai_timeout_seconds,
        max_retries=settings.openai_max_retries,
    )
