"""
Speech service - Text-to-speech through Azure Cognitive Services.
"""

import base64
import logging
from typing import Optional, Tuple
from xml.sax.saxutils import escape, quoteattr

import httpx

from app.config import Settings, get_settings
from app.core.exceptions import (
    ConfigurationError,
    UpstreamUnavailableError,
    ValidationError,
)
from app.speech.schemas import SpeechLanguage

logger = logging.getLogger(__name__)

AZURE_TTS_URL = "https://{region}.tts.speech.microsoft.com/cognitiveservices/v1"

LANGUAGE_TAGS = {
    SpeechLanguage.URDU: "ur-PK",
    SpeechLanguage.ENGLISH: "en-US",
}


def build_ssml(text: str, voice: str, lang: str) -> str:
    """Wrap escaped text in an SSML envelope naming the voice."""
    return (
        f"<speak version='1.0' xml:lang={quoteattr(lang)}>"
        f"<voice name={quoteattr(voice)}>{escape(text)}</voice>"
        f"</speak>"
    )


class SpeechService:
    """Service for speech synthesis with an injected HTTP client."""

    def __init__(self, http_client: httpx.AsyncClient, settings: Optional[Settings] = None):
        self.http_client = http_client
        self.settings = settings or get_settings()

    def select_voice(self, language: SpeechLanguage) -> Tuple[str, str]:
        """Return (voice name, language tag) for a language."""
        if language == SpeechLanguage.URDU:
            return self.settings.azure_tts_urdu_voice, LANGUAGE_TAGS[language]
        return self.settings.azure_tts_english_voice, LANGUAGE_TAGS[language]

    async def synthesize(
            self,
            text: Optional[str],
            language: SpeechLanguage = SpeechLanguage.ENGLISH,
    ) -> str:
        """
        Synthesize speech and return it as a base64 data URI.

        Raises:
            ValidationError: If text is empty (checked before any call)
            ConfigurationError: If Azure key or region is missing
            UpstreamUnavailableError: If Azure fails; carries Azure's status
        """
        if not text or not text.strip():
            raise ValidationError("Text is required")

        key = self.settings.azure_tts_key
        region = self.settings.azure_tts_region
        if not key or not region:
            logger.error(
                f"[SpeechService] Missing Azure credentials: key={bool(key)}, region={bool(region)}"
            )
            raise ConfigurationError("Azure TTS credentials not configured")

        voice, lang = self.select_voice(language)
        logger.info(f"[SpeechService] TTS request: region={region}, voice={voice}")

        try:
            response = await self.http_client.post(
                AZURE_TTS_URL.format(region=region),
                headers={
                    "Ocp-Apim-Subscription-Key": key,
                    "Content-Type": "application/ssml+xml",
                    "X-Microsoft-OutputFormat": self.settings.azure_tts_output_format,
                },
                content=build_ssml(text, voice, lang).encode("utf-8"),
                timeout=self.settings.tts_timeout_seconds,
            )
        except httpx.RequestError as e:
            logger.error(f"[SpeechService] Request error: {e}")
            raise UpstreamUnavailableError(f"Failed to connect to Azure TTS: {e}")

        if not response.is_success:
            logger.error(f"[SpeechService] Azure TTS error: {response.status_code} {response.text}")
            raise UpstreamUnavailableError(
                f"Azure TTS Error: {response.status_code} - {response.text}",
                provider_status=response.status_code,
            )

        audio = base64.b64encode(response.content).decode("ascii")
        logger.info(f"[SpeechService] Synthesized {len(response.content)} bytes")
        return f"data:audio/mp3;base64,{audio}"
