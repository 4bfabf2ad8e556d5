"""
Pydantic schemas for speech module.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SpeechLanguage(str, Enum):
    """Language of the text to speak."""
    URDU = "urdu"
    ENGLISH = "english"


class SpeechRequest(BaseModel):
    """Request DTO for speech synthesis."""

    text: Optional[str] = Field(None, max_length=10000, description="Text to speak")
    language: SpeechLanguage = Field(
        SpeechLanguage.ENGLISH,
        description="Selects the voice: urdu for the source text, english for its translation",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "text": "ہزاروں خواہشیں ایسی کہ ہر خواہش پہ دم نکلے",
                "language": "urdu",
            }
        }
    }


class SpeechResponse(BaseModel):
    """Response DTO with the audio as a data URI."""

    audio: str = Field(..., description="data:audio/mp3;base64,...")
    success: bool = True
