"""
Pydantic schemas for the analyses module.
DTOs for API input/output validation.

Wire names are camelCase (``poeticDevices``); snake_case is accepted on input.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class AnalysisFields(CamelModel):
    """
    The nine descriptive fields produced by the literary analyzer.
    Every field may be absent when the provider reply is partial.
    """

    summary: Optional[str] = Field(None, description="A brief overview of the text")
    meaning: Optional[str] = Field(None, description="The literal and figurative meanings")
    poetic_devices: Optional[List[str]] = Field(
        None,
        description="Poetic devices used (metaphor, alliteration, simile, ...)",
    )
    themes: Optional[List[str]] = Field(None, description="Main themes explored in the text")
    emotional_tone: Optional[str] = Field(None, description="The emotional tone and mood")
    historical_context: Optional[str] = Field(
        None,
        description="Relevant historical or cultural context",
    )
    word_analysis: Optional[Dict[str, Any]] = Field(
        None,
        description="Key word or phrase mapped to its meaning and significance",
    )
    interpretation: Optional[str] = Field(
        None,
        description="Deeper interpretation and literary significance",
    )
    english_translation: Optional[str] = Field(
        None,
        description="A poetic English translation if applicable",
    )


class AnalysisCreate(AnalysisFields):
    """DTO for creating a stored analysis."""

    text: Optional[str] = Field(None, description="Source text that was analyzed")
    is_favorite: bool = False
    tags: List[str] = Field(default_factory=list)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "text": "ہزاروں خواہشیں ایسی کہ ہر خواہش پہ دم نکلے",
                "summary": "A couplet on the endlessness of desire.",
                "poeticDevices": ["hyperbole", "repetition"],
                "themes": ["desire", "longing"],
                "wordAnalysis": {"خواہش": "desire, wish"},
            }
        },
    )


class AnalysisUpdate(AnalysisFields):
    """
    DTO for partial updates.
    Only fields present in the request body are applied.
    """

    text: Optional[str] = None
    is_favorite: Optional[bool] = None
    tags: Optional[List[str]] = None

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            raise ValueError("Text cannot be empty")
        return v

    @field_validator("is_favorite")
    @classmethod
    def favorite_not_null(cls, v: Optional[bool]) -> bool:
        if v is None:
            raise ValueError("isFavorite must be true or false")
        return v


class AnalysisRead(AnalysisFields):
    """DTO for reading a stored analysis."""

    id: str
    text: str
    poetic_devices: List[str] = Field(default_factory=list)
    themes: List[str] = Field(default_factory=list)
    is_favorite: bool = False
    tags: List[str] = Field(default_factory=list)
    user_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AnalysisCreatedResponse(BaseModel):
    """Response DTO for a newly stored analysis."""

    message: str
    analysis: AnalysisRead


class MessageResponse(BaseModel):
    """Schema for simple message responses."""

    message: str


class ErrorResponse(BaseModel):
    """Error response body."""

    error: str = Field(..., description="Error message")
    code: str = Field(..., description="Error code")

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "Analysis not found",
                "code": "NOT_FOUND",
            }
        }
    }
