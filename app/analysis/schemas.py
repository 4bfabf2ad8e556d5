"""
Pydantic schemas for the analysis module.
DTOs for the analyze endpoint.
"""

from typing import Optional

from pydantic import BaseModel, Field

from app.analyses.schemas import AnalysisFields


class AnalyzeRequest(BaseModel):
    """
    Request DTO for analyze endpoint.
    Blank text is rejected by the service, not here, so it reports a 400.
    """

    text: Optional[str] = Field(
        None,
        max_length=20000,
        description="Urdu text to analyze",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "text": "ہزاروں خواہشیں ایسی کہ ہر خواہش پہ دم نکلے",
            }
        }
    }


class AnalyzeResponse(BaseModel):
    """Response DTO for analyze endpoint."""

    analysis: AnalysisFields = Field(..., description="Structured literary analysis")
