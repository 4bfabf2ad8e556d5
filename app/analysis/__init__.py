"""
Analysis module - Literary analysis of Urdu text using an OpenAI chat model.
"""

from app.analysis.router import router as analysis_router

__all__ = ["analysis_router"]
