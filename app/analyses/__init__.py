"""
Analyses module - Storage of analysis results.
"""

from app.analyses.router import router as analyses_router

__all__ = ["analyses_router"]
