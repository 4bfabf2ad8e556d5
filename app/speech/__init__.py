"""
Speech module - Text to speech using Azure neural voices.
"""

from app.speech.router import router as speech_router

__all__ = ["speech_router"]
