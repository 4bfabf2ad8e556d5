"""
Vantage Backend Application.

A FastAPI backend for decoding Urdu poetry and prose.
Provides literary analysis with OpenAI, storage of results, and
text-to-speech with Azure.
"""

__version__ = "0.1.0"
