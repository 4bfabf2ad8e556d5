"""
FastAPI dependencies for dependency injection.

Process-scoped resources (database, provider clients) are built in the
application lifespan and stored on ``app.state``; these providers hand
them to routes.
"""

from typing import Annotated, AsyncGenerator, Optional

import httpx
from fastapi import Depends, Request
from openai import AsyncOpenAI
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.core.exceptions import ConfigurationError


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Provide one database session per request."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise ConfigurationError("Database connection is not configured")

    async with database.session() as session:
        yield session


def get_openai_client(request: Request) -> Optional[AsyncOpenAI]:
    """
    Provides the shared OpenAI client.
    None when no API key is configured.
    """
    return getattr(request.app.state, "openai_client", None)


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Provides the shared HTTP client for outbound provider calls."""
    client = getattr(request.app.state, "http_client", None)
    if client is None:
        raise ConfigurationError("HTTP client is not initialized")
    return client


# Type aliases for cleaner dependency injection
DBSession = Annotated[AsyncSession, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_settings)]
OpenAIClient = Annotated[Optional[AsyncOpenAI], Depends(get_openai_client)]
HTTPClient = Annotated[httpx.AsyncClient, Depends(get_http_client)]
