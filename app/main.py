"""
Vantage Backend - Main FastAPI Application

Entry point for the API server.
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.core.exceptions import VantageException, error_response, internal_error
from app.database import Database
from app.rate_limit import limiter

from app.auth import auth_router
from app.analysis import analysis_router
from app.analysis.service import build_openai_client
from app.analyses import analyses_router
from app.speech import speech_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Builds the process-scoped clients on startup and closes them on shutdown.
    """
    # Startup
    logger.info(f"[Startup] Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"[Startup] Debug mode: {settings.debug}")

    app.state.database = None
    if settings.database_url:
        app.state.database = Database(settings.database_url, echo=settings.debug)
        try:
            await app.state.database.create_tables()
            logger.info("[Startup] Database tables created/verified")
        except Exception as e:
            logger.error(f"[Startup] Database initialization failed: {e}")
            # Don't fail startup - tables might already exist
    else:
        logger.warning("[Startup] DATABASE_URL not set, persistence disabled")

    app.state.openai_client = build_openai_client(settings)
    app.state.http_client = httpx.AsyncClient(timeout=settings.tts_timeout_seconds)

    yield

    # Shutdown
    logger.info("[Shutdown] Application shutting down...")
    await app.state.http_client.aclose()
    if app.state.openai_client is not None:
        await app.state.openai_client.close()
    if app.state.database is not None:
        await app.state.database.dispose()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Vantage Backend API - Decoding Urdu poetry and prose.

    ## Features

    * **Analysis** - Literary analysis of Urdu text with an OpenAI chat model
    * **Analyses** - Save, browse, favorite and tag analyses
    * **Authentication** - Email/password signup and login with bearer tokens
    * **Speech** - Listen to the text or its translation with Azure neural voices

    ## Architecture

    Built with FastAPI and SQLAlchemy 2.0 (async).
    Uses a 3-layer architecture: Router → Service → Repository.
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# Rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(VantageException)
async def vantage_exception_handler(request: Request, exc: VantageException):
    """Map application errors raised outside a router's own handling."""
    logger.error(f"[App] {type(exc).__name__}: {exc.message}")
    return error_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 with the common error shape."""
    errors = exc.errors()
    message = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ())[1:]) or 'body'}: {err.get('msg')}"
        for err in errors
    ) or "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message, "code": "VALIDATION_ERROR"},
    )


HTTP_ERROR_CODES = {
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Keep HTTP errors in the common error shape."""
    code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail), "code": code},
        headers=getattr(exc, "headers", None),
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions globally."""
    logger.exception(f"Unhandled exception: {exc}")
    return internal_error("Internal server error")


# Health check endpoints
@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - API info."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "running",
    }


@app.get("/health", tags=["Health"])
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


# Routes are served at the root and under /api
API_PREFIX = "/api"

api_router = APIRouter()
api_router.include_router(analysis_router)
api_router.include_router(analyses_router)
api_router.include_router(auth_router)
api_router.include_router(speech_router)

app.include_router(api_router)
app.include_router(api_router, prefix=API_PREFIX, include_in_schema=False)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
