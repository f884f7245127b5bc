"""FastAPI application for the FactCheckr service."""

import contextlib
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..domain.errors import (
    DigestGenerationError,
    FactCheckError,
    InvalidDigestDateError,
    StoreError,
    WebpageAnalysisError,
    WebpageFetchError,
)
from ..infrastructure.config import FactCheckConfig, configure_logging
from ..infrastructure.dependencies import get_service_container
from .endpoints import digest, fact_check, health

configure_logging(FactCheckConfig.from_env().log_level)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"

ERROR_STATUS = {
    InvalidDigestDateError: 400,
    WebpageFetchError: 502,
    WebpageAnalysisError: 502,
    DigestGenerationError: 502,
    StoreError: 500,
}


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application."""
    logger.info("🚀 FactCheckr API starting")
    yield  # Application runs here
    await get_service_container().shutdown()


app = FastAPI(
    title="FactCheckr API",
    description="Multi-source fact-checking of claims, webpages and daily activity",
    version=VERSION,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(fact_check.router)
app.include_router(digest.router)


@app.exception_handler(FactCheckError)
async def fact_check_error_handler(request: Request, exc: FactCheckError) -> JSONResponse:
    """Map domain failures onto HTTP status codes."""
    status_code = next(
        (code for error_type, code in ERROR_STATUS.items() if isinstance(exc, error_type)),
        500,
    )
    if status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.get("/")
async def service_info() -> Dict[str, Any]:
    """Describe the service and its endpoints."""
    return {
        "name": "FactCheckr",
        "version": VERSION,
        "description": "Service for fact-checking claims and analyzing web content",
        "endpoints": {
            "verify": "/fact-check/verify",
            "webpage": "/fact-check/webpage",
            "dailyDigest": "/daily-digest",
            "specificDigest": "/daily-digest/{date}",
            "health": "/health",
        },
    }
