"""Fact-checking API endpoints."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ...domain.models.verification import Verdict
from ...domain.models.webpage_analysis import WebpageAnalysis
from ...domain.services.fact_checking_service import FactCheckingService
from ...domain.services.webpage_analysis_service import WebpageAnalysisService
from ...infrastructure.dependencies import (
    get_fact_checking_service,
    get_webpage_analysis_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/fact-check", tags=["fact-check"])


class VerifyRequest(BaseModel):
    """Request model for claim verification."""

    claim: str = Field(..., min_length=1, description="The claim to fact-check")
    context: Optional[str] = Field(None, description="Additional context about the claim")


class VerifyResponse(BaseModel):
    """Response model for claim verification."""

    verdict: Verdict
    cached: bool = Field(..., description="Whether the verdict was served from the store")


class WebpageRequest(BaseModel):
    """Request model for webpage analysis."""

    url: str = Field(..., min_length=1, description="URL of the webpage to analyze")
    focus_areas: Optional[List[str]] = Field(None, description="Specific areas to focus on")


class WebpageResponse(BaseModel):
    """Response model for webpage analysis."""

    analysis: WebpageAnalysis
    cached: bool


@router.post("/verify", response_model=VerifyResponse)
async def verify_claim(
    request: VerifyRequest,
    service: FactCheckingService = Depends(get_fact_checking_service),
) -> VerifyResponse:
    """Verify a claim against external sources.

    Returns:
        The verdict, from the store when the claim was checked before
    """
    logger.info(f"📥 Verify request: {request.claim[:100]}")
    try:
        verdict, cached = await service.check(request.claim, request.context)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return VerifyResponse(verdict=verdict, cached=cached)


@router.post("/webpage", response_model=WebpageResponse)
async def analyze_webpage(
    request: WebpageRequest,
    service: WebpageAnalysisService = Depends(get_webpage_analysis_service),
) -> WebpageResponse:
    """Extract and verify the key claims of a webpage.

    Fetch and model failures are mapped to 502 by the application's
    error handlers.
    """
    logger.info(f"📥 Webpage request: {request.url}")
    analysis, cached = await service.check(request.url, request.focus_areas)
    return WebpageResponse(analysis=analysis, cached=cached)
