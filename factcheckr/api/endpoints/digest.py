"""Daily digest endpoints."""

import logging
import re
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from ...domain.models.digest import DailyDigest
from ...domain.services.digest_service import DigestService, parse_digest_date
from ...infrastructure.dependencies import get_digest_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/daily-digest", tags=["daily-digest"])

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
NOT_FOUND = "No digest found for this date"


class DigestRequest(BaseModel):
    """Request model for digest generation."""

    date: Optional[str] = Field(None, description="Date for digest (YYYY-MM-DD, defaults to today)")
    include_trending: bool = Field(default=True, description="Include trending claims analysis")


class DigestResponse(BaseModel):
    """Response model for digest generation."""

    digest: DailyDigest
    cached: bool


@router.post("", response_model=DigestResponse)
async def generate_digest(
    request: DigestRequest,
    service: DigestService = Depends(get_digest_service),
) -> DigestResponse:
    """Generate (or return the stored) digest for a day."""
    digest, cached = await service.check(request.date, request.include_trending)
    return DigestResponse(digest=digest, cached=cached)


@router.get("", response_model=DailyDigest)
async def read_digest(
    date: Optional[str] = Query(None, description="YYYY-MM-DD, defaults to today"),
    format: Literal["json", "markdown"] = Query("json"),
    service: DigestService = Depends(get_digest_service),
):
    """Stored digest for a day, as JSON or Markdown."""
    digest = await service.get(parse_digest_date(date))
    if digest is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)

    if format == "markdown":
        return PlainTextResponse(digest.to_markdown(), media_type="text/markdown")
    return digest


@router.get("/{digest_date}", response_model=DailyDigest)
async def read_digest_for_date(
    digest_date: str,
    service: DigestService = Depends(get_digest_service),
) -> DailyDigest:
    """Stored digest for a specific day."""
    if not DATE_PATTERN.match(digest_date):
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")

    digest = await service.get(digest_date)
    if digest is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return digest
