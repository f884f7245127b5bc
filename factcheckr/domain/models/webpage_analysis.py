"""Domain models for webpage credibility analysis."""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from .verification import Verdict, utcnow


class Credibility(str, Enum):
    """Overall credibility label of an analysed webpage."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"


def credibility_from_confidence(mean_confidence: Optional[float]) -> Credibility:
    """Bucket a mean verdict confidence into a credibility label."""
    if mean_confidence is None:
        return Credibility.UNKNOWN
    if mean_confidence >= 0.8:
        return Credibility.HIGH
    if mean_confidence >= 0.6:
        return Credibility.MEDIUM
    if mean_confidence >= 0.3:
        return Credibility.LOW
    return Credibility.UNKNOWN


def mean_confidence(verdicts: Sequence[Verdict]) -> Optional[float]:
    if not verdicts:
        return None
    return sum(v.confidence for v in verdicts) / len(verdicts)


class WebpageContent(BaseModel):
    """Plain-text rendition of a fetched webpage."""

    title: str
    content: str = Field(..., description="Markup-free text, at most 5000 characters")
    url: str


class WebpageAnalysis(BaseModel):
    """Claims extracted from a webpage and their verdicts."""

    url: str = Field(..., description="Analysed URL (unique key)")
    title: str = Field(default="", description="Page title")
    summary: str = Field(default="", description="Credibility summary of the page")
    claims: List[str] = Field(default_factory=list, description="Extracted claim strings")
    results: List[Verdict] = Field(default_factory=list, description="Per-claim verdicts")
    credibility: Credibility = Field(default=Credibility.UNKNOWN, description="Overall credibility")
    analyzed_at: datetime = Field(default_factory=utcnow)

    class Config:
        """Pydantic model configuration."""
        frozen = True
