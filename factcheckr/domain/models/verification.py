"""Domain models for verification results and related entities."""

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List

from pydantic import BaseModel, Field, field_validator


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def coerce_confidence(value: Any) -> float:
    """Read an arbitrary value as a number, without clamping.

    Non-numeric values (including NaN) count as zero confidence.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number):
        return 0.0
    return number


def clamp_confidence(value: Any) -> float:
    """Coerce an arbitrary value into a confidence in [0, 1]."""
    return max(0.0, min(1.0, coerce_confidence(value)))


class VerdictStatus(str, Enum):
    """Possible verification outcomes."""

    TRUE = "true"  # Claim is supported by the evidence
    FALSE = "false"  # Claim is contradicted by the evidence
    MIXED = "mixed"  # Partly true, partly false
    UNVERIFIED = "unverified"  # Cannot be verified with available sources

    @classmethod
    def parse(cls, value: Any) -> "VerdictStatus":
        """Map free-form model output onto a status, defaulting to unverified."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.UNVERIFIED


class Verdict(BaseModel):
    """Represents the synthesized result of verifying one claim."""

    claim: str = Field(..., description="The claim that was verified")
    status: VerdictStatus = Field(default=VerdictStatus.UNVERIFIED, description="Verification status")
    confidence: float = Field(default=0.0, description="Confidence in the result (0-1)")
    sources: List[str] = Field(default_factory=list, description="Unique source URLs, in display order")
    reasoning: str = Field(default="", description="Explanation of the verdict")
    created_at: datetime = Field(default_factory=utcnow, description="When verification was completed")

    class Config:
        """Pydantic model configuration."""
        frozen = True  # Immutable model
        json_schema_extra = {
            "example": {
                "claim": "The Earth is approximately 4.54 billion years old.",
                "status": "true",
                "confidence": 0.92,
                "sources": ["https://en.wikipedia.org/wiki/Age_of_Earth"],
                "reasoning": "Radiometric dating consistently places the age of the Earth at 4.54 billion years.",
            }
        }

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> float:
        return clamp_confidence(value)

    @field_validator("sources")
    @classmethod
    def _dedupe(cls, value: List[str]) -> List[str]:
        # dict preserves insertion order, so the first occurrence wins
        return list(dict.fromkeys(value))
