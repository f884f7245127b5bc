"""Domain models for evidence gathered from external sources."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SourceKind(str, Enum):
    """How much weight a source carries during verdict synthesis."""

    GENERAL = "general"  # Encyclopedic, instant-answer, knowledge-base lookups
    FACT_CHECK = "fact_check"  # Dedicated fact-checking outlets
    SPECIALIZED = "specialized"  # Domain authorities (esports, sports, medical, ...)


class EvidenceRecord(BaseModel):
    """Normalized output of one source adapter for one query."""

    source: str = Field(..., description="Human-readable source name")
    verdict: Optional[str] = Field(None, description="Explicit verdict label, if the source gives one")
    summary: str = Field(..., description="Relevant excerpt or summary")
    url: str = Field(..., description="Reference URL")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Source-intrinsic confidence (0-1)")
    kind: SourceKind = Field(default=SourceKind.GENERAL, description="Source category")

    class Config:
        """Pydantic model configuration."""
        frozen = True  # Immutable model
        json_schema_extra = {
            "example": {
                "source": "Wikipedia",
                "summary": "The Sun is the star at the center of the Solar System.",
                "url": "https://en.wikipedia.org/wiki/Sun",
                "confidence": 0.8,
                "kind": "general",
            }
        }

    @property
    def is_specialized(self) -> bool:
        return self.kind == SourceKind.SPECIALIZED


class ConflictAnalysis(BaseModel):
    """Whether the gathered evidence disagrees, and how."""

    has_conflicts: bool = False
    explanation: str = ""

    class Config:
        """Pydantic model configuration."""
        frozen = True
