"""Domain models for the daily fact-checking digest."""

from datetime import date, datetime
from typing import List

from pydantic import BaseModel, Field

from .verification import utcnow


class TrendingTopic(BaseModel):
    """A topic or pattern noticed across the day's fact-checks."""

    topic: str
    description: str = ""


class DailyDigest(BaseModel):
    """Aggregate summary of one calendar day of verification activity."""

    digest_date: date = Field(..., description="Calendar day (unique key)")
    trending: List[TrendingTopic] = Field(default_factory=list)
    summary: str = Field(default="", description="Narrative summary of the day")
    fact_check_count: int = Field(default=0, ge=0)
    analysis_count: int = Field(default=0, ge=0)
    generated_at: datetime = Field(default_factory=utcnow)

    class Config:
        """Pydantic model configuration."""
        frozen = True

    def to_markdown(self) -> str:
        """Render the digest the way the public digest endpoint serves it."""
        if self.trending:
            trending = "\n\n".join(f"### {t.topic}\n{t.description}" for t in self.trending)
        else:
            trending = "No trending claims identified"
        return (
            f"# Daily Fact-Check Digest - {self.digest_date.isoformat()}\n\n"
            f"{self.summary}\n\n"
            f"## Trending Claims\n\n"
            f"{trending}\n\n"
            f"*Generated at: {self.generated_at.isoformat()}*"
        )
