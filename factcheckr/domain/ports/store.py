"""Store interface for cached verdicts, analyses and digests."""

from datetime import date, datetime
from typing import List, Optional, Protocol

from ..models.digest import DailyDigest
from ..models.verification import Verdict
from ..models.webpage_analysis import WebpageAnalysis


class FactCheckStore(Protocol):
    """Keyed persistence with three independent key spaces.

    Verdicts are keyed by claim text (most recent wins), analyses by URL and
    digests by calendar date. Implementations raise ``StoreError`` on failure.
    """

    async def initialize(self) -> None:
        """Create tables or other backing structures."""
        ...

    async def find_verdict_by_claim(self, claim: str) -> Optional[Verdict]:
        """Most recent verdict stored for this exact claim text."""
        ...

    async def insert_verdict(self, verdict: Verdict) -> Verdict:
        ...

    async def find_analysis_by_url(self, url: str) -> Optional[WebpageAnalysis]:
        ...

    async def insert_analysis(self, analysis: WebpageAnalysis) -> WebpageAnalysis:
        """Insert, replacing any analysis already stored for the URL."""
        ...

    async def find_digest_by_date(self, digest_date: date) -> Optional[DailyDigest]:
        ...

    async def insert_digest(self, digest: DailyDigest) -> DailyDigest:
        """Insert, replacing any digest already stored for the date."""
        ...

    async def verdicts_since(
        self, since: datetime, until: Optional[datetime] = None, limit: int = 20
    ) -> List[Verdict]:
        """Verdicts created in [since, until), most recent first."""
        ...

    async def analyses_since(
        self, since: datetime, until: Optional[datetime] = None, limit: int = 10
    ) -> List[WebpageAnalysis]:
        """Analyses created in [since, until), most recent first."""
        ...

    async def close(self) -> None:
        ...
