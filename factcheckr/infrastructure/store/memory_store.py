"""In-memory implementation of the fact-check store."""

import asyncio
from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from ...domain.models.digest import DailyDigest
from ...domain.models.verification import Verdict
from ...domain.models.webpage_analysis import WebpageAnalysis


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _in_window(value: datetime, since: datetime, until: Optional[datetime]) -> bool:
    value = _aware(value)
    if value < _aware(since):
        return False
    return until is None or value < _aware(until)


class InMemoryStore:
    """Process-local store, used for tests and ephemeral deployments.

    Data structure:
        verdicts: claim text -> verdicts in insertion order
        analyses: url -> analysis
        digests: date -> digest
    """

    def __init__(self):
        self._verdicts: Dict[str, List[Verdict]] = {}
        self._analyses: Dict[str, WebpageAnalysis] = {}
        self._digests: Dict[date, DailyDigest] = {}
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        pass

    async def find_verdict_by_claim(self, claim: str) -> Optional[Verdict]:
        async with self._lock:
            history = self._verdicts.get(claim)
            return history[-1] if history else None

    async def insert_verdict(self, verdict: Verdict) -> Verdict:
        async with self._lock:
            self._verdicts.setdefault(verdict.claim, []).append(verdict)
        return verdict

    async def verdicts_since(
        self, since: datetime, until: Optional[datetime] = None, limit: int = 20
    ) -> List[Verdict]:
        async with self._lock:
            matching = [
                v
                for history in self._verdicts.values()
                for v in history
                if _in_window(v.created_at, since, until)
            ]
        matching.sort(key=lambda v: _aware(v.created_at), reverse=True)
        return matching[:limit]

    async def find_analysis_by_url(self, url: str) -> Optional[WebpageAnalysis]:
        async with self._lock:
            return self._analyses.get(url)

    async def insert_analysis(self, analysis: WebpageAnalysis) -> WebpageAnalysis:
        async with self._lock:
            self._analyses[analysis.url] = analysis
        return analysis

    async def analyses_since(
        self, since: datetime, until: Optional[datetime] = None, limit: int = 10
    ) -> List[WebpageAnalysis]:
        async with self._lock:
            matching = [
                a for a in self._analyses.values() if _in_window(a.analyzed_at, since, until)
            ]
        matching.sort(key=lambda a: _aware(a.analyzed_at), reverse=True)
        return matching[:limit]

    async def find_digest_by_date(self, digest_date: date) -> Optional[DailyDigest]:
        async with self._lock:
            return self._digests.get(digest_date)

    async def insert_digest(self, digest: DailyDigest) -> DailyDigest:
        async with self._lock:
            self._digests[digest.digest_date] = digest
        return digest

    async def close(self) -> None:
        async with self._lock:
            self._verdicts.clear()
            self._analyses.clear()
            self._digests.clear()
