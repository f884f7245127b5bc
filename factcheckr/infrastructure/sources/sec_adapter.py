"""SEC EDGAR financial filings adapter."""

from typing import Optional

from ...domain.models.evidence import EvidenceRecord, SourceKind
from .base import BaseSourceAdapter, strip_tags

EDGAR_SEARCH_URL = "https://www.sec.gov/cgi-bin/browse-edgar"
EDGAR_BASE_URL = "https://www.sec.gov"


class SECAdapter(BaseSourceAdapter):
    """Company filings from the EDGAR Atom feed."""

    name = "SEC EDGAR Database"
    source_kind = SourceKind.SPECIALIZED
    confidence = 0.9

    async def _lookup(self, text: str) -> Optional[EvidenceRecord]:
        # EDGAR rejects requests without a contact user agent
        items = await self._get_feed(
            EDGAR_SEARCH_URL,
            params={"action": "getcompany", "company": text, "output": "atom"},
            headers={"User-Agent": self._config.user_agent},
        )
        if not items:
            return None

        entry = items[0]
        link = entry.link
        if not link.startswith("http"):
            link = f"{EDGAR_BASE_URL}{link}"

        return self._record(
            summary=f"{entry.title}: {strip_tags(entry.description)[:200]}...",
            url=link,
        )
