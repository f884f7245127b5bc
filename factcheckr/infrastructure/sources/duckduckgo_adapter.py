"""DuckDuckGo Instant Answer adapter."""

from typing import Optional

from ...domain.models.evidence import EvidenceRecord, SourceKind
from .base import BaseSourceAdapter

DUCKDUCKGO_API_URL = "https://api.duckduckgo.com/"


class DuckDuckGoAdapter(BaseSourceAdapter):
    """Web instant-answer lookup.

    A direct answer is trusted more (0.7) than a topic abstract (0.6).
    """

    name = "DuckDuckGo Instant Answer"
    source_kind = SourceKind.GENERAL
    confidence = 0.7
    abstract_confidence = 0.6

    async def _lookup(self, text: str) -> Optional[EvidenceRecord]:
        data = await self._get_json(
            DUCKDUCKGO_API_URL,
            params={"q": text, "format": "json", "no_redirect": "1", "no_html": "1"},
        )
        url = data.get("AbstractURL") or "https://duckduckgo.com"

        answer = (data.get("Answer") or "").strip()
        if answer:
            return self._record(summary=answer, url=url)

        abstract = (data.get("AbstractText") or "").strip()
        if abstract:
            return self._record(
                summary=abstract,
                url=url,
                confidence=self.abstract_confidence,
                source=f"DuckDuckGo ({data.get('AbstractSource') or 'Various Sources'})",
            )

        return None
