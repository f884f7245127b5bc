"""Snopes fact-check feed adapter."""

from typing import Optional

from ...domain.models.evidence import EvidenceRecord, SourceKind
from .base import BaseSourceAdapter, match_feed_item, strip_tags

SNOPES_FEED_URL = "https://www.snopes.com/feed/"


def extract_verdict(description: str) -> Optional[str]:
    """Derive a verdict label from a fact-check teaser, if it states one."""
    text = description.lower()
    if "false" in text or "fake" in text:
        return "False"
    if "true" in text or "correct" in text:
        return "True"
    if "mixture" in text or "mixed" in text:
        return "Mixed"
    return None


class SnopesAdapter(BaseSourceAdapter):
    """Scans the latest Snopes articles for one covering the claim."""

    name = "Snopes"
    source_kind = SourceKind.FACT_CHECK
    confidence = 0.9

    async def _lookup(self, text: str) -> Optional[EvidenceRecord]:
        items = await self._get_feed(SNOPES_FEED_URL, cache=True)
        item = match_feed_item(text, items)
        if item is None:
            return None

        return self._record(
            summary=strip_tags(item.description)[:300] + "...",
            url=item.link,
            verdict=extract_verdict(item.description),
        )
