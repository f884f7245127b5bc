"""World Health Organization news feed adapter."""

from typing import Optional

from ...domain.models.evidence import EvidenceRecord, SourceKind
from .base import BaseSourceAdapter, match_feed_item, strip_tags

WHO_FEED_URL = "https://www.who.int/rss-feeds/news-english.xml"


class WHOAdapter(BaseSourceAdapter):
    """Matches health claims against WHO news releases."""

    name = "World Health Organization (WHO)"
    source_kind = SourceKind.SPECIALIZED
    confidence = 0.95

    async def _lookup(self, text: str) -> Optional[EvidenceRecord]:
        items = await self._get_feed(WHO_FEED_URL, cache=True)
        item = match_feed_item(text, items)
        if item is None:
            return None

        return self._record(
            summary=f"{item.title}: {strip_tags(item.description)[:200]}...",
            url=item.link,
        )
