"""ESPN sports news feed adapter."""

from typing import Optional

from ...domain.models.evidence import EvidenceRecord, SourceKind
from .base import BaseSourceAdapter, match_feed_item, strip_tags

ESPN_FEED_URL = "https://www.espn.com/espn/rss/news"


class ESPNAdapter(BaseSourceAdapter):
    """Matches the claim against ESPN's headline feed."""

    name = "ESPN Sports News"
    source_kind = SourceKind.SPECIALIZED
    confidence = 0.75

    async def _lookup(self, text: str) -> Optional[EvidenceRecord]:
        items = await self._get_feed(ESPN_FEED_URL, cache=True)
        item = match_feed_item(text, items)
        if item is None:
            return None

        return self._record(
            summary=f"{item.title}: {strip_tags(item.description)[:200]}...",
            url=item.link,
        )
