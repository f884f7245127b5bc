"""arXiv preprint server adapter."""

from typing import Any, List, Optional

import feedparser

from ...domain.models.evidence import EvidenceRecord, SourceKind
from .base import BaseSourceAdapter, strip_tags

ARXIV_API_URL = "https://export.arxiv.org/api/query"


def arxiv_id(entry_id: str) -> str:
    """``http://arxiv.org/abs/2101.00001v1`` -> ``2101.00001v1``."""
    return entry_id.rsplit("/abs/", 1)[-1]


class ArxivAdapter(BaseSourceAdapter):
    """First matching preprint for scientific claims."""

    name = "arXiv Preprint Server"
    source_kind = SourceKind.SPECIALIZED
    confidence = 0.8

    async def _lookup(self, text: str) -> Optional[EvidenceRecord]:
        response = await self._get(
            ARXIV_API_URL,
            params={"search_query": f"all:{text}", "start": 0, "max_results": 5},
        )
        entries: List[Any] = feedparser.parse(response.content).entries
        if not entries:
            return None

        entry = entries[0]
        title = strip_tags(entry.get("title", ""))
        abstract = strip_tags(entry.get("summary", ""))
        authors = ", ".join(a.get("name", "") for a in entry.get("authors", [])[:3])

        return self._record(
            summary=f"{title} - {authors} - {abstract[:200]}...",
            url=f"https://arxiv.org/abs/{arxiv_id(entry.get('id', ''))}",
        )
