"""Wikipedia adapter implementation of the source provider interface."""

import asyncio
import re
from typing import Optional, Tuple

import wikipediaapi
from cachetools import TTLCache

from ...domain.models.evidence import EvidenceRecord, SourceKind
from .base import BaseSourceAdapter, SourceConfig


class WikipediaAdapter(BaseSourceAdapter):
    """Encyclopedic lookup against Wikipedia.

    The claim, stripped of punctuation, is looked up as a page title. A
    missing page is a "no match".
    """

    name = "Wikipedia"
    source_kind = SourceKind.GENERAL
    confidence = 0.8

    def __init__(
        self,
        config: Optional[SourceConfig] = None,
        language: str = "en",
    ):
        """Initialize the adapter.

        Args:
            config: Adapter configuration
            language: Wikipedia language edition
        """
        super().__init__(config=config)
        self._language = language
        self._wiki = wikipediaapi.Wikipedia(
            user_agent=self._config.user_agent,
            language=self._language,
            timeout=self._config.timeout,
        )
        self._pages = TTLCache(
            maxsize=max(self._config.cache_maxsize, 1),
            ttl=max(self._config.cache_ttl, 1),
        )

    def _preprocess_query(self, query: str) -> str:
        """Drop punctuation and surrounding whitespace."""
        return re.sub(r"[^\w\s]", "", query).strip()

    def _fetch_page(self, title: str) -> Optional[Tuple[str, str]]:
        page = self._wiki.page(title)
        if not page.exists():
            return None
        return page.summary, page.fullurl

    async def _lookup(self, text: str) -> Optional[EvidenceRecord]:
        title = self._preprocess_query(text)
        if not title:
            return None

        cache_key = f"{self._language}:{title}"
        if cache_key in self._pages:
            page = self._pages[cache_key]
        else:
            # wikipediaapi is synchronous
            page = await asyncio.to_thread(self._fetch_page, title)
            self._pages[cache_key] = page

        if page is None:
            return None

        summary, url = page
        return self._record(
            summary=summary or "No summary available",
            url=url or f"https://{self._language}.wikipedia.org/wiki/{title.replace(' ', '_')}",
        )
