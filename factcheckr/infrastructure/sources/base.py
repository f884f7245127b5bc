"""Shared plumbing for evidence source adapters."""

import logging
import os
import re
from typing import Any, Dict, Iterable, List, NamedTuple, Optional

import feedparser
import httpx
from cachetools import TTLCache
from pydantic import BaseModel, Field

from ...domain.models.evidence import EvidenceRecord, SourceKind

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]*>")
_SPACE_RE = re.compile(r"\s+")


class SourceConfig(BaseModel):
    """Configuration shared by all source adapters."""

    user_agent: str = Field(
        default="FactCheckr/1.0 (fact-checking-service@example.com)",
        description="User agent sent to external sources",
    )
    timeout: float = Field(default=10.0, description="Request timeout in seconds")
    cache_ttl: int = Field(default=300, description="Feed cache TTL in seconds (0 disables caching)")
    cache_maxsize: int = Field(default=32, description="Maximum number of cached feed bodies")
    max_feed_items: int = Field(default=10, description="Feed items scanned per query")

    @classmethod
    def from_env(cls) -> "SourceConfig":
        """Create configuration from environment variables."""
        defaults = cls()
        return cls(
            user_agent=os.getenv("FACTCHECK_USER_AGENT", defaults.user_agent),
            timeout=float(os.getenv("FACTCHECK_HTTP_TIMEOUT", defaults.timeout)),
            cache_ttl=int(os.getenv("FACTCHECK_FEED_CACHE_TTL", defaults.cache_ttl)),
        )


class FeedItem(NamedTuple):
    """Title, description and link of one RSS/Atom entry."""

    title: str
    description: str
    link: str


def strip_tags(text: str) -> str:
    """Remove markup and collapse whitespace."""
    return _SPACE_RE.sub(" ", _TAG_RE.sub("", text or "")).strip()


def feed_items(parsed: Any, limit: int) -> List[FeedItem]:
    """Normalize the first ``limit`` entries of a parsed feed."""
    items = []
    for entry in parsed.entries[:limit]:
        items.append(
            FeedItem(
                title=entry.get("title", "") or "",
                description=entry.get("summary") or entry.get("description", "") or "",
                link=entry.get("link", "") or "",
            )
        )
    return items


def match_feed_item(query: str, items: Iterable[FeedItem]) -> Optional[FeedItem]:
    """Return the first item mentioning enough of the query's words.

    Query words are the space-separated, lower-cased tokens longer than three
    characters. An item matches when at least ``min(2, len(words))`` of them
    appear in its title and description.
    """
    words = [word for word in query.lower().split(" ") if len(word) > 3]
    required = min(2, len(words))
    for item in items:
        content = f"{item.title} {item.description}".lower()
        if sum(1 for word in words if word in content) >= required:
            return item
    return None


class BaseSourceAdapter:
    """Base class implementing the never-raise contract of source providers.

    Subclasses implement ``_lookup``; ``query`` converts any failure inside it
    into ``None``.
    """

    name: str = "Source"
    source_kind: SourceKind = SourceKind.GENERAL
    confidence: float = 0.5

    def __init__(
        self,
        config: Optional[SourceConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the adapter.

        Args:
            config: Adapter configuration
            client: HTTP client to use instead of creating one lazily
        """
        self._config = config or SourceConfig()
        self._client = client
        self._owns_client = client is None
        self._cache: Optional[TTLCache] = None
        if self._config.cache_ttl > 0:
            self._cache = TTLCache(
                maxsize=self._config.cache_maxsize,
                ttl=self._config.cache_ttl,
            )

    async def query(self, text: str) -> Optional[EvidenceRecord]:
        """Look up evidence for a claim; never raises."""
        try:
            return await self._lookup(text)
        except Exception as e:
            logger.warning(f"⚠️ {self.name} lookup failed: {type(e).__name__}: {e}")
            return None

    async def _lookup(self, text: str) -> Optional[EvidenceRecord]:
        raise NotImplementedError

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._config.timeout,
                follow_redirects=True,
                headers={"User-Agent": self._config.user_agent},
            )
        return self._client

    async def _get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        response = await self._get_client().get(url, params=params, headers=headers)
        response.raise_for_status()
        return response

    async def _get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        response = await self._get(url, params=params, headers=headers)
        return response.json()

    async def _get_feed(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        cache: bool = False,
    ) -> List[FeedItem]:
        """Fetch and parse an RSS/Atom feed.

        Listing feeds that do not depend on the query are cached for
        ``cache_ttl`` seconds when ``cache`` is set.
        """
        body: Optional[bytes] = None
        if cache and self._cache is not None:
            body = self._cache.get(url)
        if body is None:
            response = await self._get(url, params=params, headers=headers)
            body = response.content
            if cache and self._cache is not None:
                self._cache[url] = body

        # Pass bytes so feedparser never treats the body as a URL or path
        parsed = feedparser.parse(body)
        return feed_items(parsed, self._config.max_feed_items)

    def _record(
        self,
        summary: str,
        url: str,
        confidence: Optional[float] = None,
        verdict: Optional[str] = None,
        source: Optional[str] = None,
    ) -> EvidenceRecord:
        return EvidenceRecord(
            source=source or self.name,
            verdict=verdict,
            summary=summary,
            url=url,
            confidence=self.confidence if confidence is None else confidence,
            kind=self.source_kind,
        )

    async def shutdown(self) -> None:
        """Close the HTTP client if this adapter created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        if self._owns_client:
            self._client = None

    @property
    def provider_name(self) -> str:
        """Get the provider name."""
        return self.name

    @property
    def kind(self) -> SourceKind:
        return self.source_kind
