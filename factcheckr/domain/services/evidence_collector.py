"""Selects and queries the evidence sources appropriate for a claim."""

import asyncio
import logging
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from ..models.claim import ClaimTag
from ..models.evidence import EvidenceRecord
from ..ports.source_provider import SourceProvider
from .claim_classifier import ClaimClassifier

logger = logging.getLogger(__name__)

LEADING_SOURCES: Tuple[str, ...] = ("wikipedia", "duckduckgo", "snopes")
TAG_SOURCES: Tuple[Tuple[ClaimTag, Tuple[str, ...]], ...] = (
    (ClaimTag.ESPORTS, ("liquipedia",)),
    (ClaimTag.SPORTS, ("espn", "sportsdb")),
    (ClaimTag.MEDICAL, ("pubmed", "who")),
    (ClaimTag.FINANCIAL, ("sec",)),
    (ClaimTag.SCIENTIFIC, ("arxiv",)),
)
TRAILING_SOURCES: Tuple[str, ...] = ("wikidata",)

DEFAULT_SOURCE_TIMEOUT = 15.0


class EvidenceCollector:
    """Gathers evidence records from general and domain-specific sources.

    The tag to source mapping is resolved once, at construction, from the
    named providers given. Names without a provider are skipped.
    """

    def __init__(
        self,
        sources: Dict[str, SourceProvider],
        classifier: Optional[ClaimClassifier] = None,
        timeout: float = DEFAULT_SOURCE_TIMEOUT,
    ):
        """Initialize the collector.

        Args:
            sources: Providers keyed by source name (``wikipedia``, ``pubmed``...)
            classifier: Used when ``collect`` is called without tags
            timeout: Per-source time limit in seconds; a timeout is a "no match"
        """
        self._classifier = classifier or ClaimClassifier()
        self._timeout = timeout
        self._leading = self._resolve(sources, LEADING_SOURCES)
        self._tagged = [(tag, self._resolve(sources, names)) for tag, names in TAG_SOURCES]
        self._trailing = self._resolve(sources, TRAILING_SOURCES)

    @staticmethod
    def _resolve(sources: Dict[str, SourceProvider], names: Iterable[str]) -> List[SourceProvider]:
        return [sources[name] for name in names if name in sources]

    def select(self, tags: FrozenSet[ClaimTag]) -> List[SourceProvider]:
        """Sources to query for the given tags, in invocation order."""
        selected = list(self._leading)
        for tag, providers in self._tagged:
            if tag in tags:
                selected.extend(providers)
        selected.extend(self._trailing)
        return selected

    async def collect(
        self,
        claim_text: str,
        tags: Optional[FrozenSet[ClaimTag]] = None,
    ) -> List[EvidenceRecord]:
        """Query every selected source concurrently.

        Args:
            claim_text: Claim to look up
            tags: Domain tags; classified from the text when omitted

        Returns:
            Records in source order, with absent results dropped
        """
        if tags is None:
            tags = self._classifier.classify(claim_text)

        providers = self.select(tags)
        logger.info(
            f"🔎 Querying {len(providers)} sources for claim "
            f"(tags: {', '.join(sorted(t.value for t in tags)) or 'none'})"
        )

        results = await asyncio.gather(
            *(self._query(provider, claim_text) for provider in providers),
            return_exceptions=True,
        )

        evidence: List[EvidenceRecord] = []
        failures = 0
        for provider, result in zip(providers, results):
            if isinstance(result, Exception):
                failures += 1
                logger.error(
                    f"❌ Source {provider.provider_name} raised: {result}",
                    exc_info=result,
                )
            elif result is not None:
                evidence.append(result)

        if providers and failures == len(providers):
            logger.error("❌ Every evidence source failed")

        logger.info(f"📚 Collected {len(evidence)} evidence records")
        return evidence

    async def _query(self, provider: SourceProvider, claim_text: str) -> Optional[EvidenceRecord]:
        try:
            return await asyncio.wait_for(provider.query(claim_text), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.warning(f"⏱️ Source {provider.provider_name} timed out after {self._timeout}s")
            return None
