"""Service coordinating claim verification across sources, model and store."""

import logging
from typing import Optional, Tuple

from ..models.verification import Verdict
from ..ports.store import FactCheckStore
from .cache_policy import is_fresh
from .claim_classifier import ClaimClassifier
from .conflict_analyzer import ConflictAnalyzer
from .evidence_collector import EvidenceCollector
from .verdict_synthesizer import VerdictSynthesizer

logger = logging.getLogger(__name__)


class FactCheckingService:
    """Cache-first claim verification.

    A claim already in the store is answered from it without touching any
    source or the model. Otherwise the pipeline runs (classify, collect,
    analyze conflicts, synthesize) and the verdict is persisted.
    """

    def __init__(
        self,
        collector: EvidenceCollector,
        synthesizer: VerdictSynthesizer,
        store: FactCheckStore,
        classifier: Optional[ClaimClassifier] = None,
        conflict_analyzer: Optional[ConflictAnalyzer] = None,
        cache_ttl: Optional[float] = None,
    ):
        """Initialize the service.

        Args:
            collector: Queries evidence sources
            synthesizer: Turns evidence and a model answer into a verdict
            store: Verdict cache
            classifier: Claim tagger
            conflict_analyzer: Detects disagreeing evidence
            cache_ttl: Seconds a stored verdict stays valid (None = forever)
        """
        self._collector = collector
        self._synthesizer = synthesizer
        self._store = store
        self._classifier = classifier or ClaimClassifier()
        self._conflicts = conflict_analyzer or ConflictAnalyzer()
        self._cache_ttl = cache_ttl
        logger.info("🔧 FactCheckingService initialized")

    async def verify(self, claim: str, context: Optional[str] = None) -> Verdict:
        """Verify a claim, returning the stored verdict when one exists."""
        verdict, _ = await self.check(claim, context)
        return verdict

    async def check(self, claim: str, context: Optional[str] = None) -> Tuple[Verdict, bool]:
        """Verify a claim.

        Returns:
            The verdict and whether it came from the store
        """
        if not claim or not claim.strip():
            raise ValueError("Claim text must not be empty")

        cached = await self._store.find_verdict_by_claim(claim)
        if cached is not None and is_fresh(cached.created_at, self._cache_ttl):
            logger.info(f"💾 Cache hit for claim: {claim[:100]}")
            return cached, True

        logger.info(f"🔍 Starting fact check for claim: {claim[:100]}")
        verdict = await self.run_pipeline(claim, context)
        stored = await self._store.insert_verdict(verdict)
        logger.info(f"✅ Fact check complete: {stored.status.value} ({stored.confidence:.2f})")
        return stored, False

    async def run_pipeline(self, claim: str, context: Optional[str] = None) -> Verdict:
        """Run classification, collection and synthesis without touching the store."""
        tags = self._classifier.classify(claim)
        evidence = await self._collector.collect(claim, tags)
        conflicts = self._conflicts.analyze(evidence)
        if conflicts.has_conflicts:
            logger.warning(f"⚠️ {conflicts.explanation}")
        return await self._synthesizer.synthesize(claim, context, evidence, conflicts, tags)
