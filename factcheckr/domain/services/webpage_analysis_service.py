"""Service extracting and verifying the factual claims of a webpage."""

import logging
from typing import List, Optional, Sequence, Tuple

from ..errors import WebpageAnalysisError
from ..models.webpage_analysis import (
    WebpageAnalysis,
    WebpageContent,
    credibility_from_confidence,
    mean_confidence,
)
from ..ports.ai_provider import AIProvider
from ..ports.page_fetcher import PageFetcher
from ..ports.store import FactCheckStore
from .cache_policy import is_fresh
from .fact_checking_service import FactCheckingService
from .model_output import parse_model_json

logger = logging.getLogger(__name__)

MAX_VERIFIED_CLAIMS = 3


def build_extraction_prompt(page: WebpageContent, focus_areas: Optional[Sequence[str]] = None) -> str:
    prompt = (
        "Analyze the following webpage content and extract factual claims that can be verified:\n\n"
        f"Title: {page.title}\n"
        f"Content: {page.content}\n"
    )
    if focus_areas:
        prompt += f"Focus Areas: {', '.join(focus_areas)}\n"
    prompt += (
        "\nPlease identify 3-5 key factual claims from this content that are specific and "
        "verifiable. Return them as a JSON array of strings."
    )
    return prompt


def parse_claims(response: str) -> List[str]:
    """Claims from the model's answer.

    A JSON array yields its non-blank entries. Anything else is treated as a
    single claim consisting of the raw text.
    """
    parsed = parse_model_json(response)
    if isinstance(parsed, list):
        candidates = [item if isinstance(item, str) else str(item) for item in parsed]
    else:
        candidates = [response]
    return [claim.strip() for claim in candidates if claim and claim.strip()]


class WebpageAnalysisService:
    """Cache-first webpage credibility analysis keyed by URL."""

    def __init__(
        self,
        fetcher: PageFetcher,
        ai_provider: AIProvider,
        fact_checker: FactCheckingService,
        store: FactCheckStore,
        cache_ttl: Optional[float] = None,
    ):
        self._fetcher = fetcher
        self._ai = ai_provider
        self._fact_checker = fact_checker
        self._store = store
        self._cache_ttl = cache_ttl

    async def analyze(self, url: str, focus_areas: Optional[Sequence[str]] = None) -> WebpageAnalysis:
        analysis, _ = await self.check(url, focus_areas)
        return analysis

    async def check(
        self, url: str, focus_areas: Optional[Sequence[str]] = None
    ) -> Tuple[WebpageAnalysis, bool]:
        """Analyze a webpage.

        Args:
            url: Page to analyze
            focus_areas: Topics the claim extraction should concentrate on

        Returns:
            The analysis and whether it came from the store

        Raises:
            WebpageFetchError: If the page cannot be fetched
            WebpageAnalysisError: If the model fails to extract claims or summarize
        """
        cached = await self._store.find_analysis_by_url(url)
        if cached is not None and is_fresh(cached.analyzed_at, self._cache_ttl):
            logger.info(f"💾 Cache hit for webpage: {url}")
            return cached, True

        logger.info(f"🌐 Analyzing webpage: {url}")
        page = await self._fetcher.fetch(url)

        try:
            response = await self._ai.generate(build_extraction_prompt(page, focus_areas))
        except Exception as e:
            raise WebpageAnalysisError(f"Claim extraction failed for {url}: {e}") from e
        claims = parse_claims(response)
        logger.info(f"📝 Extracted {len(claims)} claims from {url}")

        # Page claims are verified fresh and are not cached individually
        results = []
        for claim in claims[:MAX_VERIFIED_CLAIMS]:
            results.append(await self._fact_checker.run_pipeline(claim, f"From webpage: {page.title}"))

        average = mean_confidence(results)
        credibility = credibility_from_confidence(average)

        summary_prompt = (
            "Summarize the credibility and key findings from this webpage analysis:\n\n"
            f"Title: {page.title}\n"
            f"Claims analyzed: {len(claims)}\n"
            f"Overall credibility: {credibility.value}\n"
            f"Average confidence: {(average or 0.0):.2f}\n\n"
            "Provide a brief 2-3 sentence summary of the webpage's factual reliability."
        )
        try:
            summary = await self._ai.generate(summary_prompt)
        except Exception as e:
            raise WebpageAnalysisError(f"Summary generation failed for {url}: {e}") from e

        analysis = WebpageAnalysis(
            url=url,
            title=page.title,
            summary=summary,
            claims=claims,
            results=results,
            credibility=credibility,
        )
        stored = await self._store.insert_analysis(analysis)
        logger.info(f"✅ Webpage analysis complete: {url} ({credibility.value})")
        return stored, False
