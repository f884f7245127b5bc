"""Daily digest generation over the stored fact-checking activity."""

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional, Sequence, Tuple, Union

from ..errors import DigestGenerationError, InvalidDigestDateError
from ..models.digest import DailyDigest, TrendingTopic
from ..models.verification import Verdict, VerdictStatus
from ..ports.ai_provider import AIProvider
from ..ports.store import FactCheckStore
from .cache_policy import is_fresh
from .model_output import parse_model_json

logger = logging.getLogger(__name__)

MAX_DIGEST_VERDICTS = 20
MAX_DIGEST_ANALYSES = 10

TRENDING_FALLBACK = TrendingTopic(
    topic="Analysis Error",
    description="Unable to identify trending topics",
)


def parse_digest_date(value: Union[str, date, None]) -> date:
    """Resolve a digest date, defaulting to today in UTC.

    Raises:
        InvalidDigestDateError: If a string is not in YYYY-MM-DD format
    """
    if value is None:
        return datetime.now(timezone.utc).date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidDigestDateError(f"Invalid date format: {value!r}. Use YYYY-MM-DD")


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """UTC start of the day and start of the next day."""
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)


def parse_trending(response: str) -> List[TrendingTopic]:
    parsed = parse_model_json(response)
    if not isinstance(parsed, list):
        raise ValueError("trending analysis is not a JSON array")
    return [TrendingTopic.model_validate(item) for item in parsed]


def build_summary_prompt(day: date, verdicts: Sequence[Verdict], analysis_count: int) -> str:
    true_count = sum(1 for v in verdicts if v.status == VerdictStatus.TRUE)
    false_count = sum(1 for v in verdicts if v.status == VerdictStatus.FALSE)
    other_count = sum(
        1 for v in verdicts if v.status in (VerdictStatus.MIXED, VerdictStatus.UNVERIFIED)
    )
    return (
        "Create a daily digest summary based on this fact-checking activity:\n\n"
        f"Date: {day.isoformat()}\n"
        f"Fact-checks performed: {len(verdicts)}\n"
        f"Webpage analyses: {analysis_count}\n"
        f"True claims: {true_count}\n"
        f"False claims: {false_count}\n"
        f"Mixed/Unverified: {other_count}\n\n"
        "Write a 3-4 sentence summary of the day's fact-checking activity and key insights."
    )


class DigestService:
    """Cache-first daily digests keyed by calendar date."""

    def __init__(
        self,
        ai_provider: AIProvider,
        store: FactCheckStore,
        cache_ttl: Optional[float] = None,
    ):
        self._ai = ai_provider
        self._store = store
        self._cache_ttl = cache_ttl

    async def get(self, digest_date: Union[str, date]) -> Optional[DailyDigest]:
        """Stored digest for a date, if any. Never generates one."""
        return await self._store.find_digest_by_date(parse_digest_date(digest_date))

    async def generate(
        self,
        digest_date: Union[str, date, None] = None,
        include_trending: bool = True,
    ) -> DailyDigest:
        digest, _ = await self.check(digest_date, include_trending)
        return digest

    async def check(
        self,
        digest_date: Union[str, date, None] = None,
        include_trending: bool = True,
    ) -> Tuple[DailyDigest, bool]:
        """Generate the digest for a day unless one is already stored.

        Returns:
            The digest and whether it came from the store

        Raises:
            InvalidDigestDateError: If the date is malformed
            DigestGenerationError: If the model cannot write the summary
        """
        day = parse_digest_date(digest_date)

        cached = await self._store.find_digest_by_date(day)
        if cached is not None and is_fresh(cached.generated_at, self._cache_ttl):
            logger.info(f"💾 Cache hit for digest {day.isoformat()}")
            return cached, True

        start, end = day_bounds(day)
        verdicts = await self._store.verdicts_since(start, until=end, limit=MAX_DIGEST_VERDICTS)
        analyses = await self._store.analyses_since(start, until=end, limit=MAX_DIGEST_ANALYSES)
        logger.info(
            f"📰 Building digest for {day.isoformat()}: "
            f"{len(verdicts)} fact-checks, {len(analyses)} analyses"
        )

        trending: List[TrendingTopic] = []
        if include_trending and verdicts:
            trending = await self._trending(verdicts)

        try:
            summary = await self._ai.generate(build_summary_prompt(day, verdicts, len(analyses)))
        except Exception as e:
            raise DigestGenerationError(f"Digest summary failed for {day.isoformat()}: {e}") from e

        digest = DailyDigest(
            digest_date=day,
            trending=trending,
            summary=summary,
            fact_check_count=len(verdicts),
            analysis_count=len(analyses),
        )
        stored = await self._store.insert_digest(digest)
        logger.info(f"✅ Digest generated for {day.isoformat()}")
        return stored, False

    async def _trending(self, verdicts: Sequence[Verdict]) -> List[TrendingTopic]:
        listing = "\n".join(f"- {v.claim} ({v.status.value})" for v in verdicts)
        prompt = (
            "Analyze these recent fact-checks and identify trending topics or patterns:\n\n"
            f"Recent Fact-Checks:\n{listing}\n\n"
            "Identify 3-5 trending topics or notable patterns. Return as JSON array with "
            'objects containing "topic" and "description" fields.'
        )
        try:
            return parse_trending(await self._ai.generate(prompt))
        except ValueError as e:
            logger.warning(f"⚠️ Trending analysis unusable: {e}")
        except Exception as e:
            logger.warning(f"⚠️ Trending analysis failed: {e}", exc_info=True)
        return [TRENDING_FALLBACK]
