"""SQLite implementation of the fact-check store."""

import asyncio
import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional

from ...domain.errors import StoreError
from ...domain.models.digest import DailyDigest, TrendingTopic
from ...domain.models.verification import Verdict
from ...domain.models.webpage_analysis import WebpageAnalysis

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

SCHEMA = """
CREATE TABLE IF NOT EXISTS fact_checks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    claim_text TEXT NOT NULL,
    verification_status TEXT NOT NULL,
    confidence_score REAL NOT NULL,
    sources TEXT NOT NULL DEFAULT '[]',
    reasoning TEXT NOT NULL DEFAULT '',
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_fact_checks_claim ON fact_checks(claim_text);
CREATE INDEX IF NOT EXISTS idx_fact_checks_created ON fact_checks(created_at);

CREATE TABLE IF NOT EXISTS webpage_analyses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    url TEXT NOT NULL UNIQUE,
    title TEXT NOT NULL DEFAULT '',
    summary TEXT NOT NULL DEFAULT '',
    claims_extracted TEXT NOT NULL DEFAULT '[]',
    overall_credibility TEXT NOT NULL,
    fact_check_results TEXT NOT NULL DEFAULT '[]',
    analyzed_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS daily_digests (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    digest_date TEXT NOT NULL UNIQUE,
    trending_claims TEXT NOT NULL DEFAULT '[]',
    summary TEXT NOT NULL DEFAULT '',
    fact_check_count INTEGER NOT NULL DEFAULT 0,
    analysis_count INTEGER NOT NULL DEFAULT 0,
    generated_at TEXT NOT NULL
);
"""


def format_timestamp(value: datetime) -> str:
    """UTC text timestamp that sorts chronologically."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime:
    return datetime.strptime(value, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)


def _verdict_from_row(row: sqlite3.Row) -> Verdict:
    return Verdict(
        claim=row["claim_text"],
        status=row["verification_status"],
        confidence=row["confidence_score"],
        sources=json.loads(row["sources"]),
        reasoning=row["reasoning"],
        created_at=parse_timestamp(row["created_at"]),
    )


def _analysis_from_row(row: sqlite3.Row) -> WebpageAnalysis:
    return WebpageAnalysis(
        url=row["url"],
        title=row["title"],
        summary=row["summary"],
        claims=json.loads(row["claims_extracted"]),
        results=[Verdict.model_validate(item) for item in json.loads(row["fact_check_results"])],
        credibility=row["overall_credibility"],
        analyzed_at=parse_timestamp(row["analyzed_at"]),
    )


def _digest_from_row(row: sqlite3.Row) -> DailyDigest:
    return DailyDigest(
        digest_date=date.fromisoformat(row["digest_date"]),
        trending=[TrendingTopic.model_validate(item) for item in json.loads(row["trending_claims"])],
        summary=row["summary"],
        fact_check_count=row["fact_check_count"],
        analysis_count=row["analysis_count"],
        generated_at=parse_timestamp(row["generated_at"]),
    )


class SQLiteStore:
    """Persistent store backed by a single SQLite file.

    Each operation opens its own connection in a worker thread, so the
    store can be shared by concurrent requests. Analyses and digests are
    upserted on their unique key; verdicts are appended and the newest row
    for a claim wins on lookup.
    """

    def __init__(self, db_path: str = "factcheckr.db"):
        self._db_path = db_path

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    async def _run(self, operation, *args):
        try:
            return await asyncio.to_thread(operation, *args)
        except sqlite3.Error as e:
            logger.error(f"❌ SQLite operation {operation.__name__} failed: {e}")
            raise StoreError(f"Store operation failed: {e}") from e

    async def initialize(self) -> None:
        """Create the database file and tables."""
        if self._db_path != ":memory:":
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        await self._run(self._create_schema)
        logger.info(f"💾 SQLite store ready at {self._db_path}")

    def _create_schema(self) -> None:
        with self._connection() as conn:
            conn.executescript(SCHEMA)

    # Verdicts

    async def find_verdict_by_claim(self, claim: str) -> Optional[Verdict]:
        return await self._run(self._find_verdict, claim)

    def _find_verdict(self, claim: str) -> Optional[Verdict]:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT * FROM fact_checks WHERE claim_text = ? "
                "ORDER BY created_at DESC, id DESC LIMIT 1",
                (claim,),
            ).fetchone()
        return _verdict_from_row(row) if row else None

    async def insert_verdict(self, verdict: Verdict) -> Verdict:
        await self._run(self._insert_verdict, verdict)
        return verdict

    def _insert_verdict(self, verdict: Verdict) -> None:
        with self._connection() as conn:
            conn.execute(
                "INSERT INTO fact_checks "
                "(claim_text, verification_status, confidence_score, sources, reasoning, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (
                    verdict.claim,
                    verdict.status.value,
                    verdict.confidence,
                    json.dumps(verdict.sources),
                    verdict.reasoning,
                    format_timestamp(verdict.created_at),
                ),
            )

    async def verdicts_since(
        self, since: datetime, until: Optional[datetime] = None, limit: int = 20
    ) -> List[Verdict]:
        return await self._run(self._verdicts_since, since, until, limit)

    def _verdicts_since(self, since: datetime, until: Optional[datetime], limit: int) -> List[Verdict]:
        query = "SELECT * FROM fact_checks WHERE created_at >= ?"
        params: list = [format_timestamp(since)]
        if until is not None:
            query += " AND created_at < ?"
            params.append(format_timestamp(until))
        query += " ORDER BY created_at DESC, id DESC LIMIT ?"
        params.append(limit)
        with self._connection() as conn:
            rows = conn.execute(query, params).fetchall()
        return [_verdict_from_row(row) for row in rows]

    # Webpage analyses

    async def find_analysis_by_url(self, url: str) -> Optional[WebpageAnalysis]:
        return await self._run(self._find_analysis, url)

    def _find_analysis(self, url: str) -> Optional[WebpageAnalysis]:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM webpage_analyses WHERE url = ?", (url,)).fetchone()
        return _analysis_from_row(row) if row else None

    async def insert_analysis(self, analysis: WebpageAnalysis) -> WebpageAnalysis:
        await self._run(self._insert_analysis, analysis)
        return analysis

    def _insert_analysis(self, analysis: WebpageAnalysis) -> None:
        with self._connection() as conn:
            conn.execute(
                "INSERT INTO webpage_analyses "
                "(url, title, summary, claims_extracted, overall_credibility, fact_check_results, analyzed_at) "
                "VALUES (?, ?, ?, ?, ?, ?, ?) "
                "ON CONFLICT(url) DO UPDATE SET "
                "title = excluded.title, summary = excluded.summary, "
                "claims_extracted = excluded.claims_extracted, "
                "overall_credibility = excluded.overall_credibility, "
                "fact_check_results = excluded.fact_check_results, "
                "analyzed_at = excluded.analyzed_at",
                (
                    analysis.url,
                    analysis.title,
                    analysis.summary,
                    json.dumps(analysis.claims),
                    analysis.credibility.value,
                    json.dumps([v.model_dump(mode="json") for v in analysis.results]),
                    format_timestamp(analysis.analyzed_at),
                ),
            )

    async def analyses_since(
        self, since: datetime, until: Optional[datetime] = None, limit: int = 10
    ) -> List[WebpageAnalysis]:
        return await self._run(self._analyses_since, since, until, limit)

    def _analyses_since(
        self, since: datetime, until: Optional[datetime], limit: int
    ) -> List[WebpageAnalysis]:
        query = "SELECT * FROM webpage_analyses WHERE analyzed_at >= ?"
        params: list = [format_timestamp(since)]
        if until is not None:
            query += " AND analyzed_at < ?"
            params.append(format_timestamp(until))
        query += " ORDER BY analyzed_at DESC, id DESC LIMIT ?"
        params.append(limit)
        with self._connection() as conn:
            rows = conn.execute(query, params).fetchall()
        return [_analysis_from_row(row) for row in rows]

    # Daily digests

    async def find_digest_by_date(self, digest_date: date) -> Optional[DailyDigest]:
        return await self._run(self._find_digest, digest_date)

    def _find_digest(self, digest_date: date) -> Optional[DailyDigest]:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT * FROM daily_digests WHERE digest_date = ?",
                (digest_date.isoformat(),),
            ).fetchone()
        return _digest_from_row(row) if row else None

    async def insert_digest(self, digest: DailyDigest) -> DailyDigest:
        await self._run(self._insert_digest, digest)
        return digest

    def _insert_digest(self, digest: DailyDigest) -> None:
        with self._connection() as conn:
            conn.execute(
                "INSERT INTO daily_digests "
                "(digest_date, trending_claims, summary, fact_check_count, analysis_count, generated_at) "
                "VALUES (?, ?, ?, ?, ?, ?) "
                "ON CONFLICT(digest_date) DO UPDATE SET "
                "trending_claims = excluded.trending_claims, summary = excluded.summary, "
                "fact_check_count = excluded.fact_check_count, "
                "analysis_count = excluded.analysis_count, "
                "generated_at = excluded.generated_at",
                (
                    digest.digest_date.isoformat(),
                    json.dumps([t.model_dump() for t in digest.trending]),
                    digest.summary,
                    digest.fact_check_count,
                    digest.analysis_count,
                    format_timestamp(digest.generated_at),
                ),
            )

    async def close(self) -> None:
        """Connections are per operation; nothing to release."""
