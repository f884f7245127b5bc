"""MCP tool server exposing the fact-checking operations.

Tools:
    verify_claim: Verify a claim against multiple sources
    analyze_webpage: Extract and verify the key claims of a webpage
    generate_daily_digest: Summarize one day of fact-checking activity

Usage: factcheckr-mcp   (stdio transport)
"""

import contextlib
import json
import logging
from typing import List, Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from .domain.errors import FactCheckError
from .domain.models.digest import DailyDigest
from .domain.models.verification import Verdict
from .domain.models.webpage_analysis import WebpageAnalysis
from .infrastructure.config import FactCheckConfig, configure_logging
from .infrastructure.dependencies import get_service_container

logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastMCP):
    """Close network clients and the store when the server stops."""
    yield
    await get_service_container().shutdown()


server = FastMCP("factcheckr", lifespan=lifespan)


def render_verdict(verdict: Verdict, cached: bool) -> str:
    heading = "Cached Result" if cached else "Verification Complete"
    return (
        f"{heading}:\n"
        f"Status: {verdict.status.value}\n"
        f"Confidence: {verdict.confidence}\n"
        f"Sources: {json.dumps(verdict.sources)}\n"
        f"Reasoning: {verdict.reasoning}"
    )


def render_analysis(analysis: WebpageAnalysis, cached: bool) -> str:
    if cached:
        return (
            "Cached Analysis:\n"
            f"Title: {analysis.title}\n"
            f"Summary: {analysis.summary}\n"
            f"Credibility: {analysis.credibility.value}\n"
            f"Claims: {json.dumps(analysis.claims)}"
        )
    results = [v.model_dump(mode="json") for v in analysis.results]
    return (
        "Webpage Analysis Complete:\n"
        f"Title: {analysis.title}\n"
        f"Summary: {analysis.summary}\n"
        f"Credibility: {analysis.credibility.value}\n"
        f"Claims Analyzed: {len(analysis.claims)}\n"
        f"Fact-Check Results: {json.dumps(results, indent=2)}"
    )


def render_digest(digest: DailyDigest, cached: bool) -> str:
    day = digest.digest_date.isoformat()
    trending = json.dumps([t.model_dump() for t in digest.trending], indent=2)
    if cached:
        return f"Daily Digest for {day}:\n\n{digest.summary}\n\nTrending Claims: {trending}"
    return (
        f"Daily Digest Generated for {day}:\n\n{digest.summary}\n\n"
        f"Trending Claims: {trending}\n\n"
        f"Stats:\n- Fact-checks: {digest.fact_check_count}\n"
        f"- Webpage analyses: {digest.analysis_count}"
    )


@server.tool()
async def verify_claim(claim: str, context: Optional[str] = None) -> str:
    """Verify a factual claim using multiple external sources and AI analysis.

    Args:
        claim: The claim to fact-check
        context: Additional context about the claim
    """
    service = await get_service_container().get_fact_checking_service()
    try:
        verdict, cached = await service.check(claim, context)
    except (FactCheckError, ValueError) as e:
        raise ToolError(f"Error verifying claim: {e}") from e
    return render_verdict(verdict, cached)


@server.tool()
async def analyze_webpage(url: str, focus_areas: Optional[List[str]] = None) -> str:
    """Analyze a webpage for factual claims and assess its credibility.

    Args:
        url: URL of the webpage to analyze
        focus_areas: Specific areas to focus on
    """
    service = await get_service_container().get_webpage_analysis_service()
    try:
        analysis, cached = await service.check(url, focus_areas)
    except FactCheckError as e:
        raise ToolError(f"Error analyzing webpage: {e}") from e
    return render_analysis(analysis, cached)


@server.tool()
async def generate_daily_digest(date: Optional[str] = None, include_trending: bool = True) -> str:
    """Generate a daily digest of fact-checking activity.

    Args:
        date: Date for digest (YYYY-MM-DD format, defaults to today)
        include_trending: Include trending claims analysis
    """
    service = await get_service_container().get_digest_service()
    try:
        digest, cached = await service.check(date, include_trending)
    except FactCheckError as e:
        raise ToolError(f"Error generating digest: {e}") from e
    return render_digest(digest, cached)


def main() -> None:
    """Run the MCP server over stdio."""
    configure_logging(FactCheckConfig.from_env().log_level)
    logger.info("🚀 Starting FactCheckr MCP server")
    server.run()


if __name__ == "__main__":
    main()
