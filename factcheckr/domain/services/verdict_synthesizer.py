"""Combines gathered evidence and a model judgement into a verdict."""

import logging
from typing import Any, Dict, FrozenSet, List, Optional, Sequence

from ..models.claim import ClaimTag
from ..models.evidence import ConflictAnalysis, EvidenceRecord, SourceKind
from ..models.verification import Verdict, VerdictStatus, clamp_confidence, coerce_confidence
from ..ports.ai_provider import AIProvider
from .model_output import parse_model_json

logger = logging.getLogger(__name__)

TAG_HINTS: Dict[ClaimTag, str] = {
    ClaimTag.ESPORTS: (
        "IMPORTANT: This appears to be an esports-related claim. Pay special attention to "
        "Liquipedia sources as they are highly authoritative for esports tournaments."
    ),
    ClaimTag.SPORTS: (
        "IMPORTANT: This appears to be a sports-related claim. Pay special attention to "
        "ESPN and TheSportsDB sources for sports events."
    ),
    ClaimTag.MEDICAL: (
        "IMPORTANT: This appears to be a medical/health claim. Pay special attention to "
        "PubMed and WHO sources as they are highly authoritative for medical information."
    ),
    ClaimTag.FINANCIAL: (
        "IMPORTANT: This appears to be a financial claim. Pay special attention to "
        "SEC EDGAR sources for official financial information."
    ),
    ClaimTag.SCIENTIFIC: (
        "IMPORTANT: This appears to be a scientific claim. Pay special attention to "
        "arXiv and academic sources for scientific research."
    ),
}

ANSWER_SCHEMA = """Format your response as JSON with the following structure:
{
  "status": "true|false|mixed|unverified",
  "confidence": 0.0-1.0,
  "sources": ["source1", "source2"],
  "reasoning": "detailed explanation"
}"""

EVIDENCE_WEIGHT = 0.8
CONFLICT_PENALTY = 0.7
CONFLICT_FLOOR = 0.3
SPECIALIZED_FLOOR = 0.85
FACT_CHECK_FLOOR = 0.9


def build_prompt(
    claim: str,
    context: Optional[str],
    evidence: Sequence[EvidenceRecord],
    conflicts: ConflictAnalysis,
    tags: FrozenSet[ClaimTag],
) -> str:
    """Assemble the verification prompt sent to the model."""
    enhanced = context or ""
    if evidence:
        enhanced += "\n\nExternal Sources Found:\n"
        for index, record in enumerate(evidence, start=1):
            enhanced += f"{index}. {record.source}: {record.summary}"
            if record.verdict:
                enhanced += f" (Verdict: {record.verdict})"
            enhanced += f"\n   Source: {record.url}\n"
        if conflicts.has_conflicts:
            enhanced += f"\n⚠️ CONFLICTING INFORMATION DETECTED:\n{conflicts.explanation}\n"

    lines = [
        "Analyze the following claim for factual accuracy using the provided external sources:",
        "",
        f'Claim: "{claim}"',
    ]
    if enhanced:
        lines.append(f'Context and External Sources: "{enhanced}"')
    lines.append("")
    # Fixed order so the prompt is stable for a given tag set
    lines.extend(hint for tag, hint in TAG_HINTS.items() if tag in tags)
    lines.extend([
        "",
        "Based on the external sources provided (if any) and your knowledge, please provide:",
        "1. A verification status (true/false/mixed/unverified)",
        "2. A confidence score from 0.0 to 1.0",
        "3. Key sources or evidence that support or refute the claim",
        "4. Clear reasoning for your assessment",
        "",
    ])
    if conflicts.has_conflicts:
        lines.append(
            "CRITICAL: There are conflicting sources. Please analyze carefully and "
            "explain the discrepancies."
        )
    if evidence:
        lines.append(
            "IMPORTANT: Give higher weight to the external sources provided, especially "
            "specialized sources like Liquipedia for esports, ESPN for sports, PubMed/WHO "
            "for medical claims, SEC for financial data, or arXiv for scientific research."
        )
    lines.extend(["", ANSWER_SCHEMA])
    return "\n".join(lines)


def adjust_confidence(
    model_confidence: Any,
    evidence: Sequence[EvidenceRecord],
    conflicts: ConflictAnalysis,
) -> float:
    """Blend the model's confidence with evidence weight, conflicts and authority floors."""
    # Clamped once, after every adjustment
    confidence = coerce_confidence(model_confidence)

    if evidence:
        mean = sum(record.confidence for record in evidence) / len(evidence)
        confidence = max(confidence, mean * EVIDENCE_WEIGHT)

    if conflicts.has_conflicts:
        confidence = max(CONFLICT_FLOOR, confidence * CONFLICT_PENALTY)
    else:
        if any(record.is_specialized for record in evidence):
            confidence = max(confidence, SPECIALIZED_FLOOR)
        if any(record.kind == SourceKind.FACT_CHECK and record.verdict for record in evidence):
            confidence = max(confidence, FACT_CHECK_FLOOR)

    return clamp_confidence(confidence)


class VerdictSynthesizer:
    """Asks the model for a verdict and reconciles it with the evidence.

    Model failures never propagate: unparseable output and provider errors
    produce an ``unverified`` verdict whose confidence reflects only whether
    any evidence was found.
    """

    def __init__(self, ai_provider: AIProvider):
        self._ai = ai_provider

    async def synthesize(
        self,
        claim: str,
        context: Optional[str],
        evidence: Sequence[EvidenceRecord],
        conflicts: ConflictAnalysis,
        tags: FrozenSet[ClaimTag],
    ) -> Verdict:
        evidence_urls = [record.url for record in evidence]
        prompt = build_prompt(claim, context, evidence, conflicts, tags)

        try:
            response = await self._ai.generate(prompt)
        except Exception as e:
            logger.error(f"❌ Model call failed during verification: {e}", exc_info=True)
            return Verdict(
                claim=claim,
                status=VerdictStatus.UNVERIFIED,
                confidence=0.4 if evidence else 0.0,
                sources=evidence_urls,
                reasoning=f"Error during verification: {e}",
            )

        parsed = parse_model_json(response)
        if not isinstance(parsed, dict):
            logger.warning("⚠️ Model returned non-JSON verdict, falling back to unverified")
            return Verdict(
                claim=claim,
                status=VerdictStatus.UNVERIFIED,
                confidence=0.6 if evidence else 0.3,
                sources=evidence_urls,
                reasoning=response or "Unable to verify claim",
            )

        model_sources = parsed.get("sources")
        sources: List[str] = [str(s) for s in model_sources] if isinstance(model_sources, list) else []
        sources.extend(url for url in evidence_urls if url not in sources)

        verdict = Verdict(
            claim=claim,
            status=VerdictStatus.parse(parsed.get("status")),
            confidence=adjust_confidence(parsed.get("confidence"), evidence, conflicts),
            sources=sources,
            reasoning=str(parsed.get("reasoning") or "No reasoning provided"),
        )
        logger.info(f"⚖️ Verdict: {verdict.status.value} ({verdict.confidence:.2f})")
        return verdict
