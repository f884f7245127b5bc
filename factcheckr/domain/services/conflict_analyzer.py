"""Detection of disagreement between evidence records."""

from typing import List, Sequence, Tuple

from ..models.evidence import ConflictAnalysis, EvidenceRecord

VERDICT_CONFLICT_EXPLANATION = "Sources provide conflicting verdicts."

# Pairs of words whose presence in two summaries suggests they disagree.
OPPOSING_TERMS: Tuple[Tuple[str, str], ...] = (
    ("won", "lost"),
    ("true", "false"),
    ("yes", "no"),
)


def _opposed(first: str, second: str) -> bool:
    for a, b in OPPOSING_TERMS:
        if (a in first and b in second) or (b in first and a in second):
            return True
    return False


class ConflictAnalyzer:
    """Flags contradictory evidence.

    Explicit verdict labels are compared first. Only when they agree (or are
    missing) are the summaries scanned pairwise for opposing terms. The
    summary test is a plain substring match, so "no" also matches inside
    words such as "known".
    """

    def analyze(self, evidence: Sequence[EvidenceRecord]) -> ConflictAnalysis:
        if len(evidence) < 2:
            return ConflictAnalysis()

        if self._verdicts_conflict(evidence):
            return ConflictAnalysis(has_conflicts=True, explanation=VERDICT_CONFLICT_EXPLANATION)

        pairs: List[str] = []
        summaries = [record.summary.lower() for record in evidence]
        for i in range(len(evidence)):
            for j in range(i + 1, len(evidence)):
                if _opposed(summaries[i], summaries[j]):
                    pairs.append(f"{evidence[i].source} vs {evidence[j].source}")

        if not pairs:
            return ConflictAnalysis()
        return ConflictAnalysis(
            has_conflicts=True,
            explanation="Conflicting information between: " + ", ".join(pairs),
        )

    @staticmethod
    def _verdicts_conflict(evidence: Sequence[EvidenceRecord]) -> bool:
        labels = [(record.verdict or "").lower() for record in evidence]
        for i, label in enumerate(labels):
            if "true" not in label:
                continue
            if any("false" in other for j, other in enumerate(labels) if j != i):
                return True
        return False
