"""Keyword-based topical classification of claims."""

from typing import Dict, FrozenSet, Tuple

from ..models.claim import ClaimTag

TAG_KEYWORDS: Dict[ClaimTag, Tuple[str, ...]] = {
    ClaimTag.ESPORTS: (
        "major", "tournament", "cs:go", "dota", "league", "valorant", "esports", "gaming",
    ),
    ClaimTag.SPORTS: (
        "championship", "world cup", "olympics", "nfl", "nba", "football", "soccer", "baseball",
    ),
    ClaimTag.MEDICAL: (
        "health", "medicine", "disease", "vaccine", "drug", "treatment", "vitamin",
        "cancer", "covid", "medical",
    ),
    ClaimTag.FINANCIAL: (
        "stock", "market", "sec", "earnings", "revenue", "profit", "company", "financial",
    ),
    ClaimTag.SCIENTIFIC: (
        "research", "study", "science", "experiment", "theory", "discovery", "climate", "physics",
    ),
}


class ClaimClassifier:
    """Tags a claim with every domain whose keywords it mentions.

    Matching is a case-insensitive substring test, so "sec" also matches
    "second". A claim may carry zero, one or several tags.
    """

    def __init__(self, keywords: Dict[ClaimTag, Tuple[str, ...]] = TAG_KEYWORDS):
        self._keywords = keywords

    def classify(self, claim_text: str) -> FrozenSet[ClaimTag]:
        text = claim_text.lower()
        return frozenset(
            tag
            for tag, words in self._keywords.items()
            if any(word in text for word in words)
        )
