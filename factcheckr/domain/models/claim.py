"""Domain model for claim topical tags."""

from enum import Enum


class ClaimTag(str, Enum):
    """Topical domains a claim can be classified into."""

    ESPORTS = "esports"
    SPORTS = "sports"
    MEDICAL = "medical"
    FINANCIAL = "financial"
    SCIENTIFIC = "scientific"
