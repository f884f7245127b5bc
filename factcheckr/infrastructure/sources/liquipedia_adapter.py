"""Liquipedia esports adapter."""

from typing import Optional

from ...domain.models.evidence import EvidenceRecord, SourceKind
from .base import BaseSourceAdapter

# Checked in order; the first game whose hints appear in the claim wins.
GAME_HINTS = (
    ("counterstrike", ("cs:go", "counter-strike", "stockholm major")),
    ("dota2", ("dota", "international")),
    ("leagueoflegends", ("league", "worlds", "lol")),
    ("valorant", ("valorant",)),
)

TOURNAMENT_MARKERS = ("major", "championship", "tournament", "2021")


def detect_game(text: str) -> Optional[str]:
    """Liquipedia wiki name for the game a claim is about."""
    lowered = text.lower()
    for wiki, hints in GAME_HINTS:
        if any(hint in lowered for hint in hints):
            return wiki
    return None


class LiquipediaAdapter(BaseSourceAdapter):
    """Tournament pages from the per-game Liquipedia wikis."""

    name = "Liquipedia"
    source_kind = SourceKind.SPECIALIZED
    confidence = 0.85

    async def _lookup(self, text: str) -> Optional[EvidenceRecord]:
        game = detect_game(text)
        if not game:
            return None

        data = await self._get_json(
            f"https://{game}.liquipedia.net/api.php",
            params={"action": "opensearch", "search": text, "limit": 5, "format": "json"},
        )
        _, titles, descriptions, urls = data[:4]

        for index, title in enumerate(titles):
            if any(marker in title.lower() for marker in TOURNAMENT_MARKERS):
                description = descriptions[index] if index < len(descriptions) else ""
                return self._record(
                    summary=f"{title}: {description}",
                    url=urls[index],
                    source=f"Liquipedia ({game})",
                )

        return None
