"""TheSportsDB event search adapter."""

from typing import Optional

from ...domain.models.evidence import EvidenceRecord, SourceKind
from .base import BaseSourceAdapter, SourceConfig

SPORTSDB_BASE_URL = "https://www.thesportsdb.com/api/v1/json"


class SportsDBAdapter(BaseSourceAdapter):
    """Looks up sporting events by name."""

    name = "TheSportsDB"
    source_kind = SourceKind.SPECIALIZED
    confidence = 0.8

    def __init__(self, config: Optional[SourceConfig] = None, api_key: str = "3", **kwargs):
        super().__init__(config=config, **kwargs)
        self._api_key = api_key

    async def _lookup(self, text: str) -> Optional[EvidenceRecord]:
        data = await self._get_json(
            f"{SPORTSDB_BASE_URL}/{self._api_key}/searchevents.php",
            params={"e": text},
        )
        events = data.get("event") or []
        if not events:
            return None

        event = events[0]
        return self._record(
            summary=(
                f"{event.get('strEvent')}: {event.get('strHomeTeam')} vs "
                f"{event.get('strAwayTeam')} on {event.get('dateEvent')}"
            ),
            url=f"https://www.thesportsdb.com/event/{event.get('idEvent')}",
        )
