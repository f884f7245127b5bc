"""Wikidata structured knowledge-base adapter."""

from typing import Optional

from ...domain.models.evidence import EvidenceRecord, SourceKind
from .base import BaseSourceAdapter

WIKIDATA_SPARQL_URL = "https://query.wikidata.org/sparql"

_SPARQL_TEMPLATE = """
SELECT ?item ?itemLabel ?description WHERE {{
  ?item rdfs:label ?itemLabel .
  ?item schema:description ?description .
  FILTER(LANG(?itemLabel) = "en")
  FILTER(LANG(?description) = "en")
  FILTER(CONTAINS(LCASE(?itemLabel), LCASE("{term}")))
}}
LIMIT 3
"""


def build_sparql(text: str) -> str:
    """Label-contains query over the first 50 characters of the claim."""
    term = text.replace('"', "").replace("\\", "")[:50]
    return _SPARQL_TEMPLATE.format(term=term)


class WikidataAdapter(BaseSourceAdapter):
    """Entity lookup for structured facts."""

    name = "Wikidata"
    source_kind = SourceKind.GENERAL
    confidence = 0.8

    async def _lookup(self, text: str) -> Optional[EvidenceRecord]:
        data = await self._get_json(
            WIKIDATA_SPARQL_URL,
            params={"query": build_sparql(text), "format": "json"},
            headers={"Accept": "application/sparql-results+json"},
        )
        bindings = data.get("results", {}).get("bindings", [])
        if not bindings:
            return None

        first = bindings[0]
        label = first.get("itemLabel", {}).get("value", "")
        description = first.get("description", {}).get("value", "")
        return self._record(
            summary=f"{label}: {description}",
            url=first.get("item", {}).get("value", ""),
        )
