"""PubMed (NCBI E-utilities) medical literature adapter."""

from typing import Optional

from ...domain.models.evidence import EvidenceRecord, SourceKind
from .base import BaseSourceAdapter

EUTILS_BASE_URL = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils"


class PubMedAdapter(BaseSourceAdapter):
    """Two-step search: esearch for PMIDs, then esummary of the first hit."""

    name = "PubMed/NCBI"
    source_kind = SourceKind.SPECIALIZED
    confidence = 0.9

    async def _lookup(self, text: str) -> Optional[EvidenceRecord]:
        search = await self._get_json(
            f"{EUTILS_BASE_URL}/esearch.fcgi",
            params={"db": "pubmed", "term": text, "retmax": 5, "retmode": "json"},
        )
        pmids = search.get("esearchresult", {}).get("idlist") or []
        if not pmids:
            return None

        pmid = pmids[0]
        detail = await self._get_json(
            f"{EUTILS_BASE_URL}/esummary.fcgi",
            params={"db": "pubmed", "id": pmid, "retmode": "json"},
        )
        article = detail.get("result", {}).get(pmid)
        if not article:
            return None

        authors = article.get("authors") or []
        first_author = authors[0].get("name") if authors else None
        return self._record(
            summary=(
                f"{article.get('title')} - {first_author or 'Unknown author'} et al. "
                f"({article.get('pubdate')}) - {article.get('source')}"
            ),
            url=f"https://pubmed.ncbi.nlm.nih.gov/{pmid}/",
        )
