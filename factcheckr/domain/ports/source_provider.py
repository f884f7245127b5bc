"""Source provider interface for evidence-gathering adapters."""

from typing import Optional, Protocol

from ..models.evidence import EvidenceRecord, SourceKind


class SourceProvider(Protocol):
    """Protocol for external knowledge sources.

    Implementations perform one (or a small bounded number of) outbound
    lookups per query. They never raise: any network, parse or format error
    is reported as ``None``, meaning "no evidence from this source".
    """

    async def query(self, text: str) -> Optional[EvidenceRecord]:
        """Look up evidence for free text, or return None on no match."""
        ...

    async def shutdown(self) -> None:
        """Release network resources."""
        ...

    @property
    def provider_name(self) -> str:
        """Get the provider name."""
        ...

    @property
    def kind(self) -> SourceKind:
        """General, fact-check or specialized."""
        ...
