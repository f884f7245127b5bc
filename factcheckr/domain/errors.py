"""Exceptions raised across the fact-checking domain."""


class FactCheckError(Exception):
    """Base class for failures surfaced to callers of the service."""


class WebpageFetchError(FactCheckError):
    """The page to analyse could not be fetched."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch webpage {url}: {reason}")


class WebpageAnalysisError(FactCheckError):
    """The model could not extract or summarize claims for a page."""


class DigestGenerationError(FactCheckError):
    """The daily digest could not be produced."""


class InvalidDigestDateError(FactCheckError):
    """A digest date was not in YYYY-MM-DD format."""


class StoreError(FactCheckError):
    """The fact-check store failed to read or write."""
