"""Protocol for fetching webpages as plain text."""

from typing import Protocol

from ..models.webpage_analysis import WebpageContent


class PageFetcher(Protocol):
    """Fetches a URL and strips it down to title and plain text."""

    async def fetch(self, url: str) -> WebpageContent:
        """Fetch a webpage.

        Raises:
            WebpageFetchError: On network failure or a non-2xx response.
        """
        ...

    async def shutdown(self) -> None:
        ...
