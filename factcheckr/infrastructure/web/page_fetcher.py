"""HTTP fetching and main-text extraction of webpages.

Fetches with retries on transport errors, then reduces the HTML to a title
and at most ``max_chars`` characters of plain text.
"""

import logging
import re
from typing import Optional

import httpx
import trafilatura
from tenacity import (
    retry,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from ...domain.errors import WebpageFetchError
from ...domain.models.webpage_analysis import WebpageContent

logger = logging.getLogger(__name__)

MAX_CONTENT_CHARS = 5000
UNKNOWN_TITLE = "Unknown Title"

_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE | re.DOTALL)
_SCRIPT_RE = re.compile(r"<(script|style)\b[^>]*>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_SPACE_RE = re.compile(r"\s+")


def extract_title(html: str) -> str:
    metadata = trafilatura.extract_metadata(html)
    if metadata is not None and metadata.title:
        return metadata.title.strip()
    match = _TITLE_RE.search(html)
    if match and match.group(1).strip():
        return _SPACE_RE.sub(" ", match.group(1)).strip()
    return UNKNOWN_TITLE


def strip_html(html: str) -> str:
    """Crude markup removal for pages trafilatura cannot handle."""
    text = _SCRIPT_RE.sub(" ", html)
    text = _TAG_RE.sub(" ", text)
    return _SPACE_RE.sub(" ", text).strip()


def extract_content(html: str, url: str, max_chars: int = MAX_CONTENT_CHARS) -> WebpageContent:
    text = trafilatura.extract(html, include_comments=False, include_tables=True, url=url)
    if not text:
        text = strip_html(html)
    return WebpageContent(title=extract_title(html), content=text[:max_chars], url=url)


class HttpPageFetcher:
    """Page fetcher built on httpx and trafilatura."""

    def __init__(
        self,
        user_agent: str = "FactCheckr/1.0 (fact-checking-service@example.com)",
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._headers = {"User-Agent": user_agent}
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                headers=self._headers,
            )
        return self._client

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_fixed(1),
        # A malformed URL fails identically on every attempt
        retry=(
            retry_if_exception_type(httpx.TransportError)
            & retry_if_not_exception_type(httpx.UnsupportedProtocol)
        ),
        reraise=True,
    )
    async def _fetch_html(self, url: str) -> str:
        response = await self._get_client().get(url)
        response.raise_for_status()
        return response.text

    async def fetch(self, url: str) -> WebpageContent:
        """Fetch a webpage as title and plain text.

        Raises:
            WebpageFetchError: On network failure or a non-2xx response
        """
        try:
            html = await self._fetch_html(url)
        except httpx.HTTPStatusError as e:
            raise WebpageFetchError(url, f"{e.response.status_code} {e.response.reason_phrase}") from e
        except httpx.HTTPError as e:
            raise WebpageFetchError(url, str(e) or type(e).__name__) from e

        page = extract_content(html, url)
        logger.info(f"🌐 Fetched {url}: '{page.title}' ({len(page.content)} chars)")
        return page

    async def shutdown(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
