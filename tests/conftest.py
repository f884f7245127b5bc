"""Test configuration and common fixtures."""

import asyncio
import json
from typing import Callable, List, Optional, Union

import pytest
import pytest_asyncio
from httpx import AsyncClient, Request, Response

from factcheckr.domain.models.evidence import EvidenceRecord, SourceKind
from factcheckr.infrastructure.sources.base import SourceConfig
from factcheckr.infrastructure.store.memory_store import InMemoryStore


class FakeAIProvider:
    """Scripted generative model.

    Replies are consumed in order; an exception in the script is raised
    instead of returned. Every prompt is recorded.
    """

    def __init__(self, replies: Optional[List[Union[str, Exception]]] = None):
        self.replies: List[Union[str, Exception]] = list(replies or [])
        self.prompts: List[str] = []

    async def initialize(self) -> None:
        pass

    async def shutdown(self) -> None:
        pass

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.replies:
            raise RuntimeError("no scripted reply left")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def calls(self) -> int:
        return len(self.prompts)

    @property
    def provider_name(self) -> str:
        return "Fake"

    @property
    def is_available(self) -> bool:
        return True


class FakeSource:
    """Source provider returning a fixed record and counting queries."""

    def __init__(
        self,
        name: str,
        record: Optional[EvidenceRecord] = None,
        kind: SourceKind = SourceKind.GENERAL,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.name = name
        self.record = record
        self.source_kind = kind
        self.error = error
        self.delay = delay
        self.queries: List[str] = []

    async def query(self, text: str) -> Optional[EvidenceRecord]:
        self.queries.append(text)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.record

    async def shutdown(self) -> None:
        pass

    @property
    def provider_name(self) -> str:
        return self.name

    @property
    def kind(self) -> SourceKind:
        return self.source_kind


def create_response(
    status_code: int = 200,
    json_data=None,
    text: Optional[str] = None,
    content: Optional[bytes] = None,
    url: str = "http://test-source/",
) -> Response:
    """Create a Response object with a proper request."""
    request = Request("GET", url)
    if json_data is not None:
        body, content_type = json.dumps(json_data).encode(), "application/json"
    elif text is not None:
        body, content_type = text.encode(), "text/html"
    else:
        body, content_type = content or b"", "application/xml"
    return Response(
        status_code=status_code,
        headers={"content-type": content_type},
        content=body,
        request=request,
    )


@pytest.fixture
def response_factory() -> Callable[..., Response]:
    return create_response


@pytest.fixture
def make_record() -> Callable[..., EvidenceRecord]:
    """Build evidence records with sensible defaults."""

    def _make(
        source: str = "Wikipedia",
        summary: str = "A summary.",
        url: Optional[str] = None,
        confidence: float = 0.8,
        verdict: Optional[str] = None,
        kind: SourceKind = SourceKind.GENERAL,
    ) -> EvidenceRecord:
        return EvidenceRecord(
            source=source,
            summary=summary,
            url=url or f"https://example.org/{source.lower().replace(' ', '-')}",
            confidence=confidence,
            verdict=verdict,
            kind=kind,
        )

    return _make


@pytest.fixture
def fake_ai() -> FakeAIProvider:
    return FakeAIProvider()


@pytest.fixture
def fake_source_class():
    return FakeSource


@pytest.fixture
def fake_ai_class():
    return FakeAIProvider


@pytest_asyncio.fixture
async def memory_store() -> InMemoryStore:
    store = InMemoryStore()
    await store.initialize()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def mock_http_client() -> AsyncClient:
    """Provide an HTTP client whose methods tests replace."""
    async with AsyncClient() as client:
        yield client


@pytest.fixture
def source_config() -> SourceConfig:
    """Adapter configuration with feed caching disabled."""
    return SourceConfig(timeout=1.0, cache_ttl=0)
