"""Tests for the RSS/Atom based sources and the shared feed helpers."""

import httpx
import pytest

from factcheckr.domain.models.evidence import SourceKind
from factcheckr.infrastructure.sources.arxiv_adapter import ArxivAdapter, arxiv_id
from factcheckr.infrastructure.sources.base import (
    FeedItem,
    SourceConfig,
    match_feed_item,
    strip_tags,
)
from factcheckr.infrastructure.sources.espn_adapter import ESPNAdapter
from factcheckr.infrastructure.sources.sec_adapter import SECAdapter
from factcheckr.infrastructure.sources.snopes_adapter import SnopesAdapter, extract_verdict
from factcheckr.infrastructure.sources.who_adapter import WHOAdapter

SNOPES_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel><title>Snopes</title>
<item>
  <title>Did Einstein Fail Math?</title>
  <link>https://www.snopes.com/fact-check/einstein-math/</link>
  <description>&lt;p&gt;The claim that Einstein failed math is false.&lt;/p&gt;</description>
</item>
<item>
  <title>Moon Landing Photos</title>
  <link>https://www.snopes.com/fact-check/moon-photos/</link>
  <description>Photos of the moon landing are real and correct.</description>
</item>
</channel></rss>"""

WHO_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel><title>WHO</title>
<item>
  <title>Measles cases rising in Europe</title>
  <link>https://www.who.int/news/item/measles</link>
  <description>Vaccination coverage for measles has dropped.</description>
</item>
</channel></rss>"""

SEC_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Apple Inc.</title>
  <entry>
    <title>10-K Annual report</title>
    <link href="/Archives/edgar/data/320193/000032019323000106.htm"/>
    <summary>Annual report for fiscal year 2023</summary>
    <id>urn:tag:sec.gov,2008:accession-number=0000320193-23-000106</id>
  </entry>
</feed>"""

ARXIV_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <entry>
    <id>http://arxiv.org/abs/2101.00001v1</id>
    <title>Dark Matter Halos</title>
    <summary>We study the structure of dark matter halos in simulations.</summary>
    <author><name>Alice Smith</name></author>
    <author><name>Bob Jones</name></author>
    <author><name>Carol White</name></author>
    <author><name>Dan Brown</name></author>
  </entry>
</feed>"""


def serve(client, response_factory, content=b"", status_code=200, calls=None):
    async def mock_get(url, params=None, headers=None):
        if calls is not None:
            calls.append({"url": url, "params": params, "headers": headers})
        return response_factory(status_code=status_code, content=content, url=url)

    client.get = mock_get


class TestFeedHelpers:
    def test_strip_tags(self):
        assert strip_tags("<p>Hello   <b>world</b></p>\n") == "Hello world"

    def test_match_requires_two_words(self):
        items = [
            FeedItem("Einstein biography", "", "a"),
            FeedItem("Einstein failed math", "", "b"),
        ]
        assert match_feed_item("Albert Einstein failed math", items).link == "b"

    def test_short_query_needs_one_word(self):
        items = [FeedItem("Measles outbreak", "", "a")]
        assert match_feed_item("measles", items).link == "a"

    def test_no_long_words_matches_first_item(self):
        """With no usable query words every item qualifies."""
        items = [FeedItem("Anything", "", "a")]
        assert match_feed_item("is it so", items).link == "a"

    def test_no_match(self):
        assert match_feed_item("quantum entanglement", [FeedItem("Sports", "Football", "a")]) is None

    @pytest.mark.parametrize(
        "description,expected",
        [
            ("This is FALSE.", "False"),
            ("A fake image", "False"),
            ("Rated true", "True"),
            ("The quote is correct", "True"),
            ("A mixture of facts", "Mixed"),
            ("No rating yet", None),
        ],
    )
    def test_extract_verdict(self, description, expected):
        assert extract_verdict(description) == expected


@pytest.mark.asyncio
async def test_snopes_match(mock_http_client, response_factory, source_config):
    serve(mock_http_client, response_factory, SNOPES_FEED)
    adapter = SnopesAdapter(config=source_config, client=mock_http_client)

    record = await adapter.query("Einstein failed math at school")

    assert record.source == "Snopes"
    assert record.verdict == "False"
    assert record.url == "https://www.snopes.com/fact-check/einstein-math/"
    assert record.summary == "The claim that Einstein failed math is false...."
    assert record.confidence == 0.9
    assert record.kind == SourceKind.FACT_CHECK


@pytest.mark.asyncio
async def test_snopes_no_match(mock_http_client, response_factory, source_config):
    serve(mock_http_client, response_factory, SNOPES_FEED)
    adapter = SnopesAdapter(config=source_config, client=mock_http_client)
    assert await adapter.query("Bitcoin price doubled yesterday") is None


@pytest.mark.asyncio
async def test_feed_is_cached(mock_http_client, response_factory):
    calls = []
    serve(mock_http_client, response_factory, SNOPES_FEED, calls=calls)
    adapter = SnopesAdapter(config=SourceConfig(cache_ttl=60), client=mock_http_client)

    await adapter.query("Einstein failed math")
    await adapter.query("moon landing photos")

    assert len(calls) == 1


@pytest.mark.asyncio
async def test_http_error_becomes_none(mock_http_client, response_factory, source_config):
    serve(mock_http_client, response_factory, b"", status_code=503)
    adapter = SnopesAdapter(config=source_config, client=mock_http_client)
    assert await adapter.query("Einstein failed math") is None


@pytest.mark.asyncio
async def test_network_error_becomes_none(mock_http_client, source_config):
    async def mock_get(url, params=None, headers=None):
        raise httpx.ConnectError("unreachable")

    mock_http_client.get = mock_get
    adapter = WHOAdapter(config=source_config, client=mock_http_client)
    assert await adapter.query("measles vaccination") is None


@pytest.mark.asyncio
async def test_who_match(mock_http_client, response_factory, source_config):
    serve(mock_http_client, response_factory, WHO_FEED)
    adapter = WHOAdapter(config=source_config, client=mock_http_client)

    record = await adapter.query("measles vaccination rates")

    assert record.source == "World Health Organization (WHO)"
    assert record.confidence == 0.95
    assert record.kind == SourceKind.SPECIALIZED
    assert record.summary.startswith("Measles cases rising in Europe: Vaccination coverage")


@pytest.mark.asyncio
async def test_espn_garbage_feed(mock_http_client, response_factory, source_config):
    serve(mock_http_client, response_factory, b"<html>not a feed</html>")
    adapter = ESPNAdapter(config=source_config, client=mock_http_client)
    assert await adapter.query("Lakers won the NBA final") is None


@pytest.mark.asyncio
async def test_sec_prefixes_relative_links(mock_http_client, response_factory, source_config):
    calls = []
    serve(mock_http_client, response_factory, SEC_FEED, calls=calls)
    adapter = SECAdapter(config=source_config, client=mock_http_client)

    record = await adapter.query("Apple")

    assert record.url == "https://www.sec.gov/Archives/edgar/data/320193/000032019323000106.htm"
    assert record.source == "SEC EDGAR Database"
    assert calls[0]["params"]["company"] == "Apple"
    assert "User-Agent" in calls[0]["headers"]


def test_arxiv_id():
    assert arxiv_id("http://arxiv.org/abs/2101.00001v1") == "2101.00001v1"


@pytest.mark.asyncio
async def test_arxiv_first_entry(mock_http_client, response_factory, source_config):
    calls = []
    serve(mock_http_client, response_factory, ARXIV_FEED, calls=calls)
    adapter = ArxivAdapter(config=source_config, client=mock_http_client)

    record = await adapter.query("dark matter")

    assert record.url == "https://arxiv.org/abs/2101.00001v1"
    assert record.summary.startswith("Dark Matter Halos - Alice Smith, Bob Jones, Carol White - We study")
    assert "Dan Brown" not in record.summary
    assert calls[0]["params"]["search_query"] == "all:dark matter"
