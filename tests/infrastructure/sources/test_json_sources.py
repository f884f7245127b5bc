"""Tests for the JSON API based sources."""

from unittest.mock import MagicMock, patch

import pytest

from factcheckr.domain.models.evidence import SourceKind
from factcheckr.infrastructure.sources.base import SourceConfig
from factcheckr.infrastructure.sources.duckduckgo_adapter import DuckDuckGoAdapter
from factcheckr.infrastructure.sources.factory import SourceProviderFactory
from factcheckr.infrastructure.sources.liquipedia_adapter import LiquipediaAdapter, detect_game
from factcheckr.infrastructure.sources.pubmed_adapter import PubMedAdapter
from factcheckr.infrastructure.sources.sportsdb_adapter import SportsDBAdapter
from factcheckr.infrastructure.sources.wikidata_adapter import WikidataAdapter, build_sparql
from factcheckr.infrastructure.sources.wikipedia_adapter import WikipediaAdapter


def serve_json(client, response_factory, payloads, calls=None):
    """Answer successive GETs with the given JSON payloads."""
    queue = list(payloads)

    async def mock_get(url, params=None, headers=None):
        if calls is not None:
            calls.append({"url": url, "params": params})
        return response_factory(json_data=queue.pop(0), url=url)

    client.get = mock_get


class TestDuckDuckGo:
    @pytest.mark.asyncio
    async def test_direct_answer(self, mock_http_client, response_factory, source_config):
        serve_json(mock_http_client, response_factory, [{"Answer": "42", "AbstractURL": ""}])
        record = await DuckDuckGoAdapter(config=source_config, client=mock_http_client).query("meaning")

        assert record.source == "DuckDuckGo Instant Answer"
        assert record.summary == "42"
        assert record.confidence == 0.7
        assert record.url == "https://duckduckgo.com"

    @pytest.mark.asyncio
    async def test_abstract(self, mock_http_client, response_factory, source_config):
        serve_json(mock_http_client, response_factory, [{
            "Answer": "",
            "AbstractText": "Paris is the capital of France.",
            "AbstractSource": "Wikipedia",
            "AbstractURL": "https://en.wikipedia.org/wiki/Paris",
        }])
        record = await DuckDuckGoAdapter(config=source_config, client=mock_http_client).query("Paris")

        assert record.source == "DuckDuckGo (Wikipedia)"
        assert record.confidence == 0.6
        assert record.url == "https://en.wikipedia.org/wiki/Paris"

    @pytest.mark.asyncio
    async def test_abstract_without_source_name(self, mock_http_client, response_factory, source_config):
        serve_json(mock_http_client, response_factory, [{"AbstractText": "Something."}])
        record = await DuckDuckGoAdapter(config=source_config, client=mock_http_client).query("x")
        assert record.source == "DuckDuckGo (Various Sources)"

    @pytest.mark.asyncio
    async def test_empty(self, mock_http_client, response_factory, source_config):
        serve_json(mock_http_client, response_factory, [{"Answer": "", "AbstractText": ""}])
        assert await DuckDuckGoAdapter(config=source_config, client=mock_http_client).query("x") is None


class TestWikidata:
    def test_sparql_truncates_and_strips_quotes(self):
        query = build_sparql('The "Eiffel Tower" ' + "x" * 100)
        assert 'LCASE("The Eiffel Tower xxxxxxxxx' in query
        assert "x" * 40 not in query
        assert "LIMIT 3" in query

    @pytest.mark.asyncio
    async def test_first_binding(self, mock_http_client, response_factory, source_config):
        serve_json(mock_http_client, response_factory, [{"results": {"bindings": [{
            "item": {"value": "http://www.wikidata.org/entity/Q243"},
            "itemLabel": {"value": "Eiffel Tower"},
            "description": {"value": "tower in Paris, France"},
        }]}}])
        record = await WikidataAdapter(config=source_config, client=mock_http_client).query("Eiffel Tower")

        assert record.summary == "Eiffel Tower: tower in Paris, France"
        assert record.url == "http://www.wikidata.org/entity/Q243"
        assert record.kind == SourceKind.GENERAL

    @pytest.mark.asyncio
    async def test_no_bindings(self, mock_http_client, response_factory, source_config):
        serve_json(mock_http_client, response_factory, [{"results": {"bindings": []}}])
        assert await WikidataAdapter(config=source_config, client=mock_http_client).query("zzz") is None


class TestLiquipedia:
    @pytest.mark.parametrize(
        "claim,game",
        [
            ("NaVi won the Stockholm Major", "counterstrike"),
            ("Counter-Strike is popular", "counterstrike"),
            ("Team Spirit won The International", "dota2"),
            ("T1 won Worlds 2023", "leagueoflegends"),
            ("Valorant Champions 2022", "valorant"),
            ("Chess world championship", None),
        ],
    )
    def test_detect_game(self, claim, game):
        assert detect_game(claim) == game

    @pytest.mark.asyncio
    async def test_tournament_title(self, mock_http_client, response_factory, source_config):
        calls = []
        serve_json(mock_http_client, response_factory, [[
            "Stockholm Major",
            ["Natus Vincere", "PGL Major Stockholm 2021"],
            ["Team page", "CS:GO Major held in Stockholm"],
            ["https://liquipedia.net/counterstrike/Natus_Vincere",
             "https://liquipedia.net/counterstrike/PGL/2021/Stockholm"],
        ]], calls=calls)
        adapter = LiquipediaAdapter(config=source_config, client=mock_http_client)

        record = await adapter.query("NaVi won the Stockholm Major")

        assert calls[0]["url"] == "https://counterstrike.liquipedia.net/api.php"
        assert record.source == "Liquipedia (counterstrike)"
        assert record.summary == "PGL Major Stockholm 2021: CS:GO Major held in Stockholm"
        assert record.url.endswith("/PGL/2021/Stockholm")
        assert record.confidence == 0.85
        assert record.kind == SourceKind.SPECIALIZED

    @pytest.mark.asyncio
    async def test_no_game_makes_no_request(self, mock_http_client, response_factory, source_config):
        calls = []
        serve_json(mock_http_client, response_factory, [], calls=calls)
        adapter = LiquipediaAdapter(config=source_config, client=mock_http_client)
        assert await adapter.query("Chess is old") is None
        assert calls == []

    @pytest.mark.asyncio
    async def test_malformed_payload(self, mock_http_client, response_factory, source_config):
        serve_json(mock_http_client, response_factory, [{"error": "bad"}])
        adapter = LiquipediaAdapter(config=source_config, client=mock_http_client)
        assert await adapter.query("dota tournament") is None


@pytest.mark.asyncio
async def test_sportsdb_event(mock_http_client, response_factory, source_config):
    serve_json(mock_http_client, response_factory, [{"event": [{
        "idEvent": "441613",
        "strEvent": "Liverpool vs Swansea",
        "strHomeTeam": "Liverpool",
        "strAwayTeam": "Swansea",
        "dateEvent": "2015-05-29",
    }]}])
    record = await SportsDBAdapter(config=source_config, client=mock_http_client).query("Liverpool Swansea")

    assert record.summary == "Liverpool vs Swansea: Liverpool vs Swansea on 2015-05-29"
    assert record.url == "https://www.thesportsdb.com/event/441613"


@pytest.mark.asyncio
async def test_sportsdb_no_events(mock_http_client, response_factory, source_config):
    serve_json(mock_http_client, response_factory, [{"event": None}])
    assert await SportsDBAdapter(config=source_config, client=mock_http_client).query("x") is None


@pytest.mark.asyncio
async def test_pubmed_two_step(mock_http_client, response_factory, source_config):
    calls = []
    serve_json(mock_http_client, response_factory, [
        {"esearchresult": {"idlist": ["12345", "67890"]}},
        {"result": {"12345": {
            "title": "Vitamin D and immunity",
            "authors": [{"name": "Doe J"}],
            "pubdate": "2020 Jan",
            "source": "Nutrients",
        }}},
    ], calls=calls)

    record = await PubMedAdapter(config=source_config, client=mock_http_client).query("vitamin d")

    assert calls[1]["params"]["id"] == "12345"
    assert record.summary == "Vitamin D and immunity - Doe J et al. (2020 Jan) - Nutrients"
    assert record.url == "https://pubmed.ncbi.nlm.nih.gov/12345/"
    assert record.confidence == 0.9


@pytest.mark.asyncio
async def test_pubmed_unknown_author(mock_http_client, response_factory, source_config):
    serve_json(mock_http_client, response_factory, [
        {"esearchresult": {"idlist": ["1"]}},
        {"result": {"1": {"title": "T", "authors": [], "pubdate": "2021", "source": "J"}}},
    ])
    record = await PubMedAdapter(config=source_config, client=mock_http_client).query("x")
    assert "Unknown author et al." in record.summary


@pytest.mark.asyncio
async def test_pubmed_no_hits(mock_http_client, response_factory, source_config):
    serve_json(mock_http_client, response_factory, [{"esearchresult": {"idlist": []}}])
    assert await PubMedAdapter(config=source_config, client=mock_http_client).query("x") is None


class TestWikipedia:
    def make_adapter(self, page):
        with patch("factcheckr.infrastructure.sources.wikipedia_adapter.wikipediaapi.Wikipedia") as wiki_cls:
            wiki_cls.return_value.page.return_value = page
            adapter = WikipediaAdapter(config=SourceConfig())
        return adapter, wiki_cls.return_value

    @pytest.mark.asyncio
    async def test_existing_page(self):
        page = MagicMock()
        page.exists.return_value = True
        page.summary = "The Sun is the star at the center of the Solar System."
        page.fullurl = "https://en.wikipedia.org/wiki/Sun"
        adapter, wiki = self.make_adapter(page)

        record = await adapter.query("Sun!")

        wiki.page.assert_called_once_with("Sun")
        assert record.source == "Wikipedia"
        assert record.url == "https://en.wikipedia.org/wiki/Sun"
        assert record.confidence == 0.8

    @pytest.mark.asyncio
    async def test_missing_page(self):
        page = MagicMock()
        page.exists.return_value = False
        adapter, _ = self.make_adapter(page)
        assert await adapter.query("Nonexistent thing") is None

    @pytest.mark.asyncio
    async def test_empty_summary(self):
        page = MagicMock()
        page.exists.return_value = True
        page.summary = ""
        page.fullurl = "https://en.wikipedia.org/wiki/X"
        adapter, _ = self.make_adapter(page)
        record = await adapter.query("X")
        assert record.summary == "No summary available"

    @pytest.mark.asyncio
    async def test_pages_are_cached(self):
        page = MagicMock()
        page.exists.return_value = True
        page.summary = "S"
        page.fullurl = "u"
        adapter, wiki = self.make_adapter(page)

        await adapter.query("Sun")
        await adapter.query("Sun")

        assert wiki.page.call_count == 1

    @pytest.mark.asyncio
    async def test_library_error_becomes_none(self):
        page = MagicMock()
        page.exists.side_effect = ConnectionError("offline")
        adapter, _ = self.make_adapter(page)
        assert await adapter.query("Sun") is None


class TestSourceFactory:
    def test_registers_all_sources(self):
        factory = SourceProviderFactory()
        assert set(factory.available_providers) == {
            "wikipedia", "duckduckgo", "snopes", "wikidata", "liquipedia", "espn",
            "sportsdb", "pubmed", "who", "sec", "arxiv",
        }
        assert not any(factory.available_providers.values())

    def test_duplicate_registration(self):
        factory = SourceProviderFactory()
        with pytest.raises(ValueError):
            factory.register_provider("snopes", DuckDuckGoAdapter)

    def test_unknown_provider(self):
        with pytest.raises(ValueError):
            SourceProviderFactory().create_provider("bing")

    @pytest.mark.asyncio
    async def test_instances_are_reused(self):
        factory = SourceProviderFactory()
        first = factory.create_provider("duckduckgo")
        assert factory.create_provider("duckduckgo") is first
        assert factory.available_providers["duckduckgo"]
        await factory.shutdown_all()
        assert factory.get_provider("duckduckgo") is None
