"""Tests for environment configuration."""

import pytest

from factcheckr.infrastructure.config import FactCheckConfig
from factcheckr.infrastructure.dependencies import build_store
from factcheckr.infrastructure.sources.base import SourceConfig
from factcheckr.infrastructure.store.memory_store import InMemoryStore
from factcheckr.infrastructure.store.sqlite_store import SQLiteStore


def test_defaults(monkeypatch):
    for name in ("FACTCHECK_AI_PROVIDER", "FACTCHECK_STORE", "FACTCHECK_CACHE_TTL_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    config = FactCheckConfig.from_env()
    assert config.ai_provider == "chatgpt"
    assert config.store == "sqlite"
    assert config.cache_ttl is None


def test_from_env(monkeypatch):
    monkeypatch.setenv("FACTCHECK_AI_PROVIDER", "Cohere")
    monkeypatch.setenv("FACTCHECK_STORE", "memory")
    monkeypatch.setenv("FACTCHECK_CACHE_TTL_SECONDS", "3600")
    monkeypatch.setenv("FACTCHECK_SOURCE_TIMEOUT", "5")
    monkeypatch.setenv("FACTCHECK_LOG_LEVEL", "debug")

    config = FactCheckConfig.from_env()

    assert config.ai_provider == "cohere"
    assert config.cache_ttl == 3600.0
    assert config.source_timeout == 5.0
    assert config.log_level == "DEBUG"


def test_bad_ttl_is_ignored(monkeypatch):
    monkeypatch.setenv("FACTCHECK_CACHE_TTL_SECONDS", "one hour")
    assert FactCheckConfig.from_env().cache_ttl is None


def test_source_config_from_env(monkeypatch):
    monkeypatch.setenv("FACTCHECK_HTTP_TIMEOUT", "3")
    monkeypatch.setenv("FACTCHECK_FEED_CACHE_TTL", "0")
    config = SourceConfig.from_env()
    assert config.timeout == 3.0
    assert config.cache_ttl == 0


def test_build_store(tmp_path):
    assert isinstance(build_store(FactCheckConfig(store="memory")), InMemoryStore)
    assert isinstance(build_store(FactCheckConfig(db_path=str(tmp_path / "x.db"))), SQLiteStore)
    with pytest.raises(ValueError):
        build_store(FactCheckConfig(store="postgres"))
