"""Dependency injection configuration for hexagonal architecture."""

import asyncio
import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from ..domain.ports.ai_provider import AIProvider
from ..domain.ports.page_fetcher import PageFetcher
from ..domain.ports.store import FactCheckStore
from ..domain.services.claim_classifier import ClaimClassifier
from ..domain.services.conflict_analyzer import ConflictAnalyzer
from ..domain.services.digest_service import DigestService
from ..domain.services.evidence_collector import EvidenceCollector
from ..domain.services.fact_checking_service import FactCheckingService
from ..domain.services.verdict_synthesizer import VerdictSynthesizer
from ..domain.services.webpage_analysis_service import WebpageAnalysisService
from .ai.factory import AIProviderFactory
from .config import FactCheckConfig
from .sources.base import SourceConfig
from .sources.factory import SourceProviderFactory
from .store.memory_store import InMemoryStore
from .store.sqlite_store import SQLiteStore
from .web.page_fetcher import HttpPageFetcher

# Load environment variables from .env file if it exists
load_dotenv()

logger = logging.getLogger(__name__)


def build_store(config: FactCheckConfig) -> FactCheckStore:
    if config.store == "memory":
        return InMemoryStore()
    if config.store != "sqlite":
        raise ValueError(f"Unknown store backend '{config.store}' (expected sqlite or memory)")
    return SQLiteStore(config.db_path)


class ServiceContainer:
    """Service container for dependency injection.

    Services are built lazily on first use, because creating the AI
    provider and the store requires awaiting their initialization.
    """

    def __init__(
        self,
        config: Optional[FactCheckConfig] = None,
        source_config: Optional[SourceConfig] = None,
        ai_provider: Optional[AIProvider] = None,
        store: Optional[FactCheckStore] = None,
        page_fetcher: Optional[PageFetcher] = None,
    ):
        """Initialize service container.

        Args:
            config: Service configuration, read from the environment when omitted
            source_config: Source adapter configuration
            ai_provider: Pre-built model provider, bypassing the factory
            store: Pre-built store, bypassing the configured backend
            page_fetcher: Pre-built page fetcher
        """
        self.config = config or FactCheckConfig.from_env()
        self._source_config = source_config or SourceConfig.from_env()
        self._ai_factory = AIProviderFactory()
        self._source_factory = SourceProviderFactory(self._source_config)
        self._ai_provider = ai_provider
        self._store = store
        self._page_fetcher = page_fetcher
        self._services: Dict[str, Any] = {}
        self._lock = asyncio.Lock()

    async def _setup_services(self) -> None:
        """Setup all services and their dependencies."""
        logger.info("🔧 Setting up service container...")

        if self._ai_provider is None:
            logger.info(f"🤖 Setting up AI provider '{self.config.ai_provider}'...")
            self._ai_provider = await self._ai_factory.create_provider(self.config.ai_provider)

        if self._store is None:
            self._store = build_store(self.config)
        await self._store.initialize()

        if self._page_fetcher is None:
            self._page_fetcher = HttpPageFetcher(
                user_agent=self._source_config.user_agent,
                timeout=self.config.source_timeout,
            )

        classifier = ClaimClassifier()
        collector = EvidenceCollector(
            self._source_factory.create_all(),
            classifier=classifier,
            timeout=self.config.source_timeout,
        )
        fact_checking_service = FactCheckingService(
            collector=collector,
            synthesizer=VerdictSynthesizer(self._ai_provider),
            store=self._store,
            classifier=classifier,
            conflict_analyzer=ConflictAnalyzer(),
            cache_ttl=self.config.cache_ttl,
        )

        self._services = {
            "fact_checking_service": fact_checking_service,
            "webpage_analysis_service": WebpageAnalysisService(
                fetcher=self._page_fetcher,
                ai_provider=self._ai_provider,
                fact_checker=fact_checking_service,
                store=self._store,
                cache_ttl=self.config.cache_ttl,
            ),
            "digest_service": DigestService(
                ai_provider=self._ai_provider,
                store=self._store,
                cache_ttl=self.config.cache_ttl,
            ),
        }
        logger.info("✅ Service container setup completed")

    async def _ensure_services(self) -> None:
        async with self._lock:
            if not self._services:
                await self._setup_services()

    async def get(self, service_name: str) -> Any:
        """Get a service by name.

        Raises:
            KeyError: If service not found
        """
        await self._ensure_services()
        if service_name not in self._services:
            raise KeyError(f"Service '{service_name}' not found")
        return self._services[service_name]

    async def get_fact_checking_service(self) -> FactCheckingService:
        return await self.get("fact_checking_service")

    async def get_webpage_analysis_service(self) -> WebpageAnalysisService:
        return await self.get("webpage_analysis_service")

    async def get_digest_service(self) -> DigestService:
        return await self.get("digest_service")

    @property
    def is_ready(self) -> bool:
        return bool(self._services)

    def component_status(self) -> Dict[str, Dict[str, bool]]:
        """Availability of AI providers and active evidence sources."""
        return {
            "ai_providers": self._ai_factory.available_providers,
            "sources": self._source_factory.available_providers,
        }

    async def shutdown(self) -> None:
        """Release network clients and the store."""
        await self._source_factory.shutdown_all()
        await self._ai_factory.shutdown()
        if self._page_fetcher is not None:
            await self._page_fetcher.shutdown()
        if self._store is not None:
            await self._store.close()
        self._services = {}
        logger.info("👋 Service container shut down")


# Global service container instance
@lru_cache()
def get_service_container() -> ServiceContainer:
    """Get global service container instance."""
    return ServiceContainer()


# Convenience functions for FastAPI dependency injection
async def get_fact_checking_service() -> FactCheckingService:
    """FastAPI dependency for fact checking service."""
    return await get_service_container().get_fact_checking_service()


async def get_webpage_analysis_service() -> WebpageAnalysisService:
    """FastAPI dependency for webpage analysis service."""
    return await get_service_container().get_webpage_analysis_service()


async def get_digest_service() -> DigestService:
    """FastAPI dependency for digest service."""
    return await get_service_container().get_digest_service()
