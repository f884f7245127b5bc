"""Factory for creating and managing evidence source providers."""

import logging
from typing import Dict, Optional, Type

from ...domain.ports.source_provider import SourceProvider
from .arxiv_adapter import ArxivAdapter
from .base import SourceConfig
from .duckduckgo_adapter import DuckDuckGoAdapter
from .espn_adapter import ESPNAdapter
from .liquipedia_adapter import LiquipediaAdapter
from .pubmed_adapter import PubMedAdapter
from .sec_adapter import SECAdapter
from .snopes_adapter import SnopesAdapter
from .sportsdb_adapter import SportsDBAdapter
from .who_adapter import WHOAdapter
from .wikidata_adapter import WikidataAdapter
from .wikipedia_adapter import WikipediaAdapter

logger = logging.getLogger(__name__)

DEFAULT_SOURCES: Dict[str, Type[SourceProvider]] = {
    "wikipedia": WikipediaAdapter,
    "duckduckgo": DuckDuckGoAdapter,
    "snopes": SnopesAdapter,
    "wikidata": WikidataAdapter,
    "liquipedia": LiquipediaAdapter,
    "espn": ESPNAdapter,
    "sportsdb": SportsDBAdapter,
    "pubmed": PubMedAdapter,
    "who": WHOAdapter,
    "sec": SECAdapter,
    "arxiv": ArxivAdapter,
}


class SourceProviderFactory:
    """Factory for creating and managing source providers.

    Maintains a registry of adapter classes and the instances created from
    it, so every adapter is built once and shut down together.
    """

    def __init__(self, config: Optional[SourceConfig] = None):
        """Initialize the factory.

        Args:
            config: Configuration handed to every adapter
        """
        self._config = config or SourceConfig()
        self._registry: Dict[str, Type[SourceProvider]] = {}
        self._instances: Dict[str, SourceProvider] = {}

        for name, provider_class in DEFAULT_SOURCES.items():
            self.register_provider(name, provider_class)

    def register_provider(self, name: str, provider_class: Type[SourceProvider]) -> None:
        """Register a new source provider class.

        Args:
            name: Unique identifier for the provider
            provider_class: The provider class to register

        Raises:
            ValueError: If the name is already registered
        """
        if name in self._registry:
            raise ValueError(f"Provider {name} already registered")
        self._registry[name] = provider_class

    def create_provider(self, name: str) -> SourceProvider:
        """Get or create a provider instance.

        Raises:
            ValueError: If provider not found
        """
        if name not in self._registry:
            raise ValueError(f"Provider {name} not registered")

        if name not in self._instances:
            self._instances[name] = self._registry[name](config=self._config)
        return self._instances[name]

    def create_all(self) -> Dict[str, SourceProvider]:
        """Instantiate every registered provider."""
        return {name: self.create_provider(name) for name in self._registry}

    def get_provider(self, name: str) -> Optional[SourceProvider]:
        return self._instances.get(name)

    async def shutdown_all(self) -> None:
        """Shutdown all active providers."""
        for name, provider in list(self._instances.items()):
            try:
                await provider.shutdown()
            except Exception as e:
                logger.warning(f"⚠️ Error shutting down source {name}: {e}")
        self._instances.clear()

    @property
    def available_providers(self) -> Dict[str, bool]:
        """Get dictionary of registered providers and whether they are active."""
        return {name: name in self._instances for name in self._registry}
