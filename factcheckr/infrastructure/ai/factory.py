"""Registry of generative model backends, keyed by FACTCHECK_AI_PROVIDER names."""

import logging
from typing import Callable, Dict, NamedTuple, Optional, Type

from pydantic import BaseModel

from ...domain.ports.ai_provider import AIProvider
from .chatgpt_adapter import ChatGPTAdapter, ChatGPTConfig
from .cohere_adapter import CohereAdapter, CohereConfig

logger = logging.getLogger(__name__)


class Backend(NamedTuple):
    """An adapter class and, optionally, how to load its config from the environment."""

    adapter: Type[AIProvider]
    load_config: Optional[Callable[[], BaseModel]] = None


class AIProviderFactory:
    """Builds, initializes and shuts down model backends.

    A backend with a config loader gets ``config=`` built from the
    environment, with keyword arguments applied as field overrides. Other
    backends receive the keyword arguments directly.
    """

    def __init__(self):
        self._backends: Dict[str, Backend] = {
            "chatgpt": Backend(ChatGPTAdapter, ChatGPTConfig.from_env),
            "cohere": Backend(CohereAdapter, CohereConfig.from_env),
        }
        self._instances: Dict[str, AIProvider] = {}

    def register_provider(
        self,
        name: str,
        provider_class: Type[AIProvider],
        load_config: Optional[Callable[[], BaseModel]] = None,
    ) -> None:
        self._backends[name] = Backend(provider_class, load_config)

    def _build(self, backend: Backend, overrides: Dict) -> AIProvider:
        if backend.load_config is None:
            return backend.adapter(**overrides)
        config = backend.load_config().model_copy(update=overrides)
        return backend.adapter(config=config)

    async def create_provider(self, name: str, **overrides) -> AIProvider:
        """Return the initialized backend, creating it on first use.

        Raises:
            ValueError: If no backend is registered under ``name``
            ConnectionError: If the backend cannot initialize (e.g. no API key)
        """
        backend = self._backends.get(name)
        if backend is None:
            known = ", ".join(sorted(self._backends))
            raise ValueError(f"Unknown AI provider '{name}' (known: {known})")

        provider = self._instances.get(name)
        if provider is None:
            provider = self._build(backend, overrides)
            await provider.initialize()
            self._instances[name] = provider
            logger.info(f"✅ AI provider '{name}' ready")
        return provider

    def get_provider(self, name: str) -> Optional[AIProvider]:
        return self._instances.get(name)

    @property
    def available_providers(self) -> Dict[str, bool]:
        """Registered backend names mapped to whether one is running."""
        return {name: name in self._instances for name in self._backends}

    async def shutdown(self) -> None:
        for name, provider in self._instances.items():
            try:
                await provider.shutdown()
                logger.info(f"👋 AI provider '{name}' shut down")
            except Exception as e:
                logger.warning(f"⚠️ Error shutting down AI provider {name}: {e}")
        self._instances.clear()
