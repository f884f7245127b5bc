"""Cohere implementation of the AI provider interface."""

import logging
import os
from typing import Optional

import httpx
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class CohereConfig(BaseModel):
    """Configuration for Cohere adapter."""

    api_key: str = Field(..., description="Cohere API key")
    model: str = Field(default="command", description="Generation model")
    base_url: str = Field(default="https://api.cohere.ai", description="API base URL")
    temperature: float = Field(default=0.3, description="Temperature for responses")
    max_tokens: int = Field(default=500, description="Maximum tokens per response")
    timeout: float = Field(default=30.0, description="API timeout in seconds")

    @classmethod
    def from_env(cls) -> "CohereConfig":
        """Create configuration from environment variables."""
        return cls(
            api_key=os.getenv("COHERE_API_KEY", ""),
            model=os.getenv("COHERE_MODEL", "command"),
        )


class CohereAdapter:
    """Generative model backed by Cohere's ``/v1/generate`` endpoint."""

    def __init__(
        self,
        config: Optional[CohereConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._config = config or CohereConfig.from_env()
        self._client = client
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize the HTTP client."""
        if not self._config.api_key:
            raise ConnectionError("Failed to initialize Cohere provider: COHERE_API_KEY is not set")
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                headers={
                    "Authorization": f"Bearer {self._config.api_key}",
                    "Content-Type": "application/json",
                },
            )
        self._initialized = True
        logger.info(f"🤖 Cohere provider ready (model: {self._config.model})")

    async def generate(self, prompt: str) -> str:
        """Complete a prompt and return the first generation's text.

        Raises:
            RuntimeError: If the provider is not initialized or the API
                returns no generations
            httpx.HTTPStatusError: On a non-2xx response
        """
        if not self._client:
            raise RuntimeError("Provider not initialized")

        response = await self._client.post(
            "/v1/generate",
            json={
                "model": self._config.model,
                "prompt": prompt,
                "max_tokens": self._config.max_tokens,
                "temperature": self._config.temperature,
            },
        )
        response.raise_for_status()
        generations = response.json().get("generations") or []
        if not generations:
            raise RuntimeError("Cohere API returned no generations")
        return (generations[0].get("text") or "").strip()

    async def shutdown(self) -> None:
        """Clean up resources and shut down the provider."""
        if self._client:
            await self._client.aclose()
            self._client = None
        self._initialized = False

    @property
    def provider_name(self) -> str:
        return "Cohere"

    @property
    def is_available(self) -> bool:
        return self._initialized and self._client is not None
