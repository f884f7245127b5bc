"""ChatGPT implementation of the AI provider interface."""

import logging
import os
from typing import Optional

from openai import AsyncOpenAI
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a careful fact-checking assistant. Follow the requested output "
    "format exactly; when JSON is requested, reply with JSON only."
)


class ChatGPTConfig(BaseModel):
    """Configuration for ChatGPT adapter."""

    api_key: str = Field(..., description="OpenAI API key")
    model: str = Field(default="gpt-4o-mini", description="Chat completion model")
    temperature: float = Field(default=0.3, description="Temperature for responses")
    max_tokens: int = Field(default=500, description="Maximum tokens per response")
    timeout: float = Field(default=30.0, description="API timeout in seconds")

    @classmethod
    def from_env(cls) -> "ChatGPTConfig":
        """Create configuration from environment variables."""
        return cls(
            api_key=os.getenv("OPENAI_API_KEY", ""),
            model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        )


class ChatGPTAdapter:
    """Generative model backed by the OpenAI chat completions API."""

    def __init__(
        self,
        config: Optional[ChatGPTConfig] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        """Initialize the adapter.

        Args:
            config: Adapter configuration, read from the environment when omitted
            client: Preconfigured OpenAI client
        """
        self._config = config or ChatGPTConfig.from_env()
        self._client = client
        self._initialized = False

    async def initialize(self) -> None:
        """Create the OpenAI client."""
        if not self._config.api_key and self._client is None:
            raise ConnectionError("Failed to initialize ChatGPT provider: OPENAI_API_KEY is not set")
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._config.api_key,
                timeout=self._config.timeout,
            )
        self._initialized = True
        logger.info(f"🤖 ChatGPT provider ready (model: {self._config.model})")

    async def generate(self, prompt: str) -> str:
        """Complete a prompt and return the model's raw text."""
        if not self._client:
            raise RuntimeError("Provider not initialized")

        response = await self._client.chat.completions.create(
            model=self._config.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
        )
        return (response.choices[0].message.content or "").strip()

    async def shutdown(self) -> None:
        """Clean up resources and shut down the provider."""
        if self._client:
            await self._client.close()
            self._client = None
        self._initialized = False

    @property
    def provider_name(self) -> str:
        """Get the name of the AI provider."""
        return "ChatGPT"

    @property
    def is_available(self) -> bool:
        """Check if the provider is available and ready."""
        return self._initialized and self._client is not None
