"""Protocol for generative AI providers."""

from typing import Protocol


class AIProvider(Protocol):
    """Protocol defining the interface for generative text models."""

    async def initialize(self) -> None:
        """Initialize the AI provider."""
        ...

    async def shutdown(self) -> None:
        """Clean up resources."""
        ...

    async def generate(self, prompt: str) -> str:
        """Complete a prompt and return the raw model text.

        May raise on network or authentication failures. The returned text is
        not guaranteed to be valid JSON even when the prompt asks for it.
        """
        ...

    @property
    def provider_name(self) -> str:
        """Get the provider name."""
        ...

    @property
    def is_available(self) -> bool:
        """Check if the provider is available and ready."""
        ...
