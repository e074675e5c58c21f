"""Locally hosted Ollama provider.

Ollama serves an OpenAI-compatible API under ``<base url>/v1``, so the
official OpenAI SDK is reused for transport. Ollama ignores the API key but
the SDK requires a non-empty one.
"""

from typing import Any

from .openai import OpenAIProvider

OLLAMA_PLACEHOLDER_KEY = "ollama"


class OllamaProvider(OpenAIProvider):
    """Ollama LLM provider using the OpenAI-compatible endpoint.

    Hidden design decisions:
    - Mapping of the server URL to the OpenAI-compatible base path
    - Placeholder credential expected by the SDK
    """

    backend_name = "ollama"

    def __init__(
        self,
        url: str,
        model: str = "qwen3:8b",
        temperature: float = 0.7,
        **client_kwargs: Any
    ):
        """Initialize Ollama provider.

        Args:
            url: Ollama server URL (e.g. http://localhost:11434)
            model: Default model to use
            temperature: Default sampling temperature
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._url = url.rstrip("/")
        super().__init__(
            api_key=OLLAMA_PLACEHOLDER_KEY,
            model=model,
            temperature=temperature,
            base_url=f"{self._url}/v1",
            **client_kwargs
        )

    @property
    def url(self) -> str:
        """Get the Ollama server URL."""
        return self._url
