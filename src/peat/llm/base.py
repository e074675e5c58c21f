from abc import ABC, abstractmethod
from typing import Any

from ..errors import BackendError
from .models import ChatMessage, LLMResponse


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    This module hides the design decision of which LLM backend is used.
    Implementations must handle provider-specific details like:
    - API client setup and authentication
    - Role mapping (system/human/ai to the backend's own vocabulary)
    - Request/response format conversion

    Orchestrators only ever call ``invoke`` and never branch on the
    backend identity.

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            reply = await provider.invoke(messages)
        # Automatically cleaned up
    """

    #: Backend identifier used in error messages
    backend_name: str = "unknown"

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion.

        Args:
            messages: Ordered messages forming the conversation
            model: Model to use (None uses provider's default)
            temperature: Sampling temperature (None uses provider's default)
            max_tokens: Maximum tokens to generate
            **kwargs: Provider-specific parameters

        Returns:
            LLMResponse containing generated content and metadata

        Raises:
            Exception: Provider-specific errors during generation
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def invoke(self, messages: list[ChatMessage]) -> ChatMessage:
        """Send ordered messages to the backend and return its reply.

        Args:
            messages: Ordered messages (system, human and ai roles)

        Returns:
            The reply as an ai-role ChatMessage

        Raises:
            BackendError: If the completion call fails for any reason
        """
        try:
            response = await self.chat_completion(messages)
        except BackendError:
            raise
        except Exception as e:
            raise BackendError(str(e) or type(e).__name__, backend=self.backend_name) from e
        return ChatMessage.ai(response.content)

    async def __aenter__(self) -> "LLMProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
