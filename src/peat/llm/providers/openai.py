from typing import Any

from openai import AsyncOpenAI

from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse, MessageRole

# Chat Completions role vocabulary
OPENAI_ROLES = {
    MessageRole.SYSTEM: "system",
    MessageRole.HUMAN: "user",
    MessageRole.AI: "assistant",
}


def to_openai_messages(messages: list[ChatMessage]) -> list[dict[str, str]]:
    """Convert chat messages to Chat Completions format."""
    return [
        {"role": OPENAI_ROLES[msg.role], "content": msg.content}
        for msg in messages
    ]


class OpenAIProvider(LLMProvider):
    """OpenAI LLM provider implementation.

    Hidden design decisions:
    - OpenAI API client initialization
    - Message format conversion
    - Authentication mechanism
    """

    backend_name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        temperature: float = 0.7,
        base_url: str | None = None,
        organization: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Default model to use
            temperature: Default sampling temperature
            base_url: Optional custom API base URL
            organization: Optional organization ID
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._model = model
        self._temperature = temperature
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion using the Chat Completions API.

        Args:
            messages: Conversation history
            model: Model to use (overrides default)
            temperature: Sampling temperature (overrides default)
            max_tokens: Maximum tokens to generate
            **kwargs: Additional OpenAI-specific parameters

        Returns:
            LLMResponse with generated content
        """
        model_to_use = model or self._model

        # Build request params, only including max_tokens if set
        request_params: dict[str, Any] = {
            "model": model_to_use,
            "messages": to_openai_messages(messages),
            "temperature": self._temperature if temperature is None else temperature,
            **kwargs
        }
        if max_tokens is not None:
            request_params["max_tokens"] = max_tokens

        completion = await self._client.chat.completions.create(**request_params)

        usage = None
        if completion.usage:
            usage = {
                "prompt_tokens": completion.usage.prompt_tokens,
                "completion_tokens": completion.usage.completion_tokens,
                "total_tokens": completion.usage.total_tokens
            }

        return LLMResponse(
            content=completion.choices[0].message.content or "",
            model=completion.model or model_to_use,
            usage=usage
        )

    async def close(self) -> None:
        """Close the OpenAI client.

        Note: Uses the OpenAI SDK's async context manager for proper cleanup.
        See: https://github.com/openai/openai-python#async-usage
        """
        await self._client.close()
