"""Google Gemini LLM provider implementation.

Uses the official Google GenAI SDK for async chat completions.
Reference: https://github.com/googleapis/python-genai

Note: Gemini can return empty responses due to safety filtering or service issues.
This implementation retries empty responses a few times before giving up.
"""

import asyncio
from typing import Any

from google import genai
from google.genai import types

from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse, MessageRole


class GeminiProvider(LLMProvider):
    """Google Gemini LLM provider implementation.

    Hidden design decisions:
    - Google GenAI client initialization
    - Message format conversion (system instruction vs. user/model contents)
    - Retry logic for empty responses (known Gemini issue)
    """

    backend_name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        temperature: float = 0.7,
        max_retries: int = 3,
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            model: Default model (gemini-2.5-flash, gemini-2.5-pro, ...)
            temperature: Default sampling temperature
            max_retries: Max retries for empty responses (default 3)
            **client_kwargs: Additional kwargs for Client
        """
        self._model = model
        self._temperature = temperature
        self._max_retries = max_retries
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    def _convert_messages(self, messages: list[ChatMessage]) -> tuple[str | None, list[types.Content]]:
        """Convert ChatMessage list to Gemini format.

        System messages are joined into the system instruction, human
        messages become ``user`` contents and ai messages ``model`` contents.

        Returns:
            Tuple of (system_instruction, contents)
        """
        system_parts = []
        contents = []

        for msg in messages:
            if msg.role == MessageRole.SYSTEM:
                system_parts.append(msg.content)
            elif msg.role == MessageRole.HUMAN:
                contents.append(types.Content(
                    role="user",
                    parts=[types.Part(text=msg.content)]
                ))
            elif msg.role == MessageRole.AI:
                contents.append(types.Content(
                    role="model",
                    parts=[types.Part(text=msg.content)]
                ))

        system_instruction = "\n\n".join(system_parts) if system_parts else None
        return system_instruction, contents

    def _extract_content(self, response) -> str:
        """Extract text content from Gemini response, handling empty responses."""
        if response.candidates:
            candidate = response.candidates[0]
            if candidate.content and candidate.content.parts:
                texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
                if texts:
                    return "".join(texts)

        # response.text may raise or return None
        try:
            return response.text or ""
        except (ValueError, AttributeError):
            return ""

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion using Google Gemini.

        Args:
            messages: Conversation history
            model: Model to use (overrides default)
            temperature: Sampling temperature (overrides default)
            max_tokens: Maximum tokens to generate
            **kwargs: Additional Gemini-specific parameters

        Returns:
            LLMResponse with generated content
        """
        model_to_use = model or self._model
        system_instruction, contents = self._convert_messages(messages)

        config = types.GenerateContentConfig(
            temperature=self._temperature if temperature is None else temperature,
            system_instruction=system_instruction,
            **kwargs
        )
        if max_tokens is not None:
            config.max_output_tokens = max_tokens

        content = ""
        usage = None

        for attempt in range(self._max_retries):
            response = await self._client.aio.models.generate_content(
                model=model_to_use,
                contents=contents,
                config=config
            )

            if response.usage_metadata:
                usage = {
                    "prompt_tokens": response.usage_metadata.prompt_token_count or 0,
                    "completion_tokens": response.usage_metadata.candidates_token_count or 0,
                    "total_tokens": response.usage_metadata.total_token_count or 0
                }

            content = self._extract_content(response)
            if content:
                break

            if attempt < self._max_retries - 1:
                await asyncio.sleep(0.5 * (attempt + 1))

        return LLMResponse(
            content=content,
            model=model_to_use,
            usage=usage
        )

    async def close(self) -> None:
        """Close the Gemini client.

        Note: The Google GenAI client doesn't require explicit closing,
        but we implement this for interface consistency.
        """
        pass
