from .base import LLMProvider
from .factory import create_llm_provider, create_provider_from_config, validate_url
from .models import ChatMessage, LLMResponse, MessageRole
from .providers import GeminiProvider, OllamaProvider, OpenAIProvider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "create_provider_from_config",
    "validate_url",
    "ChatMessage",
    "LLMResponse",
    "MessageRole",
    "GeminiProvider",
    "OllamaProvider",
    "OpenAIProvider",
]
