from .gemini import GeminiProvider
from .ollama import OllamaProvider
from .openai import OpenAIProvider

__all__ = ["GeminiProvider", "OllamaProvider", "OpenAIProvider"]
