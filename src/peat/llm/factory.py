from typing import Any

from pydantic import HttpUrl, TypeAdapter, ValidationError

from ..config import BackendConfig, BackendKind
from ..errors import ConfigurationError
from .base import LLMProvider
from .providers import GeminiProvider, OllamaProvider, OpenAIProvider

_URL_ADAPTER = TypeAdapter(HttpUrl)


def _kind_value(kind: BackendKind | str) -> str:
    return kind.value if isinstance(kind, BackendKind) else str(kind).strip().lower()


def validate_url(url: str) -> str:
    """Check that ``url`` is a syntactically valid http(s) URL.

    Returns:
        The stripped URL

    Raises:
        ConfigurationError: If the URL is empty or malformed
    """
    url = (url or "").strip()
    if not url:
        raise ConfigurationError("Ollama URL is missing.")
    try:
        _URL_ADAPTER.validate_python(url)
    except ValidationError as e:
        raise ConfigurationError("Invalid Ollama URL format. Please check the URL.") from e
    return url


def create_llm_provider(
    kind: BackendKind | str,
    api_key: str = "",
    url: str = "",
    model: str | None = None,
    **config: Any
) -> LLMProvider:
    """Create an LLM provider instance.

    This factory function hides the instantiation logic for different
    backends. Settings are validated here, before any network call; the
    correctness of an API key is only discovered by the remote call.

    Args:
        kind: Backend type ('ollama', 'gemini', 'openai')
        api_key: API key (required for cloud backends)
        url: Server URL (required for local backends)
        model: Model override (None uses the backend's default)
        **config: Provider-specific configuration (e.g. temperature)

    Returns:
        Initialized LLM provider instance

    Raises:
        ConfigurationError: If the backend is unknown or its settings are
            missing or malformed

    Examples:
        >>> provider = create_llm_provider("ollama", url="http://localhost:11434")

        >>> provider = create_llm_provider(
        ...     "gemini",
        ...     api_key="...",
        ...     model="gemini-2.5-flash"
        ... )
    """
    kind_value = _kind_value(kind)
    if model:
        config["model"] = model

    if kind_value == BackendKind.OLLAMA.value:
        return OllamaProvider(url=validate_url(url), **config)

    if kind_value == BackendKind.GEMINI.value:
        if not api_key or not api_key.strip():
            raise ConfigurationError(
                "Google API Key is missing. Please set GEMINI_API_KEY or enter a key."
            )
        return GeminiProvider(api_key=api_key.strip(), **config)

    if kind_value == BackendKind.OPENAI.value:
        if not api_key or not api_key.strip():
            raise ConfigurationError(
                "OpenAI API key is missing. Please set OPENAI_API_KEY or enter a key."
            )
        return OpenAIProvider(api_key=api_key.strip(), **config)

    raise ConfigurationError(
        f"Invalid model selected: {kind_value or '(empty)'}. "
        f"Supported backends: {', '.join(k.value for k in BackendKind)}"
    )


def create_provider_from_config(config: BackendConfig) -> LLMProvider:
    """Create an LLM provider from a settings snapshot."""
    return create_llm_provider(
        config.kind,
        api_key=config.api_key,
        url=config.url,
        model=config.model,
        temperature=config.temperature,
    )
