"""Session-scoped settings.

Hides where backend settings come from (environment, ``.env``, user input)
from the orchestrators. A ``TutorSettings`` instance is created once per
session and handed to ``TutorSession``; nothing reads settings from module
globals.

Settings are validated lazily: the model client factory checks them when a
backend call is about to be made, not when they are entered.
"""

import os
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError

DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_LOCALE = "zh-TW"


class BackendKind(str, Enum):
    """Supported LLM backends."""

    OLLAMA = "ollama"  # Locally hosted, needs a URL
    GEMINI = "gemini"  # Cloud, needs an API key
    OPENAI = "openai"  # Cloud, needs an API key

    @property
    def is_local(self) -> bool:
        return self is BackendKind.OLLAMA


class BackendConfig(BaseModel):
    """Snapshot of the settings needed to build one backend client."""

    model_config = ConfigDict(frozen=True)

    kind: BackendKind | str = Field(description="Backend identifier")
    api_key: str = Field(default="", description="API key for cloud backends")
    url: str = Field(default="", description="Server URL for local backends")
    model: str | None = Field(default=None, description="Model override (None uses backend default)")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)


class TutorSettings(BaseModel):
    """Mutable settings shared by all orchestrators of one session.

    Keys are kept per backend so switching backends does not lose the
    value entered for the other one.
    """

    model_config = ConfigDict(validate_assignment=True)

    backend: BackendKind | str = BackendKind.OLLAMA
    url: str = DEFAULT_OLLAMA_URL
    api_keys: dict[str, str] = Field(default_factory=dict)
    models: dict[str, str] = Field(default_factory=dict)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    locale: str = DEFAULT_LOCALE

    @property
    def backend_value(self) -> str:
        return self.backend.value if isinstance(self.backend, BackendKind) else str(self.backend)

    @property
    def api_key(self) -> str:
        """API key of the currently selected backend."""
        return self.api_keys.get(self.backend_value, "")

    @api_key.setter
    def api_key(self, key: str) -> None:
        self.api_keys = {**self.api_keys, self.backend_value: key}

    @property
    def model(self) -> str | None:
        """Model override of the currently selected backend."""
        return self.models.get(self.backend_value)

    @model.setter
    def model(self, model: str | None) -> None:
        models = dict(self.models)
        if model:
            models[self.backend_value] = model
        else:
            models.pop(self.backend_value, None)
        self.models = models

    def set_backend(self, backend: BackendKind | str) -> None:
        """Select the backend; unknown values are accepted and rejected at call time."""
        value = backend.value if isinstance(backend, BackendKind) else str(backend).strip().lower()
        try:
            self.backend = BackendKind(value)
        except ValueError:
            self.backend = value

    def backend_config(self) -> BackendConfig:
        """Build the backend configuration for the current selection."""
        return BackendConfig(
            kind=self.backend,
            api_key=self.api_key,
            url=self.url,
            model=self.model,
            temperature=self.temperature,
        )


def load_settings() -> TutorSettings:
    """Create settings from environment variables.

    Environment variables:
        PEAT_BACKEND: Backend type (ollama, gemini, openai; default: ollama)
        OLLAMA_URL: Ollama server URL (default: http://localhost:11434)
        OLLAMA_MODEL: Ollama model (default: qwen3:8b)
        GEMINI_API_KEY: Gemini API key (for gemini backend)
        GEMINI_MODEL: Gemini model (default: gemini-2.5-flash)
        OPENAI_API_KEY: OpenAI API key (for openai backend)
        OPENAI_MODEL: OpenAI model (default: gpt-4o)
        PEAT_TEMPERATURE: Sampling temperature (default: 0.7)
        PEAT_LOCALE: Language of user-facing notices (zh-TW or en; default: zh-TW)

    Raises:
        ConfigurationError: If PEAT_TEMPERATURE is not a number in range
    """
    api_keys = {}
    models = {}
    for kind in BackendKind:
        prefix = kind.value.upper()
        key = os.getenv(f"{prefix}_API_KEY")
        if key:
            api_keys[kind.value] = key
        model = os.getenv(f"{prefix}_MODEL")
        if model:
            models[kind.value] = model

    temperature = os.getenv("PEAT_TEMPERATURE", "0.7")
    try:
        settings = TutorSettings(
            url=os.getenv("OLLAMA_URL", DEFAULT_OLLAMA_URL),
            api_keys=api_keys,
            models=models,
            temperature=temperature,
            locale=os.getenv("PEAT_LOCALE", DEFAULT_LOCALE),
        )
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid PEAT_TEMPERATURE {temperature!r}: expected a number between 0.0 and 2.0"
        ) from e
    settings.set_backend(os.getenv("PEAT_BACKEND", BackendKind.OLLAMA.value))
    return settings
