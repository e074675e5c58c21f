from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MessageRole(str, Enum):
    """Role tag of a chat message."""

    SYSTEM = "system"
    HUMAN = "human"
    AI = "ai"


class ChatMessage(BaseModel):
    """Represents a chat message in a conversation.

    Messages are immutable once created; history only ever grows by
    appending new instances.
    """

    model_config = ConfigDict(frozen=True)

    role: MessageRole = Field(description="Role of the message sender: 'system', 'human' or 'ai'")
    content: str = Field(description="Content of the message")

    @classmethod
    def system(cls, content: str) -> "ChatMessage":
        return cls(role=MessageRole.SYSTEM, content=content)

    @classmethod
    def human(cls, content: str) -> "ChatMessage":
        return cls(role=MessageRole.HUMAN, content=content)

    @classmethod
    def ai(cls, content: str) -> "ChatMessage":
        return cls(role=MessageRole.AI, content=content)


class LLMResponse(BaseModel):
    """Response from an LLM provider."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Generated text content")
    model: str = Field(description="Model that generated the response")
    usage: dict[str, int] | None = Field(
        default=None,
        description="Token usage information"
    )
