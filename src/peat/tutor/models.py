"""Data models for tutoring state.

These models define the analysis result and the chat history owned by the
orchestrators, independent of how a presentation layer renders them.
"""

from collections.abc import Iterator
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..llm.models import ChatMessage
from .messages import WELCOME_MESSAGE


class TurnStatus(str, Enum):
    """State of the conversation orchestrator."""

    IDLE = "idle"
    AWAITING_REPLY = "awaiting-reply"


class AnalysisResult(BaseModel):
    """Summary and conversation starters for an article.

    A result with no starters is the sentinel for a failed analysis;
    its summary then carries the failure description.
    """

    model_config = ConfigDict(frozen=True)

    summary: str = Field(description="One-sentence summary or failure description")
    starters: list[str] = Field(default_factory=list, description="Conversation starters in order")

    @property
    def is_usable(self) -> bool:
        """Whether the conversation can start from this result."""
        return bool(self.starters)


class ChatHistory:
    """Ordered, append-only sequence of chat messages.

    The first element is always the AI welcome message. Messages are never
    reordered or replaced; ``reset`` starts a fresh history.
    """

    def __init__(self, welcome: str = WELCOME_MESSAGE):
        self._welcome = welcome
        self._messages: list[ChatMessage] = [ChatMessage.ai(welcome)]

    def append(self, message: ChatMessage) -> None:
        self._messages.append(message)

    def window(self, size: int) -> list[ChatMessage]:
        """Return the most recent ``size`` messages, oldest first."""
        if size <= 0:
            return []
        return list(self._messages[-size:])

    def reset(self) -> None:
        """Drop everything but a new welcome message."""
        self._messages = [ChatMessage.ai(self._welcome)]

    @property
    def messages(self) -> list[ChatMessage]:
        """Snapshot copy of the messages."""
        return list(self._messages)

    @property
    def last(self) -> ChatMessage:
        return self._messages[-1]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(list(self._messages))

    def __getitem__(self, index):
        return self._messages[index]

    def __repr__(self) -> str:
        return f"ChatHistory({len(self._messages)} messages)"
