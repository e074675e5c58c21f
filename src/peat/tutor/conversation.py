import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..errors import TurnInProgressError, describe_error
from ..llm.base import LLMProvider
from ..llm.models import ChatMessage
from ..prompts import conversation_prompt
from .messages import DEFAULT_MESSAGES, TutorMessages
from .models import ChatHistory, TurnStatus
from .parser import parse_reply

logger = logging.getLogger(__name__)

# Number of prior history messages sent to the backend with each turn
CONTEXT_WINDOW_SIZE = 10


@dataclass(frozen=True)
class PendingTurn:
    """A turn whose human message is in the history but whose reply is not."""

    human: ChatMessage
    context: list[ChatMessage] = field(default_factory=list)
    generation: int = 0


class ConversationOrchestrator:
    """Chat turns about the current article.

    Owns the chat history and a two-state machine (idle, awaiting-reply).
    A turn appends the human message immediately, then appends exactly one
    AI message when the backend answers or fails, and always returns to
    idle. Only the most recent ``window_size`` messages preceding the new
    human message are sent to the backend, after a system message built
    fresh from the conversation template.
    """

    def __init__(
        self,
        provider_factory: Callable[[], LLMProvider],
        window_size: int = CONTEXT_WINDOW_SIZE,
        messages: TutorMessages = DEFAULT_MESSAGES,
    ):
        """Initialize the orchestrator.

        Args:
            provider_factory: Builds a provider from the current settings;
                may raise ConfigurationError
            window_size: Number of prior messages kept in backend context
            messages: Localized notices
        """
        self._provider_factory = provider_factory
        self._window_size = window_size
        self._messages = messages
        self._history = ChatHistory(messages.welcome)
        self._status = TurnStatus.IDLE
        self._generation = 0
        self.article = ""

    @property
    def history(self) -> ChatHistory:
        return self._history

    @property
    def status(self) -> TurnStatus:
        return self._status

    @property
    def is_awaiting_reply(self) -> bool:
        return self._status is TurnStatus.AWAITING_REPLY

    @property
    def window_size(self) -> int:
        return self._window_size

    def begin_turn(self, text: str) -> PendingTurn:
        """Append the human message and enter awaiting-reply.

        Runs synchronously so the message is visible before the reply.

        Raises:
            TurnInProgressError: If a turn is already awaiting its reply
        """
        if self.is_awaiting_reply:
            raise TurnInProgressError("A message is already waiting for a reply")

        context = self._history.window(self._window_size)
        human = ChatMessage.human(text)
        self._history.append(human)
        self._status = TurnStatus.AWAITING_REPLY
        return PendingTurn(human=human, context=context, generation=self._generation)

    def build_request(self, turn: PendingTurn) -> list[ChatMessage]:
        """Messages sent to the backend for a turn."""
        return [
            ChatMessage.system(conversation_prompt(self.article)),
            *turn.context,
            turn.human,
        ]

    async def complete_turn(self, turn: PendingTurn) -> ChatMessage | None:
        """Get the reply for a pending turn and append it.

        Any failure is turned into an AI message carrying the error
        description.

        Returns:
            The appended AI message, or None if the turn was superseded by
            ``reset`` while waiting
        """
        try:
            try:
                request = self.build_request(turn)
                async with self._provider_factory() as provider:
                    reply = await provider.invoke(request)
                logger.debug("AI response: %s", reply.content)
                ai_message = ChatMessage.ai(parse_reply(reply.content))
            except Exception as e:
                logger.error("Chat error: %s", e, exc_info=True)
                ai_message = ChatMessage.ai(self._messages.chat_error(describe_error(e)))

            if turn.generation != self._generation:
                logger.info("Discarding reply to a superseded turn")
                return None

            self._history.append(ai_message)
            return ai_message
        finally:
            if turn.generation == self._generation:
                self._status = TurnStatus.IDLE

    async def send_message(self, text: str) -> ChatMessage | None:
        """Run a full turn: append the human message, then the reply.

        Raises:
            TurnInProgressError: If a turn is already awaiting its reply
        """
        turn = self.begin_turn(text)
        return await self.complete_turn(turn)

    def reset(self) -> None:
        """Start a fresh history; replies still in flight are discarded."""
        self._generation += 1
        self._history.reset()
        self._status = TurnStatus.IDLE
