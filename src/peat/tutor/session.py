"""Tutor session: the state a presentation layer renders.

A session ties one settings object to the analysis and conversation
orchestrators and exposes the current analysis result, the chat history
and the two loading flags. Presentation layers read these and call
``analyze`` / ``send_message``; they never touch the orchestrators' state
directly.
"""

import logging

from ..config import TutorSettings
from ..errors import SessionNotReadyError
from ..llm.base import LLMProvider
from ..llm.factory import create_provider_from_config
from ..llm.models import ChatMessage
from .analysis import AnalysisOrchestrator
from .conversation import CONTEXT_WINDOW_SIZE, ConversationOrchestrator, PendingTurn
from .messages import get_messages
from .models import AnalysisResult, ChatHistory

logger = logging.getLogger(__name__)


class TutorSession:
    """State of one tutoring session.

    Providers are built from the settings at call time, so changes made to
    the settings take effect on the next backend call.

    Each analysis is tagged with a generation number; a result arriving
    after a newer analysis was started is dropped instead of overwriting
    the newer state.
    """

    def __init__(self, settings: TutorSettings, window_size: int = CONTEXT_WINDOW_SIZE):
        self.settings = settings
        self.messages = get_messages(settings.locale)
        self._analysis = AnalysisOrchestrator(self._create_provider, messages=self.messages)
        self._conversation = ConversationOrchestrator(
            self._create_provider,
            window_size=window_size,
            messages=self.messages,
        )
        self._analysis_result: AnalysisResult | None = None
        self._analysis_generation = 0
        self._is_analysis_loading = False

    def _create_provider(self) -> LLMProvider:
        return create_provider_from_config(self.settings.backend_config())

    @property
    def article(self) -> str:
        return self._conversation.article

    @property
    def analysis_result(self) -> AnalysisResult | None:
        return self._analysis_result

    @property
    def history(self) -> ChatHistory:
        return self._conversation.history

    @property
    def is_analysis_loading(self) -> bool:
        return self._is_analysis_loading

    @property
    def is_chat_loading(self) -> bool:
        return self._conversation.is_awaiting_reply

    @property
    def is_ready(self) -> bool:
        """Whether chat turns may be sent."""
        return (
            not self._is_analysis_loading
            and self._analysis_result is not None
            and self._analysis_result.is_usable
        )

    def begin_analysis(self, article: str) -> int:
        """Make ``article`` the subject of the chat and enter the loading state.

        Returns:
            Generation number to pass to ``complete_analysis``
        """
        self._analysis_generation += 1
        self._is_analysis_loading = True
        self._analysis_result = None
        self._conversation.article = article
        return self._analysis_generation

    async def complete_analysis(self, generation: int, article: str) -> AnalysisResult | None:
        """Run the analysis started by ``begin_analysis``.

        Returns:
            The result, or None if a newer analysis superseded this one
        """
        try:
            result = await self._analysis.analyze(article)
        finally:
            if generation == self._analysis_generation:
                self._is_analysis_loading = False

        if generation != self._analysis_generation:
            logger.info("Discarding result of a superseded analysis")
            return None

        self._analysis_result = result
        return result

    async def analyze(self, article: str) -> AnalysisResult | None:
        """Analyze a new article and make it the subject of the chat.

        Returns:
            The result, or None if a newer analysis superseded this one
        """
        generation = self.begin_analysis(article)
        return await self.complete_analysis(generation, article)

    def begin_turn(self, text: str) -> PendingTurn:
        """Append the user's message right away; see ``complete_turn``.

        Raises:
            SessionNotReadyError: If there is no usable analysis yet
            TurnInProgressError: If a turn is already awaiting its reply
        """
        if not self.is_ready:
            raise SessionNotReadyError("Analyze an article before chatting")
        return self._conversation.begin_turn(text)

    async def complete_turn(self, turn: PendingTurn) -> ChatMessage | None:
        return await self._conversation.complete_turn(turn)

    async def send_message(self, text: str) -> ChatMessage | None:
        """Send a chat message and wait for the reply.

        Raises:
            SessionNotReadyError: If there is no usable analysis yet
            TurnInProgressError: If a turn is already awaiting its reply
        """
        turn = self.begin_turn(text)
        return await self.complete_turn(turn)

    def reset_conversation(self) -> None:
        """Clear the chat history back to the welcome message."""
        self._conversation.reset()
