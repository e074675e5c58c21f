import logging
from collections.abc import Callable

from ..errors import describe_error
from ..llm.base import LLMProvider
from ..llm.models import ChatMessage
from ..prompts import analysis_prompt
from .messages import DEFAULT_MESSAGES, TutorMessages
from .models import AnalysisResult
from .parser import parse_analysis

logger = logging.getLogger(__name__)


class AnalysisOrchestrator:
    """One-shot article analysis.

    Builds the analysis prompt, invokes the backend once and parses the
    summary and starters. Failures never propagate: they come back as a
    sentinel result whose summary describes the failure and whose starters
    list is empty.
    """

    def __init__(
        self,
        provider_factory: Callable[[], LLMProvider],
        messages: TutorMessages = DEFAULT_MESSAGES,
    ):
        """Initialize the orchestrator.

        Args:
            provider_factory: Builds a provider from the current settings;
                may raise ConfigurationError
            messages: Localized notices
        """
        self._provider_factory = provider_factory
        self._messages = messages

    async def analyze(self, article: str) -> AnalysisResult:
        """Analyze an article.

        Args:
            article: Article text

        Returns:
            AnalysisResult; ``is_usable`` is False when the analysis failed
        """
        try:
            request = [ChatMessage.human(analysis_prompt(article))]
            async with self._provider_factory() as provider:
                reply = await provider.invoke(request)
            logger.debug("Analysis response: %s", reply.content)
            result = parse_analysis(reply.content, self._messages)
        except Exception as e:
            logger.error("Analysis error: %s", e, exc_info=True)
            return AnalysisResult(
                summary=self._messages.analysis_error(describe_error(e)),
                starters=[],
            )

        logger.info("Analysis produced %d starter(s)", len(result.starters))
        return result
