"""Tutoring core: response parsing and the analysis/conversation orchestrators."""

from .analysis import AnalysisOrchestrator
from .conversation import CONTEXT_WINDOW_SIZE, ConversationOrchestrator, PendingTurn
from .messages import MESSAGES, WELCOME_MESSAGE, TutorMessages, get_messages
from .models import AnalysisResult, ChatHistory, TurnStatus
from .parser import parse_analysis, parse_reply
from .session import TutorSession

__all__ = [
    "AnalysisOrchestrator",
    "AnalysisResult",
    "CONTEXT_WINDOW_SIZE",
    "ChatHistory",
    "ConversationOrchestrator",
    "MESSAGES",
    "PendingTurn",
    "TurnStatus",
    "TutorMessages",
    "TutorSession",
    "WELCOME_MESSAGE",
    "get_messages",
    "parse_analysis",
    "parse_reply",
]
