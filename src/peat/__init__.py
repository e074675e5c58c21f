"""
PEAT: Proactive English Article Tutor.

Paste an English article, get a summary and conversation starters, then
practice English by chatting with an LLM tutor about it.
"""

__version__ = "0.1.0"

from .config import BackendConfig, BackendKind, TutorSettings, load_settings
from .errors import (
    AnalysisParseError,
    BackendError,
    ConfigurationError,
    PeatError,
    SessionNotReadyError,
    TurnInProgressError,
)
from .tutor import AnalysisResult, ChatHistory, TurnStatus, TutorSession

__all__ = [
    "AnalysisParseError",
    "AnalysisResult",
    "BackendConfig",
    "BackendError",
    "BackendKind",
    "ChatHistory",
    "ConfigurationError",
    "PeatError",
    "SessionNotReadyError",
    "TurnInProgressError",
    "TurnStatus",
    "TutorSession",
    "TutorSettings",
    "load_settings",
]
