"""Exception hierarchy for peat.

Configuration and backend errors are raised by the model client layer and
converted into sentinel values at the orchestrator boundary. They never reach
the presentation layer as unhandled exceptions.
"""


class PeatError(Exception):
    """Base class for all peat errors."""


class ConfigurationError(PeatError, ValueError):
    """Backend settings are missing or malformed.

    Raised before any network call is attempted.
    """


class BackendError(PeatError):
    """The chat completion call itself failed (network, auth, quota, ...)."""

    def __init__(self, message: str, backend: str | None = None):
        super().__init__(message)
        self.backend = backend


class AnalysisParseError(PeatError):
    """Analysis output lacks the fields required to start a conversation."""


class TurnInProgressError(PeatError, RuntimeError):
    """A chat turn was submitted while another one is still awaiting a reply."""


class SessionNotReadyError(PeatError, RuntimeError):
    """A chat turn was submitted before a usable analysis was available."""


def describe_error(error: BaseException) -> str:
    """Short description of an error for display to the user."""
    return str(error) or type(error).__name__
