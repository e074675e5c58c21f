"""Parsing of semi-structured model output.

Models, especially small local ones, follow output-format instructions
loosely. Analysis parsing fails only when the conversation starters are
missing; reply parsing never fails and degrades to a best-effort string.
"""

import logging
import re

from ..errors import AnalysisParseError
from .messages import DEFAULT_MESSAGES, TutorMessages
from .models import AnalysisResult

logger = logging.getLogger(__name__)

SUMMARY_PATTERN = re.compile(r"SUMMARY:[ \t]*(.*)")
STARTER_PATTERN = re.compile(r"STARTER[ \t]*\d+[ \t]*:[ \t]*(.*)")

RESPONSE_MARKER = "RESPONSE:"
REASONING_CLOSE_MARKER = "</think>"


def parse_analysis(text: str, messages: TutorMessages = DEFAULT_MESSAGES) -> AnalysisResult:
    """Extract the summary and conversation starters from analysis output.

    A blank ``SUMMARY:`` line counts as missing and gets the fallback, and
    blank ``STARTER <n>:`` lines are skipped rather than kept as empty starters.

    Args:
        text: Raw model output
        messages: Notices used for the summary fallback and the error

    Returns:
        AnalysisResult with at least one starter

    Raises:
        AnalysisParseError: If no ``STARTER <n>:`` line is present, even when
            the summary was found
    """
    summary_match = SUMMARY_PATTERN.search(text)
    summary = summary_match.group(1).strip() if summary_match else ""
    if not summary:
        logger.warning("No SUMMARY line in analysis output")
        summary = messages.summary_fallback

    starters = [
        starter
        for starter in (match.group(1).strip() for match in STARTER_PATTERN.finditer(text))
        if starter
    ]
    if not starters:
        raise AnalysisParseError(messages.starters_missing)

    return AnalysisResult(summary=summary, starters=starters)


def _last_non_empty_line(text: str) -> str:
    for line in reversed(text.splitlines()):
        if line.strip():
            return line.strip()
    return ""


def parse_reply(text: str) -> str:
    """Extract the user-facing reply from conversation output.

    Fallback chain:
    1. Payload of the last ``RESPONSE:`` marker, or of the closest earlier
       one when later payloads are empty
    2. Text after the last ``</think>`` marker, before any ``RESPONSE:``
    3. Last non-empty line before any ``RESPONSE:``

    The marker itself is never part of the reply.

    Args:
        text: Raw model output

    Returns:
        Trimmed reply text ("" for blank input or bare markers)
    """
    if not text or not text.strip():
        return ""

    head, *payloads = text.split(RESPONSE_MARKER)
    for payload in reversed(payloads):
        if payload.strip():
            return payload.strip()

    if payloads:
        logger.warning("RESPONSE markers have empty payloads, using fallback")
    else:
        logger.warning("Cannot parse AI response, using final response")

    if REASONING_CLOSE_MARKER in head:
        reply = head.rsplit(REASONING_CLOSE_MARKER, 1)[1].strip()
        if reply:
            return reply

    return _last_non_empty_line(head)
